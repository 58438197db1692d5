from collections.abc import Callable

from .binding import ContextLike, StyledContext, create_styled_context, default_binding
from .build import Token
from .component import StyledComponent, create
from .protocols import StylingFunction
from .tags import WithTags, with_tags


type PartialStyled = Callable[..., StyledComponent]


def make_styled(get_context: Callable[[], StyledContext]) -> Callable[..., object]:
    """
    Make an entry point that styles a tag with the context from `get_context`.

    `entry(tag, *tokens)` returns a component, `entry(tag)` returns a
    function that takes the tokens later.
    """

    def styled(tag: object, *tokens: Token) -> StyledComponent | PartialStyled:
        context = get_context()
        if tokens:
            return create(context, tag, tokens)

        def partial_styled(*tokens: Token) -> StyledComponent:
            return create(context, tag, tokens)

        return partial_styled

    return styled


def bind_styled(context: ContextLike, tw: StylingFunction | None = None) -> WithTags:
    """
    Make a `styled` that always uses the given context.

    The default binding is left untouched. Without a `tw` the one of the
    default binding, as it is right now, is used.
    """
    scoped = create_styled_context(context, tw, fallback_tw=default_binding.context.tw)
    return with_tags(make_styled(lambda: scoped))


_styled = make_styled(lambda: default_binding.context)
_styled.bind = bind_styled  # type: ignore[attr-defined]

styled = with_tags(_styled)
