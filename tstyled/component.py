import typing as t
from collections.abc import Mapping

from .binding import StyledContext
from .build import Token, build
from .identity import serialize


CLASS_NAME = "className"


def join_class_names(*segments: object) -> str:
    return " ".join(str(segment) for segment in segments if segment)


def get_display_name(tag: object) -> str:
    if callable(tag):
        name = getattr(tag, "display_name", None) or getattr(tag, "__name__", None)
    else:
        name = tag
    return f"Styled({name or 'Component'})"


class StyledComponent:
    """
    A tag, or another component, bound to a list of style tokens.

    Calling it renders the tag with a merged `className` holding the marker
    class of this component followed by the evaluated tokens.

    `str()` and `to_json()` return the marker class as a selector (`.tw-xxx`)
    so components can target each other in styles.
    """

    def __init__(self, context: StyledContext, tag: object, tokens: t.Sequence[Token]):
        if context.tw is None or context.hash is None or context.create_element is None:
            raise TypeError("Styled components need a complete StyledContext.")
        self.tag = tag
        self.tokens = tuple(tokens)
        self.class_name = context.hash(serialize(tag, self.tokens))
        self.display_name = get_display_name(tag)
        self.default_props = (
            getattr(tag, "default_props", None) if callable(tag) else None
        )
        self._evaluate = build(context.tw, self.tokens)
        self._create_element = context.create_element
        self._forwards_ref = context.forward_ref is not None
        # Components get `as` passed along, the innermost tag is the one to swap.
        self._forwards_as = callable(tag)
        if context.forward_ref is not None:
            self._renderer = context.forward_ref(self.render)
        else:
            self._renderer = self.render

    def render(self, props: Mapping[str, object], ref: object = None) -> object:
        props = dict(props)
        as_tag = props.pop("as", None)
        class_value = props.pop("class", None)
        class_name = props.get(CLASS_NAME)
        props[CLASS_NAME] = join_class_names(
            class_value,
            class_name if class_name != class_value else None,
            self.class_name,
            self._evaluate(props),
        )

        if self._forwards_ref:
            props["ref"] = ref

        if self._forwards_as:
            if as_tag is not None:
                props["as"] = as_tag
            as_tag = self.tag
        elif as_tag is None:
            as_tag = self.tag

        return self._create_element(as_tag, props)

    def __call__(
        self, props: Mapping[str, object] | None = None, /, *args: object, **kwargs: object
    ) -> object:
        merged = {**props, **kwargs} if props else kwargs
        return self._renderer(merged, *args)

    def __selector__(self) -> str:
        return f".{self.class_name}"

    def to_json(self) -> str:
        return self.__selector__()

    def __str__(self) -> str:
        return self.__selector__()

    def __repr__(self) -> str:
        return f"<{self.display_name} {self.__selector__()}>"


def create(context: StyledContext, tag: object, tokens: t.Sequence[Token]) -> StyledComponent:
    return StyledComponent(context, tag, tokens)
