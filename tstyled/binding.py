import dataclasses
import logging
import typing as t
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .context import clear_context_cache
from .errors import ConfigurationError
from .identity import hash_class
from .protocols import ForwardRef, Hasher, Pragma, StylingFunction
from .styler import tw as default_tw


logger = logging.getLogger(__name__)


def missing_create_element(type_: object, props: object, *children: object) -> t.NoReturn:
    raise ConfigurationError(
        "Missing create_element. Call bind() or styled.bind() before rendering a styled component."
    )


@dataclass(frozen=True)
class StyledContext:
    """
    What a styled component renders with.

    create_element
        The rendering primitive, `create_element(type, props, *children)`.
    forward_ref
        Optional, wraps a render function so it receives `(props, ref)`.
    tw
        The styling function that turns tokens into class names.
    hash
        Turns the canonical text of a definition into its marker class name.
    """

    create_element: Pragma | None = None

    forward_ref: ForwardRef | None = None

    tw: StylingFunction | None = None

    hash: Hasher | None = None


type ContextLike = StyledContext | Mapping[str, object] | Pragma


FIELD_NAMES = frozenset(field.name for field in dataclasses.fields(StyledContext))


def _as_partial(context: ContextLike, tw: StylingFunction | None) -> dict[str, object]:
    """Collect the fields a context-like value explicitly provides."""
    match context:
        case StyledContext():
            partial = {
                name: getattr(context, name)
                for name in FIELD_NAMES
                if getattr(context, name) is not None
            }
        case Mapping():
            unknown = context.keys() - FIELD_NAMES
            if unknown:
                raise TypeError(f"Unknown styled context fields: {', '.join(sorted(unknown))}")
            partial = dict(context)
        case _ if callable(context):
            partial = {"create_element": context}
        case _:
            raise TypeError(
                f"Cannot bind {type(context).__name__}, expected a StyledContext, a mapping or a create_element callable"
            )
    if tw is not None:
        partial["tw"] = tw
    return partial


def create_styled_context(
    context: ContextLike,
    tw: StylingFunction | None = None,
    fallback_tw: StylingFunction | None = None,
) -> StyledContext:
    """Make a complete context, a missing `tw` falls back to `fallback_tw`."""
    partial = _as_partial(context, tw)
    defaults = {
        "create_element": missing_create_element,
        "tw": fallback_tw,
        "hash": hash_class,
    }
    for name, default in defaults.items():
        if partial.get(name) is None:
            partial[name] = default
    return StyledContext(**partial)


class DefaultBinding:
    """
    The process-wide binding used by `styled` itself.

    Bind a rendering primitive before any default bound component is
    rendered. Every `bind()` is layered over the previous ones, only
    `reset()` starts over.
    """

    context: StyledContext

    def __init__(self):
        self.reset()

    def bind(self, context: ContextLike, tw: StylingFunction | None = None) -> None:
        """Shallow merge the given context over the current one."""
        partial = _as_partial(context, tw)
        if "tw" in partial and partial["tw"] is not self.context.tw:
            clear_context_cache()
        self.context = dataclasses.replace(self.context, **partial)
        logger.debug("Rebound default styled context: %r", self.context)

    def reset(self) -> None:
        self.context = StyledContext(
            create_element=missing_create_element, tw=default_tw, hash=hash_class
        )
        clear_context_cache()
        logger.debug("Reset default styled context.")


default_binding = DefaultBinding()

bind: Callable[..., None] = default_binding.bind

reset: Callable[[], None] = default_binding.reset
