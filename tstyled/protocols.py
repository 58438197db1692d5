import typing as t
from collections.abc import Callable


@t.runtime_checkable
class HasHTMLDunder(t.Protocol):
    def __html__(self) -> str: ...  # pragma: no cover


@t.runtime_checkable
class Selectable(t.Protocol):
    """Something that can be targeted as a CSS selector, ie. a styled component."""

    def __selector__(self) -> str: ...  # pragma: no cover


type StylingFunction = Callable[..., str]

type Pragma = Callable[..., object]

type ForwardRef = Callable[[Callable[..., object]], Callable[..., object]]

type Hasher = Callable[[str], str]


def is_function_token(value: object) -> bool:
    """Callables are function tokens unless they are styled components."""
    return callable(value) and not isinstance(value, Selectable)
