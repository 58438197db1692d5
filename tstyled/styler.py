"""
A minimal styling function.

It composes class names from tokens and resolves callable tokens with its
own context. It does not compile CSS or manage a stylesheet; swap it for a
real styling engine via `bind(..., tw=...)`.
"""

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from string.templatelib import Interpolation, Template

from .identity import hash_class
from .protocols import Selectable


CONVERTERS: dict[str, Callable[[object], str]] = {"r": repr, "s": str, "a": ascii}


@dataclass(frozen=True)
class StylingContext:
    tw: Callable[..., str]
    theme: Callable[..., object]
    tag: Callable[[str], str]


_MISSING = object()


class Styler:
    """Compose class names from tokens: `styler("flex", {"sm": "block"})`."""

    def __init__(
        self,
        theme: Mapping[str, object] | None = None,
        variant_separator: str = ":",
        hash: Callable[[str], str] = hash_class,
    ):
        self.theme_values = dict(theme or {})
        self.variant_separator = variant_separator
        self.hash = hash
        self._context = StylingContext(tw=self, theme=self.theme, tag=self.tag)

    def __call__(self, *tokens: object) -> str:
        return " ".join(dict.fromkeys(self.compose(tokens)))

    def get_context(self) -> StylingContext:
        return self._context

    def theme(self, section: str, key: str | None = None, default: object = None):
        """Read a theme value, `key` may be a dotted path into the section."""
        value = self.theme_values.get(section, _MISSING)
        if key is not None:
            for part in key.split("."):
                if not isinstance(value, Mapping):
                    return default
                value = value.get(part, _MISSING)
        return default if value is _MISSING else value

    def tag(self, name: str) -> str:
        """Get a stable marker class name for `name`."""
        return self.hash(name)

    def compose(self, token: object, variant: str = "") -> Iterator[str]:
        """Flatten a token into class names prefixed by the active variant."""
        match token:
            case None | bool():
                return
            case str():
                yield from (variant + cn for cn in token.split())
            case Template():
                yield from (variant + cn for cn in self._format_template(token).split())
            case Mapping():
                for key, value in token.items():
                    yield from self.compose(
                        value, f"{variant}{key}{self.variant_separator}"
                    )
            case Selectable():
                raise TypeError(
                    f"Cannot use {token!r} as a class token, interpolate it into a template instead"
                )
            case _ if callable(token):
                yield from self.compose(token(self._context), variant)
            case Iterable():
                for item in token:
                    yield from self.compose(item, variant)
            case _:
                raise TypeError(f"Unknown style token: {token!r}")

    def _format_interpolation(self, ip: Interpolation) -> str:
        value = ip.value
        match value:
            case None | False:
                return ""
            case str():
                pass
            case Selectable():
                return str(value)
            case Template() | Mapping():
                return " ".join(self.compose(value))
            case _ if callable(value):
                return self._format_interpolation(
                    Interpolation(
                        value(self._context),
                        ip.expression,
                        ip.conversion,
                        ip.format_spec,
                    )
                )
            case list() | tuple():
                return " ".join(self.compose(value))
        if ip.conversion:
            value = CONVERTERS[ip.conversion](value)
        return format(value, ip.format_spec)

    def _format_template(self, template: Template) -> str:
        return "".join(
            part if isinstance(part, str) else self._format_interpolation(part)
            for part in template
        )


tw = Styler()
