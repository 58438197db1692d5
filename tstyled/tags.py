import functools
import keyword
from collections.abc import Callable


# Extend with `register_tags()`.
TAGS: set[str] = {
    "a", "abbr", "address", "area", "article", "aside", "audio",
    "b", "base", "bdi", "bdo", "big", "blockquote", "body", "br", "button",
    "canvas", "caption", "cite", "code", "col", "colgroup",
    "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl", "dt",
    "em", "embed",
    "fieldset", "figcaption", "figure", "footer", "form",
    "h1", "h2", "h3", "h4", "h5", "h6", "head", "header", "hgroup", "hr", "html",
    "i", "iframe", "img", "input", "ins",
    "kbd", "keygen",
    "label", "legend", "li", "link",
    "main", "map", "mark", "marquee", "menu", "menuitem", "meta", "meter",
    "nav", "noscript",
    "object", "ol", "optgroup", "option", "output",
    "p", "param", "picture", "pre", "progress",
    "q",
    "rp", "rt", "ruby",
    "s", "samp", "script", "section", "select", "small", "source", "span",
    "strong", "style", "sub", "summary", "sup",
    "table", "tbody", "td", "textarea", "tfoot", "th", "thead", "time", "title",
    "tr", "track",
    "u", "ul",
    "var", "video",
    "wbr",
    # SVG
    "circle", "clipPath", "defs", "ellipse", "foreignObject", "g", "image",
    "line", "linearGradient", "mask", "path", "pattern", "polygon", "polyline",
    "radialGradient", "rect", "stop", "svg", "text", "tspan",
}  # fmt: skip


def register_tags(*names: str) -> None:
    TAGS.update(names)


def tag_for_name(name: str) -> str | None:
    """
    Map an attribute name to a tag in the vocabulary.

    Python keywords cannot be attribute names, so `del_` means `del`.
    """
    if name in TAGS:
        return name
    if name.endswith("_") and keyword.iskeyword(name[:-1]) and name[:-1] in TAGS:
        return name[:-1]
    return None


class WithTags:
    """
    Expose every tag in the vocabulary as a shorthand of an entry point.

    `surface.button(*tokens)` is `entry("button", *tokens)`. Any other
    attribute is looked up on the entry point itself.
    """

    def __init__(self, entry: Callable[..., object]):
        self._entry = entry
        functools.update_wrapper(self, entry, updated=())

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self._entry(*args, **kwargs)

    def __getattr__(self, name: str) -> object:
        if name.startswith("_") and not name.endswith("_"):
            raise AttributeError(name)
        if name != "bind" and (tag := tag_for_name(name)) is not None:
            entry = self._entry

            def styled_tag(*tokens: object) -> object:
                return entry(tag, *tokens)

            styled_tag.__name__ = styled_tag.__qualname__ = tag
            return styled_tag
        return getattr(self._entry, name)

    def __dir__(self):
        return sorted(set(super().__dir__()) | TAGS)


def with_tags(entry: Callable[..., object]) -> WithTags:
    return WithTags(entry)
