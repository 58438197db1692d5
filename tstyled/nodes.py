"""
A small element tree to render styled components to HTML.

`h` is a rendering primitive that can be bound with `bind(h)`:

```python
bind(StyledContext(create_element=h, forward_ref=forward_ref))
Button = styled.button("px-4 py-2")
assert str(h(Button, {"class": "hero"}, "Go")) == (
    f'<button class="hero {Button.class_name} px-4 py-2">Go</button>'
)
```
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from markupsafe import Markup, escape

from .callables import CallableInfo, get_callable_info
from .protocols import HasHTMLDunder


VOID_ELEMENTS = frozenset(
    [
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    ]
)


# Props that never become HTML attributes.
SYSTEM_PROPS = frozenset(("children", "ref", "key"))


type HTMLAttributesDict = dict[str, str | None]


@dataclass
class Ref:
    current: object = None


@dataclass(frozen=True)
class Element:
    type: object
    props: Mapping[str, object] = field(default_factory=dict)
    children: tuple[object, ...] = ()

    def __html__(self) -> str:
        return render_node(self)

    def __str__(self) -> str:
        return self.__html__()


def h(type_: object, props: Mapping[str, object] | None = None, *children: object) -> Element:
    """Create an element, `h("a", {"href": "/"}, "Home")`."""
    return Element(type=type_, props=dict(props or {}), children=children)


def forward_ref(render: Callable[..., object]) -> Callable[..., object]:
    """Pass a `ref` prop to `render` as its second argument instead."""

    def forwarded(props: Mapping[str, object], ref: object = None) -> object:
        if ref is None and "ref" in props:
            props = dict(props)
            ref = props.pop("ref")
        return render(props, ref)

    return forwarded


def _kebab_to_snake(name: str) -> str:
    return name.replace("-", "_").lower()


def _prep_component_kwargs(
    callable_info: CallableInfo, props: Mapping[str, object]
) -> dict[str, object]:
    if callable_info.requires_positional:
        raise TypeError("Component callables cannot have required positional arguments.")

    kwargs: dict[str, object] = {}
    for name, value in props.items():
        if callable_info.kwargs:
            kwargs[name] = value
        elif (snake_name := _kebab_to_snake(name)) in callable_info.named_params:
            kwargs[snake_name] = value

    missing = callable_info.required_named_params - kwargs.keys()
    if missing:
        raise TypeError(
            f"Missing required parameters for component: {', '.join(sorted(missing))}"
        )
    return kwargs


def _invoke_component(component: Callable[..., object], element: Element) -> object:
    """
    Call a component with its props as keyword arguments.

    Default props are merged in underneath and the element children, if
    any, are passed as `children`.
    """
    props = {**(getattr(component, "default_props", None) or {}), **element.props}
    if element.children:
        props["children"] = element.children
    return component(**_prep_component_kwargs(get_callable_info(component), props))


def render_html_attrs(html_attrs: HTMLAttributesDict) -> str:
    return "".join(
        f' {k}="{escape(v)}"' if v is not None else f" {k}"
        for k, v in html_attrs.items()
    )


def to_html_attrs(props: Mapping[str, object]) -> HTMLAttributesDict:
    """Turn element props into HTML attributes."""
    html_attrs: HTMLAttributesDict = {}
    for key, value in props.items():
        if key in SYSTEM_PROPS:
            continue
        name = "class" if key == "className" else key
        match value:
            case True:
                html_attrs[name] = None
            case False | None:
                pass
            case _:
                html_attrs[name] = str(value)
    return html_attrs


def _attach_ref(ref: object, element: Element) -> None:
    if isinstance(ref, Ref):
        ref.current = element
    elif callable(ref):
        ref(element)
    elif ref is not None:
        raise TypeError(f"Cannot attach element to ref of type {type(ref).__name__}")


def _element_children(element: Element) -> Iterable[object]:
    children = element.props.get("children")
    if children is not None:
        yield children
    yield from element.children


def render_node(node: object) -> str:
    """Render a node, or anything that can be a child, into an HTML string."""
    bf: list[str] = []
    q: list[object] = [node]
    while q:
        node = q.pop()
        match node:
            case None | False | True:
                continue
            case str():
                bf.append(escape(node))
            case Element(type=str() as tag):
                _attach_ref(node.props.get("ref"), node)
                bf.append(f"<{tag}{render_html_attrs(to_html_attrs(node.props))}>")
                if tag not in VOID_ELEMENTS:
                    q.append(Markup(f"</{tag}>"))
                    q.extend(reversed(list(_element_children(node))))
            case Element(type=component) if callable(component):
                q.append(_invoke_component(component, node))
            case Element():
                raise TypeError(f"Unknown element type: {type(node.type).__name__}")
            case HasHTMLDunder():
                bf.append(node.__html__())
            case Iterable():
                q.extend(reversed(list(node)))
            case _:
                bf.append(escape(str(node)))
    return "".join(bf)
