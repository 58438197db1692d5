from .binding import StyledContext, bind, create_styled_context, default_binding, reset
from .build import DeferredToken, LiteralToken, PropsView, build
from .component import StyledComponent, create
from .context import get_context
from .errors import ConfigurationError
from .identity import hash_class, serialize
from .nodes import Element, Ref, forward_ref, h, render_node
from .styled import styled
from .styler import Styler, StylingContext, tw
from .tags import TAGS, register_tags, with_tags

__all__ = [
    "ConfigurationError",
    "DeferredToken",
    "Element",
    "LiteralToken",
    "PropsView",
    "Ref",
    "StyledComponent",
    "StyledContext",
    "Styler",
    "StylingContext",
    "TAGS",
    "bind",
    "build",
    "create",
    "create_styled_context",
    "default_binding",
    "forward_ref",
    "get_context",
    "h",
    "hash_class",
    "register_tags",
    "render_node",
    "reset",
    "serialize",
    "styled",
    "tw",
    "with_tags",
]
