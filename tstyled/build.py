import logging
import typing as t
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from string.templatelib import Interpolation, Template

from .callables import get_callable_info
from .context import get_context
from .protocols import StylingFunction, is_function_token


logger = logging.getLogger(__name__)


# Names an inline plugin reads from the styling context.
RESERVED_ACCESSORS = frozenset(("tw", "theme", "tag"))


type Token = object

type Evaluate = Callable[[Mapping[str, object]], str]


class _ReservedAccess(Exception):
    """Abort a speculative evaluation, only ever raised by an auditing PropsView."""


class PropsView(Mapping[str, object]):
    """
    Read-only view of the render props handed to function tokens.

    Props can be read as items (`props["primary"]`) or attributes
    (`props.primary`).

    When auditing, reading one of the reserved accessors that is not an
    actual prop is recorded and aborts the evaluation: the function was
    expecting a styling context, not props.
    """

    __slots__ = ("_props", "_audit", "reserved_reads")

    def __init__(self, props: Mapping[str, object], audit: bool = False):
        self._props = props
        self._audit = audit
        self.reserved_reads: list[str] = []

    def __getitem__(self, key: str) -> object:
        if self._audit and key in RESERVED_ACCESSORS and key not in self._props:
            self.reserved_reads.append(key)
            raise _ReservedAccess(key)
        return self._props[key]

    def __getattr__(self, name: str) -> object:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name) from None

    def __contains__(self, key: object) -> bool:
        return key in self._props

    def __iter__(self) -> Iterator[str]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __repr__(self) -> str:
        return f"PropsView({self._props!r})"


@dataclass(frozen=True, slots=True)
class LiteralToken:
    """The function produced a token from props alone."""

    token: Token


@dataclass(frozen=True, slots=True)
class DeferredToken:
    """The token must be resolved by the styling function with its own context."""

    token: Token


type Resolution = LiteralToken | DeferredToken


def speculate(fn: Callable, arity: int, props: Mapping[str, object]) -> Resolution:
    """
    Try to call `fn` as a function of props.

    If it reaches for the styling context it is an inline plugin and is
    deferred to the styling function as is.
    """
    view = PropsView(props, audit=True)
    try:
        token = fn(view) if arity else fn()
    except _ReservedAccess:
        return DeferredToken(fn)
    if view.reserved_reads:
        # The abort was swallowed by the function itself.
        return DeferredToken(fn)
    return LiteralToken(token)


def _resolve_function(fn: Callable, arity: int) -> Callable[[Mapping, object], Token]:
    if arity > 1:
        # fn(props, context): let the styling function supply its own context.
        def resolve_factory(props: Mapping, context: object) -> Token:
            view = PropsView(props)
            return lambda engine_context: fn(view, engine_context)

        return resolve_factory

    def resolve_callback(props: Mapping, context: object) -> Token:
        match speculate(fn, arity, props):
            case LiteralToken(token):
                return token
            case DeferredToken(token):
                logger.debug("Deferring inline plugin %r to the styling function.", fn)
                return token
            case _:
                raise ValueError("Unknown token resolution.")

    return resolve_callback


def _resolve_template(template: Template) -> Callable[[Mapping, object], Token]:
    resolvers = [
        _resolve_function(ip.value, get_callable_info(ip.value).arity)
        if is_function_token(ip.value)
        else None
        for ip in template.interpolations
    ]

    def resolve_template(props: Mapping, context: object) -> Token:
        parts: list[str | Interpolation] = []
        resolved = iter(resolvers)
        for part in template:
            if isinstance(part, str):
                parts.append(part)
                continue
            resolver = next(resolved)
            if resolver is None:
                parts.append(part)
            else:
                parts.append(
                    Interpolation(
                        resolver(props, context),
                        part.expression,
                        part.conversion,
                        part.format_spec,
                    )
                )
        return Template(*parts)

    return resolve_template


def _is_dynamic(token: Token) -> bool:
    if isinstance(token, Template):
        return any(is_function_token(ip.value) for ip in token.interpolations)
    return is_function_token(token)


def _make_resolver(token: Token) -> Callable[[Mapping, object], Token]:
    if isinstance(token, Template):
        if _is_dynamic(token):
            return _resolve_template(token)
    elif is_function_token(token):
        fn = t.cast(Callable, token)
        return _resolve_function(fn, get_callable_info(fn).arity)
    return lambda props, context: token


def build(tw: StylingFunction, tokens: t.Sequence[Token]) -> Evaluate:
    """
    Build the render-time class name evaluation for the given tokens.

    Static tokens are handed to the styling function once and the result is
    reused for every render.

    Dynamic tokens resolve the styling context on every render, which primes
    the context cache before the styling function composes the tokens. No
    resolver reads it: one-argument callbacks only take props and style
    factories are resolved by the styling function with its own context.
    """
    if any(_is_dynamic(token) for token in tokens):
        # Arity is classified once, the outcome of a speculative call is redone per render.
        resolvers = [_make_resolver(token) for token in tokens]

        def evaluate(props: Mapping[str, object]) -> str:
            context = get_context(tw)
            return tw(*[resolve(props, context) for resolve in resolvers])

        return evaluate

    result: str | None = None

    def evaluate_static(props: Mapping[str, object]) -> str:
        nonlocal result
        if result is None:
            result = tw(*tokens)
        return result

    return evaluate_static
