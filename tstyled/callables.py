import inspect
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class CallableInfo:
    named_params: frozenset[str]
    required_named_params: frozenset[str]
    requires_positional: bool
    kwargs: bool
    positional_count: int
    var_positional: bool

    @property
    def arity(self) -> int:
        """
        How many positional arguments the callable is prepared to take.

        A `*args` parameter means it can take the styling context as well.
        """
        if self.var_positional:
            return max(self.positional_count, 2)
        return self.positional_count


def get_callable_info(value: Callable) -> CallableInfo:
    """Inspect the signature of a callable."""
    try:
        sig = inspect.signature(value)
    except (TypeError, ValueError):
        # Builtins and some extension types cannot be inspected, assume `fn(props)`.
        return CallableInfo(
            named_params=frozenset(),
            required_named_params=frozenset(),
            requires_positional=False,
            kwargs=False,
            positional_count=1,
            var_positional=False,
        )
    named = []
    required_named = []
    requires_positional = False
    kwargs = False
    positional_count = 0
    var_positional = False
    for param in sig.parameters.values():
        match param.kind:
            case inspect.Parameter.POSITIONAL_ONLY:
                positional_count += 1
                if param.default is param.empty:
                    requires_positional = True
            case inspect.Parameter.POSITIONAL_OR_KEYWORD:
                positional_count += 1
                named.append(param.name)
                if param.default is param.empty:
                    required_named.append(param.name)
            case inspect.Parameter.KEYWORD_ONLY:
                named.append(param.name)
                if param.default is param.empty:
                    required_named.append(param.name)
            case inspect.Parameter.VAR_POSITIONAL:
                var_positional = True
            case inspect.Parameter.VAR_KEYWORD:
                kwargs = True
    return CallableInfo(
        named_params=frozenset(named),
        required_named_params=frozenset(required_named),
        requires_positional=requires_positional,
        kwargs=kwargs,
        positional_count=positional_count,
        var_positional=var_positional,
    )
