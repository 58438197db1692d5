import inspect
import json
import textwrap
import types
import zlib
from string.templatelib import Template

from .protocols import is_function_token


BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    if not number:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(BASE36[rem])
    return "".join(reversed(digits))


def hash_class(text: str, prefix: str = "tw") -> str:
    """Hash text into a short class name that is safe to use as a selector."""
    return f"{prefix}-{_to_base36(zlib.crc32(text.encode('utf-8')))}"


def _code_digest(code: types.CodeType) -> str:
    consts = ",".join(
        _code_digest(const) if inspect.iscode(const) else repr(const)
        for const in code.co_consts
    )
    names = ",".join(code.co_names + code.co_varnames)
    return f"{code.co_code.hex()}|{consts}|{names}"


def _code_fingerprint(value: object) -> str:
    """Describe a callable without source by its name and compiled code."""
    name = getattr(value, "__qualname__", type(value).__qualname__)
    code = getattr(value, "__code__", None)
    if code is None:
        return name
    return f"{name}:{_code_digest(code)}"


def _lambda_text(fn: types.FunctionType, lines: list[str], start: int) -> str | None:
    """
    Cut the text of a lambda out of the source lines it sits on.

    The body is located from the column offsets of its instructions, which
    are byte offsets into the UTF-8 encoded line.
    """
    spans = [
        (line, col, end_line, end_col)
        for line, end_line, col, end_col in fn.__code__.co_positions()
        if line is not None
        and end_line is not None
        and col is not None
        and end_col is not None
        and (end_line, end_col) > (line, col)
    ]
    if not spans:
        return None
    first_line, first_col = min((line, col) for line, col, _, _ in spans)
    last_line, last_col = max((end_line, end_col) for _, _, end_line, end_col in spans)
    if first_line < start or last_line - start >= len(lines):
        return None
    selected = [
        line.encode("utf-8") for line in lines[first_line - start : last_line - start + 1]
    ]
    selected[-1] = selected[-1][:last_col]
    selected[0] = selected[0][first_col:]
    body = b"".join(selected).decode("utf-8", errors="replace")
    params = str(inspect.signature(fn))[1:-1]
    return f"lambda {params}: {body}" if params else f"lambda: {body}"


def _function_source(value: object) -> str:
    try:
        lines, start = inspect.getsourcelines(value)  # type: ignore[arg-type]
    except (OSError, TypeError):
        # No source (REPL, exec, builtins), fall back to the compiled code.
        return _code_fingerprint(value)
    if isinstance(value, types.LambdaType) and value.__name__ == "<lambda>":
        # Source lines hold everything else written on the same line too.
        return _lambda_text(value, lines, start) or _code_fingerprint(value)
    return textwrap.dedent("".join(lines))


def describe_function(value: object) -> dict[str, object]:
    """
    Describe a function token by what it looks like instead of what it is.

    Two textually identical functions, ie. the same lambda created by running
    a module twice, produce the same description.
    """
    to_json = getattr(value, "to_json", None)
    return {
        "t": "function",
        "n": getattr(value, "__name__", None),
        "d": getattr(value, "display_name", None),
        "s": to_json() if callable(to_json) else _function_source(value),
    }


def _stringify(value: object) -> object:
    if is_function_token(value):
        return describe_function(value)
    elif callable(to_json := getattr(value, "to_json", None)):
        return to_json()
    elif isinstance(value, Template):
        return {
            "t": "template",
            "s": list(value.strings),
            "v": [
                [ip.value, ip.conversion, ip.format_spec]
                for ip in value.interpolations
            ],
        }
    elif isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Cannot serialize {type(value).__name__} for a styled identity")


def serialize(tag: object, tokens: object) -> str:
    """Serialize a tag and its tokens into canonical text."""
    return json.dumps(
        [tag, tokens], default=_stringify, separators=(",", ":"), ensure_ascii=False
    )
