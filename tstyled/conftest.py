import pytest

from .binding import reset


class RecordingStyler:
    """
    Stand-in styling function.

    Maps token names through `classes` and records a rule the first time a
    class is produced. Callable tokens are resolved with `context`.
    """

    def __init__(self, classes=None):
        self.classes = dict(classes or {})
        self.rules = []
        self.calls = 0
        self.context = {"tw": self, "theme": {}, "tag": lambda name: f"tag-{name}"}

    def __call__(self, *tokens):
        self.calls += 1
        out = []
        for token in tokens:
            self._collect(token, out)
        return " ".join(out)

    def _collect(self, token, out):
        if callable(token):
            self._collect(token(self.context), out)
        elif isinstance(token, str):
            for name in token.split():
                class_name = self.classes.get(name, name)
                rule = f".{class_name}{{...}}"
                if rule not in self.rules:
                    self.rules.append(rule)
                out.append(class_name)
        elif isinstance(token, (list, tuple)):
            for item in token:
                self._collect(item, out)
        elif token:
            raise TypeError(f"Unexpected token {token!r}")


def record_element(type_, props, *children):
    return {"type": type_, "props": props, "children": list(children)}


@pytest.fixture(autouse=True)
def reset_binding():
    reset()
    yield
    reset()


@pytest.fixture
def recording_tw():
    return RecordingStyler({"x": "cx"})
