import pytest

from .build import DeferredToken, LiteralToken, PropsView, build, speculate
from .conftest import RecordingStyler
from .context import _context_cache
from .styler import Styler


def test_static_tokens_are_evaluated_once():
    tw = RecordingStyler({"x": "cx"})
    evaluate = build(tw, ["x", ["font-bold"]])
    results = [evaluate({"index": index}) for index in range(3)]
    assert results == ["cx font-bold"] * 3
    assert tw.calls == 1


def test_props_callback_is_used_as_literal():
    tw = RecordingStyler()
    evaluate = build(tw, [lambda props: "primary" if props.get("primary") else "plain"])
    assert evaluate({}) == "plain"
    assert evaluate({"primary": True}) == "primary"


def test_props_callback_attribute_access():
    evaluate = build(RecordingStyler(), [lambda props: f"text-{props.color}"])
    assert evaluate({"color": "red"}) == "text-red"


def test_zero_arity_callback():
    evaluate = build(RecordingStyler(), ["a", lambda: "b"])
    assert evaluate({}) == "a b"


def test_dynamic_render_resolves_context_once_per_styling_function():
    tw = RecordingStyler()
    evaluate = build(tw, [lambda props: "a"])
    assert tw not in _context_cache
    assert evaluate({}) == "a"
    assert _context_cache[tw] is tw.context
    evaluate({})
    # One probe, then one call per render.
    assert tw.calls == 3


def test_style_factory_receives_styling_context():
    tw = RecordingStyler()
    seen = []

    def factory(props, context):
        seen.append((props, context))
        return context["tag"](props["name"])

    evaluate = build(tw, [factory])
    assert evaluate({"name": "card"}) == "tag-card"
    props, context = seen[0]
    assert isinstance(props, PropsView)
    assert props["name"] == "card"
    # The styling function resolved it with its own context.
    assert context is tw.context


def test_style_factory_reading_reserved_names_is_not_audited():
    tw = RecordingStyler()
    evaluate = build(tw, [lambda props, context: props.get("tw", "no-tw")])
    assert evaluate({}) == "no-tw"


def test_inline_plugin_is_deferred_to_styling_function():
    tw = RecordingStyler({"x": "cx"})
    evaluate = build(tw, [lambda context: context["tw"]("x")])
    assert evaluate({}) == "cx"
    assert tw.rules == [".cx{...}"]


@pytest.mark.parametrize("name", ["tw", "theme", "tag"])
def test_speculate_defers_on_reserved_item_access(name):
    def plugin(context):
        return context[name]

    assert speculate(plugin, 1, {}) == DeferredToken(plugin)


def test_speculate_defers_on_reserved_attribute_access():
    def plugin(context):
        return context.theme("colors")

    assert speculate(plugin, 1, {"primary": True}) == DeferredToken(plugin)


def test_speculate_uses_real_prop_named_like_reserved():
    def callback(props):
        return props["theme"]

    assert speculate(callback, 1, {"theme": "dark"}) == LiteralToken("dark")


def test_speculate_defers_when_abort_is_swallowed():
    def sneaky(props):
        try:
            return props["tag"]
        except Exception:
            return "fallback"

    assert speculate(sneaky, 1, {}) == DeferredToken(sneaky)


def test_speculate_literal_for_plain_callback():
    def callback(props):
        return ["flex", props.get("extra")]

    assert speculate(callback, 1, {"extra": "gap-2"}) == LiteralToken(["flex", "gap-2"])


def test_user_errors_propagate():
    def broken(props):
        raise ValueError("boom")

    evaluate = build(RecordingStyler(), [broken])
    with pytest.raises(ValueError, match="boom"):
        evaluate({})


def test_missing_prop_raises_key_error():
    evaluate = build(RecordingStyler(), [lambda props: props["size"]])
    with pytest.raises(KeyError):
        evaluate({})


@pytest.mark.parametrize(
    "props", [{}, {"primary": True}, {"primary": False, "size": "lg"}]
)
def test_classification_is_stable_across_renders(props):
    tw = RecordingStyler({"x": "cx"})
    evaluate = build(
        tw,
        [
            lambda props: "literal",
            lambda props, context: "factory",
            lambda context: context["tw"]("x"),
        ],
    )
    for _ in range(2):
        assert evaluate(props) == "literal factory cx"


def test_template_interpolations_are_classified():
    tw = Styler()
    evaluate = build(
        tw,
        [t"text-{(lambda props: 'purple-600' if props.get('primary') else 'indigo-500')} font-bold"],
    )
    assert evaluate({}) == "text-indigo-500 font-bold"
    assert evaluate({"primary": True}) == "text-purple-600 font-bold"


def test_template_inline_plugin():
    tw = Styler(theme={"colors": {"brand": "rose-500"}})
    evaluate = build(tw, [t"bg-{(lambda context: context.theme('colors', 'brand'))}"])
    assert evaluate({}) == "bg-rose-500"


def test_props_view_is_read_only_mapping():
    view = PropsView({"a": 1, "tw": 2})
    assert dict(view) == {"a": 1, "tw": 2}
    assert len(view) == 2
    assert "tw" in view
    with pytest.raises(AttributeError):
        view.missing
    with pytest.raises(TypeError):
        view["a"] = 2  # type: ignore[index]


def test_auditing_view_contains_does_not_defer():
    view = PropsView({}, audit=True)
    assert "tw" not in view
    assert view.reserved_reads == []
