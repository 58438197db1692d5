import pytest

from .conftest import record_element
from .identity import hash_class
from .styled import styled
from .styler import Styler, StylingContext


@pytest.fixture
def tw():
    return Styler(theme={"colors": {"brand": {"DEFAULT": "rose-500"}}, "spacing": "4"})


def test_strings_and_sequences(tw):
    assert tw("flex  items-center", ["gap-2", ("p-4",)]) == "flex items-center gap-2 p-4"


def test_duplicates_are_dropped(tw):
    assert tw("flex", "flex block") == "flex block"


@pytest.mark.parametrize("token", [None, False, True, "", [], {}])
def test_empty_tokens(tw, token):
    assert tw("flex", token) == "flex"


def test_variant_groups(tw):
    assert tw({"sm": "text-sm", "md": ["text-lg", {"hover": "underline"}]}) == (
        "sm:text-sm md:text-lg md:hover:underline"
    )


def test_variant_separator():
    assert Styler(variant_separator="__")({"sm": "block"}) == "sm__block"


def test_templates(tw):
    size, weight = 5, "bold"
    assert tw(t"text-{size}xl font-{weight}") == "text-5xl font-bold"
    assert tw(t"w-{0.5:.2f}") == "w-0.50"
    assert tw(t"{None}flex {['gap-2', 'p-4']}") == "flex gap-2 p-4"


def test_callable_tokens_get_the_context(tw):
    seen = []

    def plugin(context):
        seen.append(context)
        return context.tw("flex", {"sm": "block"})

    assert tw(plugin) == "flex sm:block"
    assert seen == [tw.get_context()]
    assert isinstance(seen[0], StylingContext)


def test_callable_in_variant_group(tw):
    assert tw({"sm": lambda context: "block"}) == "sm:block"


def test_theme_lookup(tw):
    assert tw.theme("colors", "brand.DEFAULT") == "rose-500"
    assert tw.theme("spacing") == "4"
    assert tw.theme("colors", "missing.key", "gray-500") == "gray-500"
    assert tw.theme("spacing", "nested") is None
    assert tw.theme("missing", default="x") == "x"


def test_tag_is_hashed(tw):
    assert tw.tag("card") == hash_class("card")
    assert Styler(hash=lambda name: f"t-{name}").tag("card") == "t-card"


def test_component_as_class_token_raises(tw):
    Card = styled.bind(record_element).div("p-4")
    with pytest.raises(TypeError, match="Cannot use"):
        tw(Card)


def test_component_in_template_is_a_selector(tw):
    Card = styled.bind(record_element).div("p-4")
    assert tw(t"[&>{Card}]:mt-2") == f"[&>.{Card.class_name}]:mt-2"


def test_unknown_token_raises(tw):
    with pytest.raises(TypeError, match="Unknown style token: 1.5"):
        tw(1.5)
