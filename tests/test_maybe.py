from igfetch.maybe import NOTHING, Maybe


def test_maybe_navigates_nested_structures() -> None:
    data = {"graphql": {"shortcode_media": {"edges": [{"node": {"text": "hello"}}]}}}

    text = Maybe.of(data).get("graphql").get("shortcode_media").get("edges").at(0).get("node").get("text")

    assert text.present
    assert text.text() == "hello"


def test_maybe_missing_paths_are_nothing() -> None:
    data = {"graphql": {"shortcode_media": None}, "items": []}

    assert Maybe.of(data).get("graphql").get("shortcode_media").get("video_url") == NOTHING
    assert not Maybe.of(data).get("items").at(0).present
    assert not Maybe.of(data).get("missing").get("deeper").present
    assert not Maybe.of(None).present


def test_maybe_ignores_wrong_container_types() -> None:
    assert not Maybe.of("string").get("key").present
    assert not Maybe.of({"a": 1}).at(0).present
    assert list(Maybe.of({"a": 1}).items()) == []


def test_maybe_typed_accessors() -> None:
    assert Maybe.of("").text() is None
    assert Maybe.of(3).text() is None
    assert Maybe.of(12).number() == 12.0
    assert Maybe.of(True).number() is None
    assert Maybe.of("12").number() is None
    assert NOTHING.value("fallback") == "fallback"


def test_maybe_or_else_prefers_present_value() -> None:
    assert Maybe.of("a").or_else(Maybe.of("b")).value() == "a"
    assert NOTHING.or_else(Maybe.of("b")).value() == "b"
