import pytest

from igfetch.text import DESCRIPTION_PLACEHOLDER, TITLE_PLACEHOLDER, clean_text, make_description, make_title


def test_clean_text_decodes_unicode_escapes() -> None:
    assert clean_text(r"https://cdn.example/v.mp4?a=1\u0026b=2") == "https://cdn.example/v.mp4?a=1&b=2"
    assert clean_text(r"caf\u00e9") == "café"


def test_clean_text_removes_backslash_escaping() -> None:
    assert clean_text(r"say \"hi\"") == 'say "hi"'
    assert clean_text(r"https:\/\/cdn.example\/v.mp4") == "https://cdn.example/v.mp4"
    assert clean_text(r"line one\nline two") == "line one\nline two"


def test_clean_text_decodes_html_entities() -> None:
    assert clean_text("Tom &amp; Jerry &quot;live&quot; &#39;today&#39;") == "Tom & Jerry \"live\" 'today'"


def test_clean_text_handles_empty_input() -> None:
    assert clean_text("") == ""


@pytest.mark.parametrize(
    "raw",
    [
        r"Sunset \u0026 friends",
        "Tom &amp; Jerry",
        r"quoted \"text\"",
        "plain caption with emoji 🌅",
    ],
)
def test_clean_text_is_idempotent_on_clean_output(raw: str) -> None:
    once = clean_text(raw)
    assert clean_text(once) == once


def test_make_title_truncates_to_fifty_characters_with_suffix() -> None:
    caption = "x" * 80
    assert make_title(caption) == "x" * 50 + "..."


def test_make_title_always_appends_suffix_to_short_captions() -> None:
    assert make_title("Short caption") == "Short caption..."


def test_make_title_cleans_before_truncating() -> None:
    caption = r"A \u0026 B " + "y" * 60
    title = make_title(caption)
    assert title.startswith("A & B ")
    assert len(title) == 53


def test_placeholders_when_caption_missing() -> None:
    assert make_title(None) == TITLE_PLACEHOLDER
    assert make_title("") == TITLE_PLACEHOLDER
    assert make_description(None) == DESCRIPTION_PLACEHOLDER
    assert make_description("Full caption") == "Full caption"


def test_clean_text_joins_escaped_surrogate_pairs() -> None:
    cleaned = clean_text(r"hi \ud83d\ude00 \uD83C\uDF05")

    assert cleaned == "hi " + chr(0x1F600) + " " + chr(0x1F305)
    cleaned.encode("utf-8")


def test_clean_text_replaces_lone_surrogates() -> None:
    cleaned = clean_text(r"broken \ud83d end")

    assert cleaned == "broken " + chr(0xFFFD) + " end"
    cleaned.encode("utf-8")
