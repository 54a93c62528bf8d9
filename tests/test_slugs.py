import pytest

from outlet_finder.slugs import extract_product_id, format_word, humanize_slug, slug_from_path, strip_suffixes


@pytest.mark.parametrize(
    ("slug", "expected"),
    [
        ("ao-thun-basic-ab12", "ab12"),
        ("ao-thun-basic-AB12.html", "ab12"),
        ("ABC123", "abc123"),
        ("ABC123.html", "abc123"),
    ],
)
def test_extract_product_id(slug: str, expected: str) -> None:
    assert extract_product_id(slug) == expected


def test_extract_product_id_only_strips_trailing_extension() -> None:
    assert extract_product_id("page.html-x9") == "x9"


def test_humanize_slug_formats_acronyms_and_words() -> None:
    assert humanize_slug("ao-thun-basic-ab12.html", "ab12") == "AO Thun Basic"
    assert humanize_slug("quan-jean-slim-cd34", "cd34") == "Quan Jean Slim"


def test_humanize_slug_without_name_part_uses_id() -> None:
    assert humanize_slug("abc123", "abc123") == "ABC123"


def test_humanize_slug_collapses_empty_segments() -> None:
    assert humanize_slug("quan--jean-cd34", "cd34") == "Quan Jean"


def test_format_word() -> None:
    assert format_word("") == ""
    assert format_word("tui") == "TUI"
    assert format_word("xach") == "Xach"


def test_slug_from_path_strips_query() -> None:
    assert slug_from_path("https://shop.example.com/tui-xach-gh78.html?utm=feed") == "tui-xach-gh78.html"


def test_strip_suffixes() -> None:
    assert strip_suffixes("ao-ab12?ref=x#top") == "ao-ab12"
    assert strip_suffixes("ao-ab12#top") == "ao-ab12"
    assert strip_suffixes("?ref=x") == "?ref=x"
