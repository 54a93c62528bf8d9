from outlet_finder.parser import BlockAccumulator, parse_catalog


def test_parses_example_block() -> None:
    catalog = parse_catalog(
        "🖼 https://shop.example.com/ao-thun-basic-ab12\n- Outlet A\n- Outlet B\n"
    )

    product = catalog["ab12"]
    assert product.id == "ab12"
    assert product.url == "https://shop.example.com/ao-thun-basic-ab12"
    assert product.name == "AO Thun Basic"
    assert product.stores == ("Outlet A", "Outlet B")


def test_parses_sample_feed(catalog) -> None:
    assert list(catalog) == ["ab12", "cd34", "ef56", "gh78"]
    assert catalog["cd34"].stores == ("Outlet B", "Cửa hàng Đà Lạt")
    assert catalog["ef56"].stores == ()
    assert catalog["ef56"].is_out_of_stock
    assert catalog["gh78"].url == "https://shop.example.com/tui-xach-gh78.html?utm=feed"
    assert catalog["gh78"].name == "TUI Xach"


def test_handles_any_line_ending() -> None:
    catalog = parse_catalog("🖼 https://x.example/a-ab12\r\n- Outlet A\r\n\r\n- Outlet B\r")

    assert catalog["ab12"].stores == ("Outlet A", "Outlet B")


def test_ignores_lines_before_first_marker() -> None:
    catalog = parse_catalog("Outlet Z\n- Outlet Y\n🖼 https://x.example/a-ab12\n- Outlet A\n")

    assert catalog["ab12"].stores == ("Outlet A",)


def test_out_of_stock_sentinel_clears_earlier_outlets_only() -> None:
    catalog = parse_catalog(
        "🖼 https://x.example/a-ab12\n- Outlet A\nHẾT HÀNG\n- Outlet B\n"
        "🖼 https://x.example/b-cd34\n- Outlet A\n  hết hàng  \n"
    )

    assert catalog["ab12"].stores == ("Outlet B",)
    assert catalog["cd34"].stores == ()


def test_deduplicates_outlets_after_trimming() -> None:
    catalog = parse_catalog(
        "🖼 https://x.example/a-ab12\n- Outlet A\nOutlet A\n  -   Outlet A  \n-Outlet a\n-\n"
    )

    assert catalog["ab12"].stores == ("Outlet A", "Outlet a")


def test_repeated_block_overwrites_url_and_unions_outlets() -> None:
    catalog = parse_catalog(
        "🖼 https://x.example/old-name-ab12\n- Outlet A\n- Outlet B\n"
        "🖼 https://x.example/ab12\n- Outlet C\n"
        "🖼 https://x.example/new-name-ab12.html\n- Outlet C\n- Outlet A\n"
    )

    assert list(catalog) == ["ab12"]
    product = catalog["ab12"]
    assert product.url == "https://x.example/new-name-ab12.html"
    assert product.name == "NEW Name"
    assert product.stores == ("Outlet A", "Outlet B", "Outlet C")


def test_repeated_out_of_stock_block_keeps_earlier_outlets() -> None:
    catalog = parse_catalog(
        "🖼 https://x.example/a-ab12\n- Outlet A\n🖼 https://x.example/a-ab12\nHết hàng\n"
    )

    assert catalog["ab12"].stores == ("Outlet A",)


def test_marker_without_space_and_slug_without_hyphen() -> None:
    catalog = parse_catalog("🖼https://x.example/products/ABC123.html\n- Outlet A")

    product = catalog["abc123"]
    assert product.url == "https://x.example/products/ABC123.html"
    assert product.name == "ABC123"


def test_empty_feed() -> None:
    assert parse_catalog("") == {}
    assert parse_catalog("\n  \n- Outlet A\n") == {}


def test_reparsing_is_stable(feed_text) -> None:
    first = parse_catalog(feed_text)
    second = parse_catalog(feed_text)

    assert first == second


def test_parsed_outlets_are_unique(feed_text) -> None:
    for product in parse_catalog(feed_text + feed_text).values():
        assert len(product.stores) == len(set(product.stores))


def test_block_accumulator_from_marker() -> None:
    block = BlockAccumulator.from_marker("🖼   https://x.example/quan-jean-cd34.html?a=b  ")

    assert block.url == "https://x.example/quan-jean-cd34.html?a=b"
    assert block.id == "cd34"
    assert block.name == "Quan Jean"
    assert block.stores == []
