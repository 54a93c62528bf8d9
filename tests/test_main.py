import yaml

from outlet_finder.main import main, parse_args


def test_parse_args_defaults() -> None:
    args = parse_args(["ab12", "cd34"])

    assert args.query == ["ab12", "cd34"]
    assert args.source == "Source.txt"
    assert args.timeout == 30.0
    assert not args.list_products
    assert not args.print_table
    assert args.output is None
    assert args.verbose == 0


def test_no_query_is_an_error(feed_file) -> None:
    assert main(["-s", str(feed_file)]) == 1


def test_missing_feed(tmp_path) -> None:
    assert main(["-s", str(tmp_path / "missing.txt"), "ab12"]) == 2


def test_list_products(feed_file, capsys) -> None:
    assert main(["-s", str(feed_file), "--list"]) == 0

    out = capsys.readouterr().out
    assert "AB12" in out
    assert "Out of stock" in out


def test_print_table(feed_file, capsys) -> None:
    assert main(["-s", str(feed_file), "-p", "ab12;cd34"]) == 0

    out = capsys.readouterr().out
    assert "Found 3 matching outlets." in out
    assert "Outlet B" in out
    assert "All 2 products" in out


def test_yaml_output(feed_file, tmp_path) -> None:
    output = tmp_path / "result.yaml"

    assert main(["-s", str(feed_file), "-o", str(output), "ab12", "zz99"]) == 0

    data = yaml.safe_load(output.read_text(encoding="utf-8"))
    assert data["errors"] == ["Not found in catalog: ZZ99"]
    assert data["missing"] == ["zz99"]
    assert data["total_products"] == 1
    assert [outlet["name"] for outlet in data["outlets"]] == ["Outlet A", "Outlet B"]
    assert data["products"]["ab12"]["name"] == "AO Thun Basic"


def test_unanswerable_query_exit_code(feed_file) -> None:
    assert main(["-s", str(feed_file), "zz99"]) == 1


def test_print_table_shows_bracketed_names_verbatim(tmp_path, capsys) -> None:
    feed = tmp_path / "Source.txt"
    feed.write_text(
        "🖼 https://shop.example.com/ao-thun-basic-ab12.html\n- Outlet [/b]\n- [q1] Outlet A\n",
        encoding="utf-8",
    )

    assert main(["-s", str(feed), "-p", "--list", "ab12"]) == 0

    out = capsys.readouterr().out
    assert "Outlet [/b]" in out
    assert "[q1] Outlet A" in out
    assert "Found 2 matching outlets." in out
    assert "All 1 product" in out
    assert "All 1 products" not in out
