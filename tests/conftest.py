import pytest

from outlet_finder.parser import parse_catalog
from outlet_finder.service import OutletFinder

SAMPLE_FEED = """\
🖼 https://shop.example.com/ao-thun-basic-ab12.html
- Outlet A
- Outlet B

🖼 https://shop.example.com/quan-jean-slim-cd34.html
- Outlet B
- Cửa hàng Đà Lạt

🖼 https://shop.example.com/mu-luoi-trai-ef56
Hết hàng

🖼 https://shop.example.com/tui-xach-gh78.html?utm=feed
- Outlet C
"""


@pytest.fixture
def feed_text() -> str:
    return SAMPLE_FEED


@pytest.fixture
def catalog():
    return parse_catalog(SAMPLE_FEED)


@pytest.fixture
def finder() -> OutletFinder:
    finder = OutletFinder()
    finder.load_text(SAMPLE_FEED)
    return finder


@pytest.fixture
def feed_file(tmp_path):
    path = tmp_path / "Source.txt"
    path.write_text(SAMPLE_FEED, encoding="utf-8")
    return path
