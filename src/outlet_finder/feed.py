# ==============================================================================
#  Copyright 2025 Matthew Pounsett <matt@conundrum.com>
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
# ==============================================================================
"""Retrieve catalog feed text from a local file or an HTTP(S) URL."""

import logging
from pathlib import Path

import httpx
from bs4 import BeautifulSoup
from furl import furl

from outlet_finder import __version__
from outlet_finder.exceptions import FeedUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "Source.txt"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"outlet-finder/{__version__}"

HTTP_SCHEMES = ("http", "https")


def is_remote(source: str) -> bool:
    """Return True if the source names an HTTP(S) URL rather than a file."""
    try:
        return furl(source).scheme in HTTP_SCHEMES
    except ValueError:
        return False


def html_to_text(html: str) -> str:
    """Reduce an HTML page to its text, one line per block element.

    Published documents are often served as HTML; the feed lines survive as
    the text content of the page.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text("\n")


class FeedLoader:
    """Loader for catalog feeds, reusing one HTTPX client across fetches."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: httpx.BaseTransport | None = None) -> None:
        """Initialize the loader with an HTTPX client.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional HTTPX transport, e.g. for testing.
        """
        self.client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
            transport=transport,
        )

    def __enter__(self) -> "FeedLoader":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close the client."""
        self.close()

    def close(self) -> None:
        """Close the httpx client."""
        self.client.close()

    def fetch(self, url: str) -> str:
        """Fetch feed text from a URL.

        Raises:
            FeedUnavailable: On any transport or HTTP status error.
        """
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error fetching catalog feed %s: %s", url, e)
            raise FeedUnavailable(url, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("Request error fetching catalog feed %s: %s", url, e)
            raise FeedUnavailable(url, str(e)) from e

        content_type = response.headers.get("content-type", "")
        if "html" in content_type:
            logger.debug("Extracting text from HTML feed %s", url)
            return html_to_text(response.text)
        return response.text

    def read(self, path: str) -> str:
        """Read feed text from a UTF-8 file.

        Raises:
            FeedUnavailable: If the file cannot be read or decoded.
        """
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Cannot read catalog feed %s: %s", path, e)
            raise FeedUnavailable(path, str(e)) from e

    def load(self, source: str = DEFAULT_SOURCE) -> str:
        """Load feed text from a file path or HTTP(S) URL."""
        if is_remote(source):
            return self.fetch(source)
        return self.read(source)


def load_feed(source: str = DEFAULT_SOURCE, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Load catalog feed text with a short-lived FeedLoader."""
    with FeedLoader(timeout=timeout) as loader:
        return loader.load(source)
