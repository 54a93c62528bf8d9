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
"""Parse the line-oriented catalog feed into product records.

The feed is a sequence of blocks. Each block starts with a marker line
carrying the product URL and is followed by one outlet name per line::

    🖼 https://shop.example.com/ao-thun-basic-ab12.html
    - Outlet A
    - Outlet B
    🖼 https://shop.example.com/quan-jean-cd34.html
    Hết hàng

A block whose outlets are reset by the out-of-stock sentinel, and that lists
no outlet afterwards, produces a product with no stores.
"""

import logging
import re
from dataclasses import dataclass, field

from outlet_finder.models import Product
from outlet_finder.slugs import extract_product_id, humanize_slug, slug_from_path

logger = logging.getLogger(__name__)

MARKER_GLYPH = "\U0001f5bc"
OUT_OF_STOCK_SENTINEL = "hết hàng"

_MARKER_PREFIX = re.compile(rf"^{MARKER_GLYPH}\ufe0f?\s*")
_BULLET_PREFIX = re.compile(r"^-\s*")

Catalog = dict[str, Product]


@dataclass
class BlockAccumulator:
    """Parse state for the block currently being read."""

    url: str
    id: str
    name: str
    stores: list[str] = field(default_factory=list)

    @classmethod
    def from_marker(cls, line: str) -> "BlockAccumulator":
        url = _MARKER_PREFIX.sub("", line).strip()
        slug = slug_from_path(url)
        product_id = extract_product_id(slug)
        return cls(url=url, id=product_id, name=humanize_slug(slug, product_id))

    def add_line(self, line: str) -> None:
        if line.lower() == OUT_OF_STOCK_SENTINEL:
            self.stores = []
            return
        self.stores.append(_BULLET_PREFIX.sub("", line).strip())

    def finalize(self, catalog: Catalog) -> None:
        """Upsert the block's product, unioning outlets with any earlier block."""
        existing = catalog.get(self.id)
        stores = list(existing.stores) if existing is not None else []
        if existing is not None:
            logger.debug("Merging repeated block for product %s", self.id)
        for store in self.stores:
            store = store.strip()
            if store and store not in stores:
                stores.append(store)
        catalog[self.id] = Product(id=self.id, url=self.url, name=self.name, stores=stores)


def parse_catalog(text: str) -> Catalog:
    """Parse catalog feed text.

    Malformed content never raises: lines that fit no block are skipped.

    Args:
        text: The raw feed text.

    Returns:
        A mapping of product ID to Product, in order of first appearance.
    """
    catalog: Catalog = {}
    current: BlockAccumulator | None = None

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(MARKER_GLYPH):
            if current is not None:
                current.finalize(catalog)
            current = BlockAccumulator.from_marker(line)
            continue

        if current is None:
            logger.debug("Ignoring line %d outside of a product block: %s", line_number, line)
            continue

        current.add_line(line)

    if current is not None:
        current.finalize(catalog)

    logger.info("Parsed %d product(s) from catalog feed", len(catalog))
    return catalog
