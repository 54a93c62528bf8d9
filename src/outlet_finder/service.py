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
"""Catalog lifecycle and query orchestration."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from outlet_finder.classifier import classify
from outlet_finder.exceptions import CatalogNotReady
from outlet_finder.feed import DEFAULT_SOURCE, DEFAULT_TIMEOUT, load_feed
from outlet_finder.models import Product, QueryResult
from outlet_finder.parser import parse_catalog
from outlet_finder.resolver import parse_query
from outlet_finder.selector import select_outlets

logger = logging.getLogger(__name__)


def _quoted(tokens: list[str]) -> str:
    return ", ".join(f'"{token}"' for token in tokens)


class OutletFinder:
    """Answers outlet queries against a catalog published once per instance.

    Queries are rejected with CatalogNotReady until ``load`` or ``load_text``
    has published a catalog. The published catalog is read-only, so one
    instance may serve concurrent queries.
    """

    def __init__(self) -> None:
        self._catalog: Mapping[str, Product] | None = None

    @property
    def ready(self) -> bool:
        return self._catalog is not None

    @property
    def catalog(self) -> Mapping[str, Product]:
        if self._catalog is None:
            raise CatalogNotReady()
        return self._catalog

    @property
    def product_ids(self) -> list[str]:
        """Catalog product IDs in feed order."""
        return list(self.catalog)

    def load_text(self, text: str) -> None:
        """Parse feed text and publish the resulting catalog."""
        self._catalog = MappingProxyType(parse_catalog(text))

    def load(self, source: str = DEFAULT_SOURCE, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Fetch and publish the catalog.

        Raises:
            FeedUnavailable: If the feed cannot be obtained. The finder stays
                not ready.
        """
        text = load_feed(source, timeout=timeout)
        self.load_text(text)
        logger.info("Catalog loaded from %s: %d product(s)", source, len(self.catalog))

    def query(self, raw: str) -> QueryResult:
        """Resolve a ``;``-separated query and select covering outlets.

        Per-token problems are reported in the result rather than raised.

        Args:
            raw: Product IDs, slugs or URLs separated by ``;``.

        Returns:
            A QueryResult with errors, warnings and the selected outlets.

        Raises:
            CatalogNotReady: If no catalog has been published.
        """
        catalog = self.catalog

        if not raw or not raw.strip():
            return QueryResult(errors=["Enter at least one product ID."])

        parsed = parse_query(raw, catalog)
        if not parsed.ids:
            errors = ["No valid product ID found in the input."]
            if parsed.invalid_tokens:
                errors.append(f"Invalid values: {_quoted(parsed.invalid_tokens)}")
            return QueryResult(errors=errors, invalid_tokens=parsed.invalid_tokens)

        classification = classify(parsed.ids, catalog)
        result = QueryResult(
            invalid_tokens=parsed.invalid_tokens,
            missing=classification.missing,
            unavailable=[product.id for product in classification.unavailable],
        )

        if parsed.invalid_tokens:
            result.errors.append(f"Not recognized: {_quoted(parsed.invalid_tokens)}")
        if classification.missing:
            missing = ", ".join(product_id.upper() for product_id in classification.missing)
            result.errors.append(f"Not found in catalog: {missing}")
        if classification.unavailable:
            labels = ", ".join(product.label for product in classification.unavailable)
            result.warnings.append(f"Out of stock: {labels}")

        if not classification.available:
            logger.debug("No available products for query %r", raw)
            return result

        result.products = {product.id: product for product in classification.available}
        result.total_products = len(result.products)
        result.outlets = select_outlets(classification.available, parsed.ids)

        logger.debug(
            "Query %r: %d product(s) across %d outlet(s)",
            raw,
            result.total_products,
            len(result.outlets),
        )
        return result
