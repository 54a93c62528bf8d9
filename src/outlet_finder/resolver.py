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
"""Resolve user-supplied product identifiers to catalog product IDs."""

import logging
import re
from collections.abc import Mapping

from furl import furl

from outlet_finder.models import ParsedQuery, Product
from outlet_finder.slugs import extract_product_id, strip_suffixes

logger = logging.getLogger(__name__)

# Bare IDs are the common case: "AB12", "ab12"
BARE_ID_PATTERN = re.compile(r"[A-Za-z0-9]+")

TOKEN_SEPARATOR = ";"


def _last_segment(segments: list[str]) -> str | None:
    non_empty = [segment for segment in segments if segment]
    if not non_empty:
        return None
    return strip_suffixes(non_empty[-1])


def resolve_product_id(token: str | None) -> str | None:
    """Normalize a bare ID, product URL or path-like slug to a product ID.

    Args:
        token: Raw user input, e.g. ``AB12``, ``ao-thun-basic-ab12`` or
            ``https://shop.example.com/ao-thun-basic-ab12.html?ref=x``.

    Returns:
        The lowercase product ID, or None if the token cannot be resolved.
    """
    plain = token.strip() if token else ""
    if not plain:
        return None

    if BARE_ID_PATTERN.fullmatch(plain):
        return plain.lower()

    try:
        url = furl(plain)
    except ValueError as e:
        logger.debug("Treating %r as a plain path: %s", plain, e)
        url = None

    if url is not None and url.scheme:
        slug = _last_segment(url.path.segments)
    else:
        slug = _last_segment(plain.split("/"))

    if not slug:
        return None

    return extract_product_id(slug) or None


def parse_query(raw: str | None, catalog: Mapping[str, Product] | None = None) -> ParsedQuery:
    """Split a ``;``-separated query into resolved, deduplicated product IDs.

    Args:
        raw: The raw query string.
        catalog: If given, tokens resolving to IDs absent from it are
            reported in ``unknown_tokens``.

    Returns:
        A ParsedQuery with IDs in first-seen order.
    """
    query = ParsedQuery()
    if not raw:
        return query

    tokens = [token.strip() for token in raw.split(TOKEN_SEPARATOR)]
    seen = set()

    for token in tokens:
        if not token:
            continue
        product_id = resolve_product_id(token)
        if product_id is None:
            query.invalid_tokens.append(token)
            continue
        if catalog is not None and product_id not in catalog:
            query.unknown_tokens.append(token)
        if product_id not in seen:
            seen.add(product_id)
            query.ids.append(product_id)

    logger.debug(
        "Parsed query: %d id(s), %d invalid, %d unknown",
        len(query.ids),
        len(query.invalid_tokens),
        len(query.unknown_tokens),
    )
    return query
