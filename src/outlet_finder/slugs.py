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
"""Derive product IDs and display names from catalog URL slugs."""

HTML_EXTENSION = ".html"


def slug_from_path(path: str) -> str:
    """Return the final ``/`` component of a catalog URL without its query string."""
    slug = path.split("/")[-1]
    return slug.split("?")[0] or slug


def strip_suffixes(slug: str) -> str:
    """Remove a trailing ``?query`` or ``#fragment`` from a slug.

    If stripping would leave nothing (e.g. ``?x=1``), the slug is returned
    unchanged.
    """
    clean = slug.split("?")[0].split("#")[0]
    return clean or slug


def _without_extension(slug: str) -> str:
    if slug.endswith(HTML_EXTENSION):
        return slug[: -len(HTML_EXTENSION)]
    return slug


def extract_product_id(slug: str) -> str:
    """Extract the lowercase product ID from a slug.

    The ID is the last hyphen-delimited segment once any ``.html`` extension
    has been removed:

        >>> extract_product_id("ao-thun-basic-ab12.html")
        'ab12'
    """
    return _without_extension(slug).split("-")[-1].lower()


def format_word(word: str) -> str:
    """Capitalize a slug segment, treating short segments as acronyms."""
    if not word:
        return ""
    if len(word) <= 3:
        return word.upper()
    return word[0].upper() + word[1:]


def humanize_slug(slug: str, product_id: str) -> str:
    """Build a display name from the slug segments preceding the product ID.

    Args:
        slug: The URL slug, with or without an ``.html`` extension.
        product_id: The ID extracted from the same slug.

    Returns:
        The humanized name, or the uppercased ID if the slug has no name part.
    """
    core = _without_extension(slug).split("-")[:-1]
    if not core:
        return product_id.upper()
    return " ".join(word for word in (format_word(piece) for piece in core) if word)
