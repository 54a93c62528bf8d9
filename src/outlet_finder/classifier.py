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
"""Split requested product IDs by catalog availability."""

from collections.abc import Iterable, Mapping

from outlet_finder.models import Classification, Product


def classify(ids: Iterable[str], catalog: Mapping[str, Product]) -> Classification:
    """Classify requested IDs as available, out of stock or missing.

    Input order is preserved within each bucket.

    Args:
        ids: Requested product IDs, already deduplicated.
        catalog: The parsed catalog.

    Returns:
        A Classification of the requested IDs.
    """
    result = Classification()
    for product_id in ids:
        product = catalog.get(product_id)
        if product is None:
            result.missing.append(product_id)
        elif product.is_out_of_stock:
            result.unavailable.append(product)
        else:
            result.available.append(product)
    return result
