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
"""Choose an ordered set of outlets covering the requested products.

This is a greedy approximation of minimum set cover. Outlets are grouped
into buckets by how many requested products they carry, largest first.
Within a bucket, the outlet introducing the most products not yet covered
is taken next, ties going to the outlet name in Vietnamese collation order.
The result is fully determined by the input.
"""

import logging
from collections.abc import Iterable, Sequence
from itertools import groupby

from outlet_finder.collation import collation_key
from outlet_finder.models import Outlet, Product

logger = logging.getLogger(__name__)


def count_new_products(products: Iterable[str], covered: set[str]) -> int:
    """Count the products not already in the covered set."""
    return sum(1 for product_id in products if product_id not in covered)


def _name_key(outlet: Outlet) -> tuple:
    return collation_key(outlet.name), outlet.name


def build_outlets(available: Sequence[Product], requested_order: Sequence[str]) -> list[Outlet]:
    """Build one Outlet per store name, listing the requested products it carries.

    Each outlet's products follow the request order. Outlets carrying no
    requested product are dropped.
    """
    carried: dict[str, set[str]] = {}
    available_ids = set()
    for product in available:
        available_ids.add(product.id)
        for store in product.stores:
            name = store.strip()
            if name:
                carried.setdefault(name, set()).add(product.id)

    order = list(dict.fromkeys(pid for pid in requested_order if pid in available_ids))

    outlets = []
    for name, product_ids in carried.items():
        products = [pid for pid in order if pid in product_ids]
        if products:
            outlets.append(Outlet(name=name, products=products))
    return outlets


def select_outlets(available: Sequence[Product], requested_order: Sequence[str]) -> list[Outlet]:
    """Order outlets so that few of them, taken first, cover every product.

    Args:
        available: The in-stock requested products.
        requested_order: The requested product IDs in the order the user gave
            them.

    Returns:
        Outlets in selection order, each with its ``introduces`` count set.
    """
    outlets = build_outlets(available, requested_order)
    outlets.sort(key=lambda outlet: (-len(outlet.products), _name_key(outlet)))

    ordered = []
    covered: set[str] = set()

    for size, group in groupby(outlets, key=lambda outlet: len(outlet.products)):
        bucket = list(group)
        logger.debug("Selecting from %d outlet(s) carrying %d product(s)", len(bucket), size)
        while bucket:
            best = min(
                bucket,
                key=lambda outlet: (-count_new_products(outlet.products, covered), _name_key(outlet)),
            )
            bucket.remove(best)
            ordered.append(
                best.model_copy(update={"introduces": count_new_products(best.products, covered)})
            )
            covered.update(best.products)

    return ordered
