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
"""Data models for catalog products and outlet query results."""

from pydantic import BaseModel, ConfigDict


class Product(BaseModel):
    """A catalog product and the outlets known to carry it.

    Products are frozen: a published catalog is shared by every query.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    name: str
    stores: tuple[str, ...] = ()

    @property
    def is_out_of_stock(self) -> bool:
        return not self.stores

    @property
    def label(self) -> str:
        """Display label, e.g. ``AO Thun Basic (AB12)``."""
        return f"{self.name} ({self.id.upper()})"


class Outlet(BaseModel):
    """An outlet selected for a query."""

    name: str
    products: list[str] = []
    introduces: int = 0


class ParsedQuery(BaseModel):
    """Product IDs resolved from a raw query string."""

    ids: list[str] = []
    invalid_tokens: list[str] = []
    unknown_tokens: list[str] = []


class Classification(BaseModel):
    """Requested products split by catalog availability."""

    available: list[Product] = []
    unavailable: list[Product] = []
    missing: list[str] = []


class QueryResult(BaseModel):
    """Outcome of a query: messages for the caller plus the outlet covering."""

    errors: list[str] = []
    warnings: list[str] = []
    outlets: list[Outlet] = []
    total_products: int = 0
    products: dict[str, Product] = {}
    invalid_tokens: list[str] = []
    missing: list[str] = []
    unavailable: list[str] = []

    def covers_all(self, outlet: Outlet) -> bool:
        """Return True if the outlet carries every available requested product."""
        return self.total_products > 0 and len(outlet.products) == self.total_products
