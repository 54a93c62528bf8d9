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
"""Exceptions raised by outlet-finder."""


class OutletFinderError(Exception):
    """Base class for outlet-finder errors."""


class FeedUnavailable(OutletFinderError):
    """The catalog feed could not be obtained."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Unable to load catalog feed {source}: {reason}")


class CatalogNotReady(OutletFinderError):
    """A query was made before a catalog was published."""

    def __init__(self) -> None:
        super().__init__("Catalog has not been loaded yet")
