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
"""Vietnamese sort keys for outlet names.

Outlet names are compared the way a Vietnamese reader orders them: case and
tone marks (huyền, sắc, hỏi, ngã, nặng) are ignored, while the letters
ă, â, đ, ê, ô, ơ and ư are distinct letters sorting after their base letter.
Other characters follow the CLDR root order: whitespace, then punctuation
and symbols, then digits, then letters.
"""

import unicodedata

ALPHABET = (
    "a", "ă", "â", "b", "c", "d", "đ", "e", "ê", "f", "g",
    "h", "i", "j", "k", "l", "m", "n", "o", "ô", "ơ", "p", "q", "r",
    "s", "t", "u", "ư", "v", "w", "x", "y", "z",
)

# Breve, circumflex and horn form new letters; every other mark is ignored.
LETTER_MARKS = frozenset("\u0306\u0302\u031b")

_RANKS = {unicodedata.normalize("NFD", letter): rank for rank, letter in enumerate(ALPHABET)}

# Punctuation and symbols in CLDR root collation order.
PUNCTUATION_ORDER = "_-,;:!?.'\"()[]{}@*/\\&#%`^+<=>|~$"

# Letters that collate as letter sequences at base strength.
EXPANSIONS = str.maketrans({"æ": "ae", "œ": "oe", "ø": "o"})

_PUNCTUATION_RANKS = {char: rank for rank, char in enumerate(PUNCTUATION_ORDER)}

_SPACE, _PUNCTUATION, _DIGIT, _LETTER, _OTHER = range(5)


def _clusters(text: str):
    """Yield (base character, letter-forming marks) pairs from NFD text."""
    base = None
    marks = ""
    for char in unicodedata.normalize("NFD", text):
        if unicodedata.combining(char):
            if char in LETTER_MARKS:
                marks += char
            continue
        if base is not None:
            yield base, marks
        base, marks = char, ""
    if base is not None:
        yield base, marks


def _weight(base: str, marks: str) -> tuple[int, int]:
    rank = _RANKS.get(base + marks, _RANKS.get(base))
    if rank is not None:
        return _LETTER, rank
    if base.isspace():
        return _SPACE, 0
    if base.isdigit():
        return _DIGIT, unicodedata.digit(base, ord(base))
    if base.isalpha():
        return _OTHER, ord(base)
    return _PUNCTUATION, _PUNCTUATION_RANKS.get(base, len(PUNCTUATION_ORDER) + ord(base))


def collation_key(name: str) -> tuple[tuple[int, int], ...]:
    """Return a case- and tone-insensitive Vietnamese sort key for a name.

    Names differing only in case or tone marks get equal keys; callers
    needing a total order should break ties on the name itself.
    """
    text = name.casefold().translate(EXPANSIONS)
    return tuple(_weight(base, marks) for base, marks in _clusters(text))
