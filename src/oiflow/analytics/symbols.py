"""Symbol identifier canonicalization and matching.

Snapshots produced by different tools, and user search input, spell the same
Persian-script symbol with different code points (Arabic vs. Persian yeh and
kaf, hamza/madda alef variants) and stray whitespace. Comparing canonical
forms absorbs that noise.
"""

from __future__ import annotations

import re
from typing import Any, Iterable

from oiflow.data.fields import resolve_symbol
from oiflow.types import Record

_WHITESPACE = re.compile(r"\s+")

# Letter variants folded to one canonical code point.
_FOLDED_CHARACTERS = str.maketrans({
    "آ": "ا",  # alef with madda above -> alef
    "إ": "ا",  # alef with hamza below -> alef
    "أ": "ا",  # alef with hamza above -> alef
    "ي": "ی",  # arabic yeh -> farsi yeh
    "ك": "ک",  # arabic kaf -> keheh
})


def normalize_symbol(value: Any) -> str:
    """Return the canonical form of a symbol identifier.

    Whitespace is removed entirely, letter variants are folded and the
    result is lower-cased. Empty or missing values normalize to "".
    """
    if value is None or value == "":
        return ""
    text = _WHITESPACE.sub("", str(value).strip())
    return text.translate(_FOLDED_CHARACTERS).lower()


def symbols_match(left: Any, right: Any) -> bool:
    """Whether two identifiers denote the same symbol."""
    return normalize_symbol(left) == normalize_symbol(right)


def record_matches(record: Record, normalized_target: str) -> bool:
    """Whether a record's symbol normalizes to an already-normalized target."""
    return normalize_symbol(resolve_symbol(record)) == normalized_target


def filter_records(records: Iterable[Record], query: Any) -> list[Record]:
    """Keep records whose canonical symbol contains the canonical query.

    :param records: Records to search.
    :param query: Search text in any form; empty keeps every record.
    :returns: Matching records in input order.
    """
    needle = normalize_symbol(query)
    if not needle:
        return list(records)
    return [
        record for record in records
        if needle in normalize_symbol(resolve_symbol(record))
    ]


__all__ = [
    "normalize_symbol",
    "symbols_match",
    "record_matches",
    "filter_records",
    "resolve_symbol",
]
