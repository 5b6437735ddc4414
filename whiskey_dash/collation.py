"""Locale-style ordering for display names."""
from __future__ import annotations

import unicodedata


def collation_key(value: str) -> tuple[str, str, str]:
    """Sort key approximating a US-English locale comparison.

    Names compare by their base letters first, ignoring accents and case, so
    ``Écosse`` sorts with the E's.  Ties fall back to the accented spelling
    and then put the lowercase spelling ahead of the uppercase one, as a
    locale collator does.
    """

    folded = value.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base, folded, value.swapcase()
