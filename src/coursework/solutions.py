from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable

REFERENCE_YEAR = 2024

def count_word_occurrences(sentence: str, word: str) -> int:
    """Count space-separated tokens of `sentence` equal to `word`, ignoring case.
    Splits on single spaces only, so "cat," never matches "cat".
    """
    target = word.lower()
    return sum(1 for tok in sentence.lower().split(" ") if tok == target)


@dataclass(frozen=True)
class Car:
    make: str
    model: str
    year: int

    def get_age(self) -> int:
        # may be negative for years after REFERENCE_YEAR
        return REFERENCE_YEAR - self.year

    def get_age_description(self) -> str:
        return f"{self.get_age()} (assuming current year is {REFERENCE_YEAR})"


def validate_keys(obj: Any, keys: Iterable[str]) -> bool:
    """True if every name in `keys` is present on `obj` (mapping key or attribute)."""
    is_map = isinstance(obj, Mapping)
    for k in keys:
        present = (k in obj) if is_map else hasattr(obj, k)
        if not present:
            return False
    return True
