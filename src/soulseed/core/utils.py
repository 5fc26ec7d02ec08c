"""
Small deterministic helpers for the guidance composer.

Hashing, salted pool selection and token-set similarity. Pure Python,
no randomness: identical inputs always give identical outputs.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Sequence, TypeVar

T = TypeVar("T")

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
UINT32_MASK = 0xFFFFFFFF

EMPTY_PLACEHOLDER = "(empty)"

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash over the characters of ``text``."""
    h = FNV_OFFSET_BASIS
    for ch in text:
        h ^= ord(ch)
        h = (h * FNV_PRIME) & UINT32_MASK
    return h


def seed_for(normalized_text: str) -> int:
    """Seed for phrase selection, derived from lower-cased normalized text."""
    return fnv1a_32(normalized_text.lower() or EMPTY_PLACEHOLDER)


def offset_seed(seed: int, delta: int) -> int:
    return (seed + delta) & UINT32_MASK


def pick_salted(pool: Sequence[T], seed: int, salt: int = 0) -> T:
    """Pick ``pool[(seed + salt) mod len(pool)]``."""
    if not pool:
        raise ValueError("cannot pick from an empty pool")
    return pool[(seed + salt) % len(pool)]


def rotate(pool: Sequence[T], amount: int) -> List[T]:
    """Return ``pool`` rotated left by ``amount`` positions."""
    if not pool:
        return []
    k = amount % len(pool)
    return list(pool[k:]) + list(pool[:k])


def unique(items: Sequence[T]) -> List[T]:
    """Drop duplicates, keeping first occurrences in order."""
    out: List[T] = []
    for item in items:
        if item not in out:
            out.append(item)
    return out


def token_set(text: str, min_len: int = 3) -> FrozenSet[str]:
    """Lower-cased alphanumeric tokens of at least ``min_len`` characters."""
    return frozenset(t for t in _TOKEN_RE.findall(text.lower()) if len(t) >= min_len)


def jaccard(a: FrozenSet[str], b: FrozenSet[str]) -> float:
    """Jaccard similarity |a & b| / |a | b|; two empty sets count as 0."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)
