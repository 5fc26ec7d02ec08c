"""Tests for core/utils.py — hashing, salted picks and token similarity."""

import pytest

from soulseed.core.utils import (
    EMPTY_PLACEHOLDER,
    fnv1a_32,
    jaccard,
    offset_seed,
    pick_salted,
    rotate,
    seed_for,
    token_set,
    unique,
)


class TestFnv1a:
    def test_known_vectors(self):
        """Standard 32-bit FNV-1a test vectors."""
        assert fnv1a_32("") == 2166136261
        assert fnv1a_32("a") == 0xE40C292C
        assert fnv1a_32("foobar") == 0xBF9CF968

    def test_stays_within_32_bits(self):
        h = fnv1a_32("x" * 1000)
        assert 0 <= h <= 0xFFFFFFFF

    def test_seed_uses_placeholder_for_empty_text(self):
        assert seed_for("") == fnv1a_32(EMPTY_PLACEHOLDER)

    def test_seed_is_case_insensitive(self):
        assert seed_for("Exams Tomorrow") == seed_for("exams tomorrow")

    def test_offset_seed_wraps(self):
        assert offset_seed(0xFFFFFFFF, 1) == 0
        assert offset_seed(10, 7) == 17


class TestSelection:
    def test_pick_salted_indexes_by_seed_plus_salt(self):
        pool = ["a", "b", "c"]
        assert pick_salted(pool, 0) == "a"
        assert pick_salted(pool, 1, salt=1) == "c"
        assert pick_salted(pool, 10, salt=0) == "b"

    def test_pick_salted_empty_pool_raises(self):
        with pytest.raises(ValueError):
            pick_salted([], 3)

    def test_rotate(self):
        assert rotate([1, 2, 3, 4], 1) == [2, 3, 4, 1]
        assert rotate([1, 2, 3, 4], 6) == [3, 4, 1, 2]
        assert rotate([], 5) == []

    def test_unique_keeps_first_occurrence(self):
        assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


class TestSimilarity:
    def test_token_set_drops_short_tokens(self):
        tokens = token_set("I am OK, but so tired of it all!")
        assert tokens == frozenset({"but", "tired", "all"})

    def test_jaccard_identical(self):
        a = token_set("the same words here")
        assert jaccard(a, a) == pytest.approx(1.0)

    def test_jaccard_partial(self):
        a = frozenset({"one", "two", "three"})
        b = frozenset({"two", "three", "four"})
        assert jaccard(a, b) == pytest.approx(0.5)

    def test_jaccard_empty_sets(self):
        assert jaccard(frozenset(), frozenset()) == 0.0
