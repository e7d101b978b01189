"""Tests for the exercise catalog."""

import pytest

from demogen.exercises import (
    BODYWEIGHT,
    CATALOG,
    EXERCISES,
    TIER_RANK,
    expand_equipment,
    exercise_pool,
    get_exercise,
    tier_pool,
)


class TestCatalog:
    def test_ids_unique(self):
        assert len(EXERCISES) == len(CATALOG)

    def test_every_tier_populated(self):
        for tier in TIER_RANK:
            assert any(ex.tier == tier for ex in CATALOG)

    def test_bodyweight_exercises_have_no_load(self):
        for ex in CATALOG:
            if ex.equipment == BODYWEIGHT:
                assert ex.load_factor == 0.0

    def test_names_are_hebrew(self):
        for ex in CATALOG:
            assert any("א" <= ch <= "ת" for ch in ex.name), ex.exercise_id

    def test_get_exercise(self):
        assert get_exercise("barbell_back_squat").tier == "intermediate"

    def test_get_unknown_exercise(self):
        with pytest.raises(KeyError):
            get_exercise("nonexistent")


class TestPools:
    def test_beginner_pool_only_beginner(self):
        assert all(ex.tier == "beginner" for ex in tier_pool("beginner"))

    def test_pools_are_cumulative(self):
        beginner = set(tier_pool("beginner"))
        intermediate = set(tier_pool("intermediate"))
        advanced = set(tier_pool("advanced"))
        assert beginner < intermediate < advanced
        assert advanced == set(CATALOG)

    def test_no_equipment_means_bodyweight(self):
        pool = exercise_pool("beginner", frozenset())
        assert pool
        assert all(ex.equipment == BODYWEIGHT for ex in pool)

    def test_full_gym_unlocks_barbell(self):
        pool = exercise_pool("intermediate", frozenset({"full_gym"}))
        assert any(ex.equipment == "barbell" for ex in pool)

    def test_unmatched_equipment_falls_back_to_tier(self):
        catalog = tuple(ex for ex in CATALOG if ex.equipment == "barbell")
        pool = exercise_pool("advanced", frozenset({"dumbbells"}), catalog)
        assert pool == tier_pool("advanced", catalog)

    def test_empty_catalog(self):
        assert exercise_pool("advanced", frozenset({"full_gym"}), ()) == []

    def test_expand_equipment(self):
        expanded = expand_equipment({"full_gym"})
        assert BODYWEIGHT in expanded
        assert "barbell" in expanded
