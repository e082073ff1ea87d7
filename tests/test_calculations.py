"""Tests for stat, IV, EV and level generation."""

import pytest

from pokestack.calculations import (
    EVCalculator,
    EVGenerator,
    IVGenerator,
    LevelGenerator,
    StatCalculator,
    limit,
    nature_multipliers,
)
from pokestack.constants import EV_PER_STAT_MAX, EV_TOTAL_MAX, NATURES, STAT_KEYS
from pokestack.errors import DistributionConvergenceError
from pokestack.prng import RandomSource


class TestLimit:
    def test_truncates(self):
        assert limit(3.9) == 3
        assert limit(-0.5, min_val=0) == 0

    def test_clamps(self):
        assert limit(300.2, max_val=255) == 255
        assert limit(0.2, 1, 100) == 1


class TestNatureMultipliers:
    def test_boost_and_penalty(self):
        mults = nature_multipliers("Adamant")
        assert mults["attack"] == 1.1
        assert mults["special-attack"] == 0.9
        assert mults["hp"] == 1.0
        assert mults["speed"] == 1.0

    def test_neutral_nature(self):
        assert set(nature_multipliers("Hardy").values()) == {1.0}

    def test_rash(self):
        mults = nature_multipliers("Rash")
        assert mults["special-attack"] == 1.1
        assert mults["special-defense"] == 0.9
        assert mults["attack"] == 1.0

    def test_catalog_has_25_natures(self):
        assert len(NATURES) == 25
        for nature in NATURES:
            assert set(nature_multipliers(nature)) == set(STAT_KEYS)


class TestStatCalculator:
    def test_hp_formula(self):
        assert StatCalculator.calculate_hp(45, 0, 0, 50) == 105
        assert StatCalculator.calculate_hp(100, 15, 252, 100) == 388

    def test_stat_formula_with_nature(self):
        assert StatCalculator.calculate_stat(49, 0, 0, 50, 1.1) == 59
        assert StatCalculator.calculate_stat(65, 0, 0, 50, 0.9) == 63
        assert StatCalculator.calculate_stat(100, 15, 252, 100) == 283

    def test_calculate_all(self):
        base = {k: 100 for k in STAT_KEYS}
        ivs = {k: 15 for k in STAT_KEYS}
        evs = {k: 0 for k in STAT_KEYS}
        stats = StatCalculator.calculate_all(base, ivs, evs, 100, "Hardy")
        assert stats["hp"] == 325
        assert all(stats[k] == 220 for k in STAT_KEYS if k != "hp")

    def test_hp_lower_bound(self):
        for level in range(1, 101):
            assert StatCalculator.calculate_hp(1, 0, 0, level) >= level + 10

    def test_monotonic_in_level(self):
        base = {"hp": 35, "attack": 55, "defense": 40,
                "special-attack": 50, "special-defense": 50, "speed": 90}
        ivs = {k: 7 for k in STAT_KEYS}
        evs = {k: 80 for k in STAT_KEYS}
        previous = None
        for level in range(1, 101):
            stats = StatCalculator.calculate_all(base, ivs, evs, level, "Brave")
            if previous:
                assert all(stats[k] >= previous[k] for k in STAT_KEYS)
            previous = stats


class TestIVGenerator:
    def test_hp_packs_low_bits(self):
        assert IVGenerator.pack_hp([1, 2, 3, 4]) == 0b0101
        assert IVGenerator.pack_hp([15, 15, 15, 15]) == 0b1111
        assert IVGenerator.pack_hp([0, 0, 0, 0]) == 0

    def test_pack_bits_match_each_draw(self):
        rng = RandomSource(42)
        for _ in range(200):
            draws = IVGenerator.draw(rng)
            hp = IVGenerator.pack_hp(draws)
            for i, value in enumerate(draws):
                assert (hp >> i) & 1 == value & 1

    def test_slot_mapping(self, scripted):
        ivs = IVGenerator.generate(scripted([0.5, 1.0, 1.5, 2.0]))
        assert ivs == {
            "hp": 5,
            "attack": 1,
            "defense": 2,
            "special-attack": 4,
            "special-defense": 4,
            "speed": 3,
        }

    def test_special_stats_share_one_draw(self):
        # both special stats come from the same legacy "special" value
        rng = RandomSource(3)
        for _ in range(50):
            ivs = IVGenerator.generate(rng)
            assert ivs["special-attack"] == ivs["special-defense"]

    def test_draws_are_capped(self, scripted):
        assert IVGenerator.draw(scripted([9.0, 100.0, 0.0, 7.4])) == [15, 15, 0, 14]

    def test_range(self):
        rng = RandomSource(11)
        for _ in range(200):
            assert all(0 <= v <= 15 for v in IVGenerator.generate(rng).values())


class TestEVGenerator:
    def test_redistribute_even_excess(self):
        assert EVGenerator.redistribute([255, 255, 255, 0, 0, 0]) == [170, 170, 170, 0, 0, 0]
        assert EVGenerator.redistribute([255] * 6) == [85] * 6

    def test_redistribute_uneven_excess(self):
        evs = EVGenerator.redistribute([100, 255, 255, 255, 0, 0])
        assert evs == [11, 166, 166, 166, 0, 0]

    def test_redistribute_leaves_valid_vectors(self):
        assert EVGenerator.redistribute([10, 20, 30, 0, 0, 0]) == [10, 20, 30, 0, 0, 0]

    def test_non_convergence_raises(self):
        with pytest.raises(DistributionConvergenceError):
            EVGenerator.redistribute([255, 255, 255, 0, 0, 0], max_iterations=0)

    def test_generated_evs_are_bounded(self):
        rng = RandomSource(2024)
        for level in range(1, 101):
            for _ in range(5):
                evs = EVGenerator.generate(rng, level)
                assert set(evs) == set(STAT_KEYS)
                assert all(0 <= v <= EV_PER_STAT_MAX for v in evs.values())
                assert sum(evs.values()) <= EV_TOTAL_MAX
                assert EVCalculator.is_valid(evs)

    def test_zero_multiplier_gives_zero_evs(self, scripted):
        evs = EVGenerator.generate(scripted([0.0] + [5.0] * 6), 50)
        assert EVCalculator.total(evs) == 0


class TestLevelGenerator:
    def test_range(self):
        rng = RandomSource(9)
        levels = [LevelGenerator.generate(rng) for _ in range(500)]
        assert all(1 <= level <= 100 for level in levels)

    def test_scaling(self, scripted):
        assert LevelGenerator.generate(scripted([2.5])) == 12
        assert LevelGenerator.generate(scripted([0.1])) == 1
        assert LevelGenerator.generate(scripted([40.0])) == 100
