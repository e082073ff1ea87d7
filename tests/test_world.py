"""Tests for world seeding."""

import pytest

from pokestack.prng import RandomSource


class TestSeedWorld:
    def test_creates_wild_pokemon(self, tk):
        created = tk.seed_world(10, {"lat": 45.0, "lng": 7.0}, 2000, RandomSource(10))
        assert len(created) == 10
        assert tk.pokemon.count() == 10
        assert len(tk.pokemon.get_wild()) == 10
        for pokemon in created:
            assert pokemon["owner_id"] is None
            assert pokemon["location"] is not None

    def test_ids_are_unique(self, tk):
        created = tk.seed_world(25, {"lat": 0.0, "lng": 0.0}, rng=RandomSource(2))
        assert len({p["id"] for p in created}) == 25

    def test_negative_count(self, tk):
        with pytest.raises(ValueError):
            tk.seed_world(-1, {"lat": 0.0, "lng": 0.0})

    def test_synthesize_stores_record(self, tk):
        pokemon = tk.synthesize(133, 20, {"lat": 1.0, "lng": 2.0}, RandomSource(4))
        assert tk.get_pokemon(pokemon["id"]) == pokemon
        assert tk.pokemon.get_by_species(133) == [pokemon]
