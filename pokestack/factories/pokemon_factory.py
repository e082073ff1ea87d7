import logging
from typing import Optional
from pokestack.api.services import SpeciesService
from pokestack.calculations import EVGenerator, IVGenerator, LevelGenerator, StatCalculator
from pokestack.constants import MAX_LEVEL, MIN_LEVEL, NATURES
from pokestack.prng import RandomSource

logger = logging.getLogger(__name__)

class PokemonFactory:
    def __init__(self, species: SpeciesService):
        self.species = species

    def build(
        self,
        species_id: int,
        form: str,
        nature: str,
        level: int,
        ivs: dict[str, int],
        evs: dict[str, int]
    ) -> dict:
        if nature not in NATURES:
            raise ValueError(f"Unknown nature: {nature}")

        if not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValueError(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}: {level}")

        base_stats = self.species.get_base_profile(species_id, form)
        stats = StatCalculator.calculate_all(base_stats, ivs, evs, level, nature)

        return {
            "species_id": species_id,
            "name": self.species.get_name(species_id),
            "form": form,
            "nature": nature,
            "level": level,
            "ivs": dict(ivs),
            "evs": dict(evs),
            "stats": stats
        }

    def synthesize(
        self,
        species_id: int,
        level: Optional[int] = None,
        rng: Optional[RandomSource] = None
    ) -> dict:
        rng = rng or RandomSource()

        forms = self.species.get_valid_forms(species_id)

        if level is None:
            level = LevelGenerator.generate(rng)

        form = rng.choice(forms)
        nature = rng.choice(tuple(NATURES.keys()))
        ivs = IVGenerator.generate(rng)
        evs = EVGenerator.generate(rng, level)

        return self.build(species_id, form, nature, level, ivs, evs)

    def random_pokemon(
        self,
        level: Optional[int] = None,
        rng: Optional[RandomSource] = None
    ) -> dict:
        rng = rng or RandomSource()
        species_ids = self.species.all_ids()

        if not species_ids:
            raise ValueError("No species loaded")

        return self.synthesize(rng.choice(species_ids), level, rng)
