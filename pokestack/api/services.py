import orjson
from pathlib import Path
from typing import Optional, Union, TypeAlias
from dataclasses import dataclass
from functools import lru_cache
import logging
from pokestack.constants import STAT_KEYS
from pokestack.errors import InvalidSpeciesError

Identifier: TypeAlias = Union[str, int]

@dataclass(frozen=True)
class DataPaths:
    BASE: Path = Path("data/api")
    BASE_STATS: Path = BASE / "base-stats.json"

class SpeciesService:
    def __init__(self, path: Union[str, Path] = DataPaths.BASE_STATS):
        self.logger = logging.getLogger(__name__)
        self.path = str(path)

    @staticmethod
    @lru_cache(maxsize=4)
    def _load_json_raw(path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    @staticmethod
    @lru_cache(maxsize=4)
    def _parse_and_index(path: str) -> tuple[dict, dict]:
        data = orjson.loads(SpeciesService._load_json_raw(path))

        id_index = {}
        name_index = {}

        for item in data:
            item_id = item.get("id")
            item_name = item.get("name")

            if item_id is not None:
                id_index[item_id] = item
            if item_name is not None:
                name_index[item_name] = item

        return id_index, name_index

    def get_species(self, identifier: Identifier) -> Optional[dict]:
        id_index, name_index = self._parse_and_index(self.path)

        if isinstance(identifier, bool):
            return None

        if isinstance(identifier, int):
            return id_index.get(identifier)

        if isinstance(identifier, str):
            if identifier.isdigit():
                return id_index.get(int(identifier))
            return name_index.get(identifier.lower())

        return None

    def _require_species(self, species_id: Identifier) -> dict:
        species = self.get_species(species_id)

        if species is None or not species.get("forms"):
            raise InvalidSpeciesError(species_id)

        return species

    def get_name(self, species_id: Identifier) -> str:
        return self._require_species(species_id)["name"]

    def get_valid_forms(self, species_id: Identifier) -> tuple[str, ...]:
        return tuple(self._require_species(species_id)["forms"].keys())

    def get_base_profile(self, species_id: Identifier, form: str) -> dict[str, int]:
        forms = self._require_species(species_id)["forms"]

        if form not in forms:
            raise InvalidSpeciesError(species_id, form)

        profile = forms[form]
        missing = [k for k in STAT_KEYS if k not in profile]

        if missing:
            self.logger.error(f"Base profile for {species_id}/{form} is missing {missing}")
            raise InvalidSpeciesError(species_id, form)

        return {k: int(profile[k]) for k in STAT_KEYS}

    def all_ids(self) -> list[int]:
        id_index, _ = self._parse_and_index(self.path)
        return sorted(id_index.keys())

    @classmethod
    def clear_cache(cls) -> None:
        cls._load_json_raw.cache_clear()
        cls._parse_and_index.cache_clear()
