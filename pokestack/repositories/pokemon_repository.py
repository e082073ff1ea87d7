from typing import Optional
from datetime import datetime, timezone
from pokestack.database import Database
from pokestack.errors import CreatureNotFoundError, TransientPersistenceError

class PokemonRepository:
    def __init__(self, db: Database):
        self.db = db

    def _require(self, pokemon_id: int) -> dict:
        pokemon = self.db.get("pokemon").get(str(pokemon_id))

        if pokemon is None:
            raise CreatureNotFoundError(pokemon_id)

        return pokemon

    def create(self, data: dict, location: Optional[dict] = None) -> dict:
        with self.db.transaction():
            pokemon_map = self.db.get("pokemon")
            pokemon_id = self.db.next_id("pokemon")

            pokemon = {
                **data,
                "id": pokemon_id,
                "owner_id": None,
                "stadium_id": None,
                "location": dict(location) if location else None,
                "created_at": datetime.now(timezone.utc).isoformat()
            }

            pokemon_map[str(pokemon_id)] = pokemon

        return self.get(pokemon_id)

    def get(self, pokemon_id: int) -> Optional[dict]:
        return self.db.fetch("pokemon", str(pokemon_id))

    def transfer_ownership(self, pokemon_id: int, owner_id: str, location: dict) -> dict:
        """
        Sets the owner of a wild Pokemon.

        Only succeeds while the Pokemon is still unowned; a concurrent capture
        that got there first raises TransientPersistenceError.
        """
        with self.db.transaction():
            pokemon = self._require(pokemon_id)

            if pokemon.get("owner_id") is not None or pokemon.get("stadium_id") is not None:
                raise TransientPersistenceError(
                    f"Pokemon {pokemon_id} changed owner during capture"
                )

            pokemon["owner_id"] = owner_id
            pokemon["location"] = dict(location)

        return self.get(pokemon_id)

    def get_all_by_owner(self, owner_id: str) -> list[dict]:
        return self.db.select("pokemon", lambda p: p.get("owner_id") == owner_id)

    def get_wild(self) -> list[dict]:
        return self.db.select(
            "pokemon",
            lambda p: p.get("owner_id") is None and p.get("stadium_id") is None
        )

    def get_by_species(self, species_id: int) -> list[dict]:
        return self.db.select("pokemon", lambda p: p["species_id"] == species_id)

    def count(self) -> int:
        return self.db.count("pokemon")
