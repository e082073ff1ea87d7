import itertools
import logging
from typing import Optional
from pokestack.api.services import SpeciesService
from pokestack.config import Config
from pokestack.database import Database
from pokestack.errors import CreatureNotFoundError, PlayerNotFoundError, TransientPersistenceError
from pokestack.factories.pokemon_factory import PokemonFactory
from pokestack.geo import random_location
from pokestack.prng import RandomSource
from pokestack.repositories.pokemon_repository import PokemonRepository
from pokestack.repositories.user_repository import UserRepository
from pokestack.services.capture_service import CaptureOutcome, CaptureService

logger = logging.getLogger(__name__)

class Toolkit:
	def __init__(self, config: Optional[Config] = None):
		self.config = config or Config()
		self.db = Database(self.config.database_path)
		self.species = SpeciesService(self.config.base_stats_path)
		self.users = UserRepository(self.db)
		self.pokemon = PokemonRepository(self.db)
		self.factory = PokemonFactory(self.species)
		self.capture_service = CaptureService(self.db, self.users, self.pokemon)
		self._rng_counter = itertools.count()

	def rng(self) -> RandomSource:
		"""A fresh random source per call; derived from the configured seed when there is one."""
		if self.config.seed is None:
			return RandomSource()
		return RandomSource(self.config.seed + next(self._rng_counter))

	def find_or_create_user(self, worker_num: int, location: Optional[dict] = None) -> dict:
		return self.users.find_or_create(worker_num, location)

	def get_user(self, user_id: str) -> Optional[dict]:
		return self.users.get(user_id)

	def get_pokemon(self, pokemon_id: int) -> Optional[dict]:
		return self.pokemon.get(pokemon_id)

	def get_user_pokemon(self, user_id: str) -> list[dict]:
		if not self.users.exists(user_id):
			raise PlayerNotFoundError(user_id)
		return self.pokemon.get_all_by_owner(user_id)

	def synthesize(
		self,
		species_id: int,
		level: Optional[int] = None,
		location: Optional[dict] = None,
		rng: Optional[RandomSource] = None
	) -> dict:
		data = self.factory.synthesize(species_id, level, rng or self.rng())
		return self.pokemon.create(data, location)

	def seed_world(
		self,
		count: int,
		center: dict[str, float],
		radius: float = 5000.0,
		rng: Optional[RandomSource] = None
	) -> list[dict]:
		if count < 0:
			raise ValueError(f"Count cannot be negative: {count}")

		rng = rng or self.rng()
		created = []

		with self.db.transaction():
			for _ in range(count):
				data = self.factory.random_pokemon(rng=rng)
				created.append(self.pokemon.create(data, random_location(center, radius, rng)))

		logger.info(f"Seeded {len(created)} wild Pokemon around {center}")
		return created

	def capture(self, user_id: str, pokemon_id: int, rng: Optional[RandomSource] = None) -> CaptureOutcome:
		rng = rng or self.rng()
		attempts = max(1, self.config.capture_retries)

		for attempt in range(1, attempts + 1):
			user = self.users.get(user_id)
			if user is None:
				raise PlayerNotFoundError(user_id)

			pokemon = self.pokemon.get(pokemon_id)
			if pokemon is None:
				raise CreatureNotFoundError(pokemon_id)

			try:
				return self.capture_service.resolve(user, pokemon, rng)
			except TransientPersistenceError as e:
				logger.warning(f"Capture conflict ({attempt}/{attempts}): {e}")
				if attempt == attempts:
					raise

	def drop_items(self, user_id: str, items: dict) -> dict:
		return self.users.drop_items(user_id, items)

	def move_user(self, user_id: str, offset: dict[str, float]) -> dict[str, float]:
		return self.users.move(user_id, offset)
