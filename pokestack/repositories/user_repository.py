import logging
import time
from typing import Optional
from pokestack.constants import BAG_KEYS, MAX_MOVE_DIST_SQ
from pokestack.database import Database
from pokestack.errors import PlayerNotFoundError, TransientPersistenceError
from pokestack.geo import offset_location, offset_dist_sq

logger = logging.getLogger(__name__)

DEFAULT_LOCATION: dict[str, float] = {"lat": 0.0, "lng": 0.0}

class UserRepository:
	def __init__(self, db: Database):
		self.db = db

	def _require(self, user_id: str) -> dict:
		users = self.db.get("users")
		user = users.get(user_id)

		if user is None:
			raise PlayerNotFoundError(user_id)

		return user

	def create(self, worker_num: Optional[int] = None, location: Optional[dict] = None, bag: Optional[dict] = None) -> dict:
		with self.db.transaction():
			users = self.db.get("users")
			user_id = str(self.db.next_id("users"))

			user = {
				"id": user_id,
				"worker_num": worker_num,
				"bag": {k: max(0, int((bag or {}).get(k, 0))) for k in BAG_KEYS},
				"pokemon_ids": [],
				"stadium_ids": [],
				"location": dict(location or DEFAULT_LOCATION),
				"joined_on": int(time.time() * 1000)
			}

			users[user_id] = user

		return self.db.fetch("users", user_id)

	def find_or_create(self, worker_num: int, location: Optional[dict] = None) -> dict:
		if isinstance(worker_num, bool) or not isinstance(worker_num, int) or worker_num <= 0:
			raise ValueError(f"Invalid worker number: {worker_num}")

		with self.db.transaction():
			for user in self.db.get("users").values():
				if user.get("worker_num") == worker_num:
					return self.db.fetch("users", user["id"])

			return self.create(worker_num=worker_num, location=location)

	def get(self, user_id: str) -> Optional[dict]:
		return self.db.fetch("users", user_id)

	def exists(self, user_id: str) -> bool:
		return self.db.fetch("users", user_id) is not None

	def save_bag(
		self,
		user_id: str,
		bag: dict[str, int],
		add_pokemon_id: Optional[int] = None,
		expected: Optional[dict[str, int]] = None
	) -> dict:
		"""
		Writes bag counters. With expected, the write only goes through while the
		stored counters still equal those values, otherwise TransientPersistenceError.
		"""
		for key, value in bag.items():
			if value < 0:
				raise ValueError(f"Bag counter cannot be negative: {key}={value}")

		with self.db.transaction():
			user = self._require(user_id)

			if expected is not None:
				stored = {k: user["bag"].get(k, 0) for k in expected}
				if stored != expected:
					raise TransientPersistenceError(
						f"Bag of user {user_id} changed during capture: {stored} != {expected}"
					)

			user["bag"].update(bag)

			if add_pokemon_id is not None and add_pokemon_id not in user["pokemon_ids"]:
				user["pokemon_ids"].append(add_pokemon_id)

		return dict(user["bag"])

	def set_item(self, user_id: str, item_id: str, quantity: int) -> dict:
		if item_id not in BAG_KEYS:
			raise ValueError(f"Unknown bag item: {item_id}")

		return self.save_bag(user_id, {item_id: quantity})

	def drop_items(self, user_id: str, items: dict) -> dict:
		"""Removes items from the bag. Unknown items and non-positive amounts are ignored."""
		drops = {}

		for key in BAG_KEYS:
			try:
				amount = int(items.get(key, 0))
			except (TypeError, ValueError):
				continue

			if amount > 0:
				drops[key] = amount

		with self.db.transaction():
			user = self._require(user_id)
			bag = user["bag"]

			for key, amount in drops.items():
				bag[key] = max(0, bag.get(key, 0) - amount)

		return dict(bag)

	def move(self, user_id: str, offset: dict[str, float]) -> dict[str, float]:
		if offset_dist_sq(offset) > MAX_MOVE_DIST_SQ:
			raise ValueError("Cannot move more than 50km at a time")

		with self.db.transaction():
			user = self._require(user_id)
			new_location = offset_location(user["location"], offset)
			user["location"] = new_location

			pokemon = self.db.get("pokemon")
			for pokemon_id in user["pokemon_ids"]:
				owned = pokemon.get(str(pokemon_id))
				if owned is not None:
					owned["location"] = dict(new_location)

		logger.debug(f"User {user_id} moved to {new_location}")
		return dict(new_location)

	def count(self) -> int:
		return self.db.count("users")
