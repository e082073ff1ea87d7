import logging
from dataclasses import dataclass, replace
from typing import Optional
from pokestack.constants import (
	BagItem, GREAT_BALL_LEVEL_THRESHOLD, GREAT_BALL_DIVISOR, POKE_BALL_DIVISOR
)
from pokestack.database import Database
from pokestack.errors import AlreadyOwnedError, PlayerNotFoundError
from pokestack.prng import RandomSource
from pokestack.repositories.pokemon_repository import PokemonRepository
from pokestack.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class Inventory:
	poke_ball: int = 0
	great_ball: int = 0

	@classmethod
	def from_bag(cls, bag: dict[str, int]) -> "Inventory":
		return cls(
			poke_ball=bag.get(BagItem.POKE_BALL.value, 0),
			great_ball=bag.get(BagItem.GREAT_BALL.value, 0)
		)

	def to_bag(self) -> dict[str, int]:
		return {
			BagItem.POKE_BALL.value: self.poke_ball,
			BagItem.GREAT_BALL.value: self.great_ball
		}

	@property
	def total(self) -> int:
		return self.poke_ball + self.great_ball

	@property
	def is_empty(self) -> bool:
		return self.poke_ball <= 0 and self.great_ball <= 0

@dataclass(frozen=True)
class CaptureOutcome:
	captured: bool
	inventory: Inventory
	attempts: int = 0

class CaptureService:
	def __init__(self, db: Database, users: UserRepository, pokemon: PokemonRepository):
		self.db = db
		self.users = users
		self.pokemon = pokemon

	@staticmethod
	def choose_ball(inventory: Inventory, level: int) -> BagItem:
		# spend great balls when they outnumber poke balls or the target is strong
		if inventory.great_ball > inventory.poke_ball or (
			inventory.great_ball > 0 and level > GREAT_BALL_LEVEL_THRESHOLD
		):
			return BagItem.GREAT_BALL
		return BagItem.POKE_BALL

	@staticmethod
	def success_probability(ball: BagItem, level: int) -> float:
		divisor = GREAT_BALL_DIVISOR if ball is BagItem.GREAT_BALL else POKE_BALL_DIVISOR
		return 1 - level / divisor

	@staticmethod
	def attempt(inventory: Inventory, level: int, rng: RandomSource) -> CaptureOutcome:
		captured = False
		attempts = 0

		while not inventory.is_empty and not captured:
			ball = CaptureService.choose_ball(inventory, level)

			if ball is BagItem.GREAT_BALL:
				inventory = replace(inventory, great_ball=inventory.great_ball - 1)
			else:
				inventory = replace(inventory, poke_ball=inventory.poke_ball - 1)

			attempts += 1
			captured = rng.bernoulli(CaptureService.success_probability(ball, level))

		return CaptureOutcome(captured=captured, inventory=inventory, attempts=attempts)

	def resolve(
		self,
		player: Optional[dict],
		creature: dict,
		rng: Optional[RandomSource] = None
	) -> CaptureOutcome:
		if player is None:
			raise PlayerNotFoundError(None)

		if creature.get("owner_id") is not None or creature.get("stadium_id") is not None:
			raise AlreadyOwnedError(creature["id"])

		initial = Inventory.from_bag(player["bag"])
		outcome = self.attempt(initial, creature["level"], rng or RandomSource())

		if outcome.attempts == 0:
			return outcome

		# stored bag must still match the snapshot the loop ran on
		with self.db.transaction():
			if outcome.captured:
				self.pokemon.transfer_ownership(creature["id"], player["id"], player["location"])

			self.users.save_bag(
				player["id"],
				outcome.inventory.to_bag(),
				add_pokemon_id=creature["id"] if outcome.captured else None,
				expected=initial.to_bag()
			)

		logger.info(
			f"User {player['id']} {'captured' if outcome.captured else 'failed to capture'} "
			f"Pokemon {creature['id']} (lv {creature['level']}) after {outcome.attempts} ball(s)"
		)

		return outcome
