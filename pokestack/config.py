import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

@dataclass(frozen=True)
class Config:
	database_path: str = "database.json"
	base_stats_path: str = "data/api/base-stats.json"
	seed: Optional[int] = None
	capture_retries: int = 3

	@classmethod
	def from_env(cls) -> "Config":
		seed: Optional[str] = os.getenv("POKESTACK_SEED")
		retries: str = os.getenv("POKESTACK_CAPTURE_RETRIES", "3")

		try:
			capture_retries = int(retries)
		except ValueError:
			raise ValueError(f"POKESTACK_CAPTURE_RETRIES must be an integer: {retries}")

		if capture_retries < 1:
			raise ValueError(f"POKESTACK_CAPTURE_RETRIES must be at least 1: {capture_retries}")

		try:
			parsed_seed = int(seed) if seed else None
		except ValueError:
			raise ValueError(f"POKESTACK_SEED must be an integer: {seed}")

		return cls(
			database_path=os.getenv("POKESTACK_DATABASE", cls.database_path),
			base_stats_path=os.getenv("POKESTACK_BASE_STATS", cls.base_stats_path),
			seed=parsed_seed,
			capture_retries=capture_retries
		)
