import logging
import math
from typing import Final, Optional
from frozendict import frozendict
from pokestack.constants import (
	NATURES, STAT_KEYS,
	IV_DRAW_MAX, IV_DRAW_DEGREES, IV_DRAW_SCALE,
	EV_PER_STAT_MAX, EV_TOTAL_MAX, EV_MULT_DEGREES, EV_MULT_LEVEL_EXPONENT,
	EV_DRAW_DEGREES, EV_DRAW_SCALE, EV_REDISTRIBUTION_MAX_ITERATIONS,
	LEVEL_DEGREES, LEVEL_SCALE, MIN_LEVEL, MAX_LEVEL
)
from pokestack.errors import DistributionConvergenceError
from pokestack.prng import RandomSource

logger = logging.getLogger(__name__)

HP_STAT: Final[str] = "hp"

STAT_CALCULATION_BASE: Final[int] = 2
STAT_CALCULATION_DIVISOR: Final[int] = 100
EV_DIVISOR: Final[int] = 4

HP_BASE_BONUS: Final[int] = 10
STAT_BASE_BONUS: Final[int] = 5

NATURE_BOOST: Final[float] = 1.1
NATURE_PENALTY: Final[float] = 0.9
NATURE_NEUTRAL: Final[float] = 1.0

# base draw index feeding each stat slot; hp is the packed composite
IV_SLOT_MAP: Final[frozendict[str, Optional[int]]] = frozendict({
	"hp": None,
	"attack": 0,
	"defense": 1,
	"special-attack": 3,
	"special-defense": 3,
	"speed": 2
})

def limit(value: float, min_val: float = -math.inf, max_val: float = math.inf) -> int:
	return math.trunc(max(min_val, min(value, max_val)))

def nature_multipliers(nature: str) -> frozendict[str, float]:
	modifier = NATURES[nature]
	values = {}

	for stat_name in STAT_KEYS:
		if stat_name == HP_STAT:
			values[stat_name] = NATURE_NEUTRAL
		elif stat_name == modifier.increased:
			values[stat_name] = NATURE_BOOST
		elif stat_name == modifier.decreased:
			values[stat_name] = NATURE_PENALTY
		else:
			values[stat_name] = NATURE_NEUTRAL

	return frozendict(values)

class StatCalculator:
	@staticmethod
	def calculate_hp(base: int, iv: int, ev: int, level: int) -> int:
		stat_value = (STAT_CALCULATION_BASE * base + iv + (ev // EV_DIVISOR)) * level
		return int(stat_value / STAT_CALCULATION_DIVISOR) + level + HP_BASE_BONUS

	@staticmethod
	def calculate_stat(
		base: int,
		iv: int,
		ev: int,
		level: int,
		nature_modifier: float = NATURE_NEUTRAL
	) -> int:
		stat_value = (STAT_CALCULATION_BASE * base + iv + (ev // EV_DIVISOR)) * level
		result = int(stat_value / STAT_CALCULATION_DIVISOR) + STAT_BASE_BONUS
		return int(result * nature_modifier)

	@staticmethod
	def calculate_all(
		base_stats: dict[str, int],
		ivs: dict[str, int],
		evs: dict[str, int],
		level: int,
		nature: str
	) -> dict[str, int]:
		multipliers = nature_multipliers(nature)
		stats = {}

		for stat_name in STAT_KEYS:
			base = base_stats.get(stat_name, 0)
			iv = ivs.get(stat_name, 0)
			ev = evs.get(stat_name, 0)

			if stat_name == HP_STAT:
				stats[stat_name] = StatCalculator.calculate_hp(base, iv, ev, level)
			else:
				stats[stat_name] = StatCalculator.calculate_stat(
					base, iv, ev, level, multipliers[stat_name]
				)

		return stats

class LevelGenerator:
	@staticmethod
	def generate(rng: RandomSource) -> int:
		"""Right-skewed level: few wild Pokemon are high level."""
		return limit(rng.chisq(LEVEL_DEGREES) * LEVEL_SCALE, MIN_LEVEL, MAX_LEVEL)

class IVGenerator:
	"""
	Legacy (Gen I/II) style IVs: four 0-15 draws, an HP value packed from
	their low bits, and a single "special" draw shared by both special stats.
	"""

	@staticmethod
	def draw(rng: RandomSource) -> list[int]:
		return [
			limit(rng.chisq(IV_DRAW_DEGREES) * IV_DRAW_SCALE, max_val=IV_DRAW_MAX)
			for _ in range(4)
		]

	@staticmethod
	def pack_hp(draws: list[int]) -> int:
		hp_iv = 0
		for i, value in enumerate(draws):
			hp_iv |= (value & 1) << i
		return hp_iv

	@staticmethod
	def from_draws(draws: list[int]) -> dict[str, int]:
		hp_iv = IVGenerator.pack_hp(draws)
		return {
			stat: hp_iv if index is None else draws[index]
			for stat, index in IV_SLOT_MAP.items()
		}

	@staticmethod
	def generate(rng: RandomSource) -> dict[str, int]:
		return IVGenerator.from_draws(IVGenerator.draw(rng))

class EVGenerator:
	@staticmethod
	def draw(rng: RandomSource, level: int) -> list[int]:
		mult = rng.chisq(EV_MULT_DEGREES) * math.pow(level, EV_MULT_LEVEL_EXPONENT)
		return [
			limit(math.sqrt(rng.chisq(EV_DRAW_DEGREES) * EV_DRAW_SCALE * mult), max_val=EV_PER_STAT_MAX)
			for _ in STAT_KEYS
		]

	@staticmethod
	def redistribute(
		evs: list[int],
		total_max: int = EV_TOTAL_MAX,
		max_iterations: int = EV_REDISTRIBUTION_MAX_ITERATIONS
	) -> list[int]:
		"""Shave the excess over total_max evenly off every positive entry."""
		evs = list(evs)
		iterations = 0

		while sum(evs) > total_max:
			if iterations >= max_iterations:
				raise DistributionConvergenceError(iterations, evs)

			positive = sum(1 for v in evs if v > 0)
			diff = (sum(evs) - total_max) / positive
			evs = [limit(v - diff, min_val=0) for v in evs]
			iterations += 1

		if iterations:
			logger.debug(f"EVs redistributed in {iterations} iteration(s): {evs}")

		return evs

	@staticmethod
	def generate(rng: RandomSource, level: int) -> dict[str, int]:
		evs = EVGenerator.redistribute(EVGenerator.draw(rng, level))
		return dict(zip(STAT_KEYS, evs))

class EVCalculator:
	@staticmethod
	def total(evs: dict[str, int]) -> int:
		return sum(evs.values())

	@staticmethod
	def is_valid(evs: dict[str, int]) -> bool:
		return (
			all(0 <= v <= EV_PER_STAT_MAX for v in evs.values())
			and EVCalculator.total(evs) <= EV_TOTAL_MAX
		)
