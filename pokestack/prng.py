import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

class RandomSource:
	__slots__ = ("_rng",)

	def __init__(self, seed: Optional[int] = None):
		self._rng = random.Random(seed)

	def random(self) -> float:
		return self._rng.random()

	def uniform(self, min_val: float, max_val: float) -> float:
		return self._rng.uniform(min_val, max_val)

	def randint(self, min_val: int, max_val: int) -> int:
		"""Integer in [min_val, max_val)."""
		return self._rng.randrange(min_val, max_val)

	def chisq(self, degrees: int) -> float:
		# chi-squared(k) is gamma(k/2, 2)
		return self._rng.gammavariate(degrees / 2.0, 2.0)

	def bernoulli(self, p: float) -> bool:
		return self.random() < p

	def choice(self, items: Sequence[T]) -> T:
		if not items:
			raise ValueError("Cannot choose from an empty sequence")
		return items[self.randint(0, len(items))]
