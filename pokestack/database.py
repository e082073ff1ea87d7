import logging
import orjson
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

logger = logging.getLogger(__name__)

class Database:
	__slots__ = ("path", "_lock", "_data", "_depth")

	def __init__(self, path: str = "database.json"):
		self.path = Path(path)
		self._lock = threading.RLock()
		self._data: dict = {}
		self._depth = 0
		self._load()

	def _load(self) -> None:
		with self._lock:
			if not self.path.exists():
				self._initialize()
			else:
				self._load_from_file()

	def _initialize(self) -> None:
		self._data = {
			"users": {},
			"pokemon": {},
			"counters": {"users": 0, "pokemon": 0}
		}
		self._save()

	def _load_from_file(self) -> None:
		with open(self.path, "rb") as f:
			self._data = orjson.loads(f.read())

		self._data.setdefault("users", {})
		self._data.setdefault("pokemon", {})
		self._data.setdefault("counters", {"users": 0, "pokemon": 0})

	def save(self) -> None:
		with self._lock:
			if self._depth > 0:
				return

			self.path.parent.mkdir(parents=True, exist_ok=True)
			tmp_path = self.path.with_suffix(".tmp")
			tmp_path.write_bytes(orjson.dumps(self._data, option=orjson.OPT_INDENT_2))
			tmp_path.replace(self.path)

	def _save(self) -> None:
		self.save()

	@contextmanager
	def transaction(self) -> Iterator["Database"]:
		"""
		Groups several writes into one atomic unit.

		The lock is held for the whole block, saves inside it are deferred to
		a single write on exit, and any exception restores the data as it was
		when the outermost transaction began.
		"""
		with self._lock:
			snapshot = orjson.loads(orjson.dumps(self._data)) if self._depth == 0 else None
			self._depth += 1

			try:
				yield self
			except BaseException:
				self._depth -= 1
				if snapshot is not None:
					self._data = snapshot
					logger.debug("Transaction rolled back")
				raise
			else:
				self._depth -= 1
				if self._depth == 0:
					self._save()

	def next_id(self, counter: str) -> int:
		with self._lock:
			counters = self._data["counters"]
			counters[counter] = counters.get(counter, 0) + 1
			return counters[counter]

	def get(self, key: str) -> Any:
		with self._lock:
			return self._data.get(key)

	def fetch(self, key: str, item_id: str) -> Optional[dict]:
		with self._lock:
			item = self._data[key].get(item_id)
			return orjson.loads(orjson.dumps(item)) if item is not None else None

	def select(self, key: str, predicate: Optional[Callable[[dict], bool]] = None) -> list[dict]:
		"""Copies of every document in a collection that matches predicate."""
		with self._lock:
			return [
				orjson.loads(orjson.dumps(item))
				for item in self._data[key].values()
				if predicate is None or predicate(item)
			]

	def count(self, key: str) -> int:
		with self._lock:
			return len(self._data[key])
