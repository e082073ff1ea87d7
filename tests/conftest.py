from pathlib import Path

import pytest

from pokestack.config import Config
from pokestack.prng import RandomSource
from pokestack.toolkit import Toolkit

BASE_STATS = Path(__file__).resolve().parent.parent / "data" / "api" / "base-stats.json"


class FixedRandom(RandomSource):
    """Random source whose Bernoulli trials always return the same answer."""

    def __init__(self, outcome: bool):
        super().__init__(0)
        self.outcome = outcome
        self.probabilities = []

    def bernoulli(self, p: float) -> bool:
        self.probabilities.append(p)
        return self.outcome


class ScriptedChisq(RandomSource):
    """Random source that replays a fixed list of chi-squared draws."""

    def __init__(self, draws):
        super().__init__(0)
        self.draws = list(draws)

    def chisq(self, degrees: int) -> float:
        return self.draws.pop(0)


@pytest.fixture
def config(tmp_path):
    return Config(
        database_path=str(tmp_path / "database.json"),
        base_stats_path=str(BASE_STATS),
    )


@pytest.fixture
def tk(config):
    return Toolkit(config)


@pytest.fixture
def always_succeed():
    return FixedRandom(True)


@pytest.fixture
def always_fail():
    return FixedRandom(False)


@pytest.fixture
def scripted():
    return ScriptedChisq
