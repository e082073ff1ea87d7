from enum import Enum
from typing import Final, Optional
from dataclasses import dataclass
from frozendict import frozendict

class BagItem(str, Enum):
	POKE_BALL = "poke-ball"
	GREAT_BALL = "great-ball"
	REVIVE = "revive"
	LURE = "lure"

@dataclass(frozen=True)
class NatureModifier:
	increased: Optional[str]
	decreased: Optional[str]

NATURES: Final[frozendict[str, NatureModifier]] = frozendict({
	"Hardy": NatureModifier(None, None),
	"Lonely": NatureModifier("attack", "defense"),
	"Brave": NatureModifier("attack", "speed"),
	"Adamant": NatureModifier("attack", "special-attack"),
	"Naughty": NatureModifier("attack", "special-defense"),
	"Bold": NatureModifier("defense", "attack"),
	"Docile": NatureModifier(None, None),
	"Relaxed": NatureModifier("defense", "speed"),
	"Impish": NatureModifier("defense", "special-attack"),
	"Lax": NatureModifier("defense", "special-defense"),
	"Timid": NatureModifier("speed", "attack"),
	"Hasty": NatureModifier("speed", "defense"),
	"Serious": NatureModifier(None, None),
	"Jolly": NatureModifier("speed", "special-attack"),
	"Naive": NatureModifier("speed", "special-defense"),
	"Modest": NatureModifier("special-attack", "attack"),
	"Mild": NatureModifier("special-attack", "defense"),
	"Quiet": NatureModifier("special-attack", "speed"),
	"Bashful": NatureModifier(None, None),
	"Rash": NatureModifier("special-attack", "special-defense"),
	"Calm": NatureModifier("special-defense", "attack"),
	"Gentle": NatureModifier("special-defense", "defense"),
	"Sassy": NatureModifier("special-defense", "speed"),
	"Careful": NatureModifier("special-defense", "special-attack"),
	"Quirky": NatureModifier(None, None)
})

STAT_KEYS: Final[tuple[str, ...]] = ("hp", "attack", "defense", "special-attack", "special-defense", "speed")

BAG_KEYS: Final[tuple[str, ...]] = tuple(item.value for item in BagItem)

DEFAULT_FORM: Final[str] = "normal"

IV_DRAW_MAX: Final[int] = 15
IV_DRAW_DEGREES: Final[int] = 3
IV_DRAW_SCALE: Final[float] = 2.0

EV_PER_STAT_MAX: Final[int] = 255
EV_TOTAL_MAX: Final[int] = 510
EV_MULT_DEGREES: Final[int] = 1
EV_MULT_LEVEL_EXPONENT: Final[float] = 1.4
EV_DRAW_DEGREES: Final[int] = 5
EV_DRAW_SCALE: Final[float] = 25.0
EV_REDISTRIBUTION_MAX_ITERATIONS: Final[int] = 1000

LEVEL_DEGREES: Final[int] = 2
LEVEL_SCALE: Final[float] = 5.0
MAX_LEVEL: Final[int] = 100
MIN_LEVEL: Final[int] = 1

GREAT_BALL_LEVEL_THRESHOLD: Final[int] = 40
GREAT_BALL_DIVISOR: Final[float] = 220.0
POKE_BALL_DIVISOR: Final[float] = 120.0

EARTH_RADIUS_METERS: Final[float] = 6378137.0
MAX_MOVE_DIST_SQ: Final[float] = 25e8
