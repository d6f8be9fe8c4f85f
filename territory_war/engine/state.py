"""
Game state representation.
The reducer never mutates the session it receives; it works on a deep copy.
Display and mission evaluation only see read-only TerritoryView snapshots.
"""

from dataclasses import dataclass
from copy import deepcopy
from typing import Any, Iterable

from territory_war.engine import MAX_TEXT_LENGTH
from territory_war.engine.errors import InvalidConfig, IndexOutOfRange, SameTerritory

# Session phases
PHASE_SETUP = "setup"
PHASE_AWAITING_COMMAND = "awaiting_command"
PHASE_RESOLVING = "resolving"
PHASE_WON = "won"
PHASE_QUIT = "quit"

TERMINAL_PHASES = (PHASE_WON, PHASE_QUIT)


def bounded_text(value: Any) -> str:
    """Strip surrounding whitespace and cut to MAX_TEXT_LENGTH characters."""
    if value is None:
        return ""
    return str(value).strip()[:MAX_TEXT_LENGTH]


@dataclass
class Territory:
    """A named unit of the map with one controlling color and a troop count."""
    name: str
    color: str  # controlling army color
    troops: int

    def to_view(self) -> "TerritoryView":
        return TerritoryView(name=self.name, color=self.color, troops=self.troops)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "color": self.color, "troops": self.troops}


@dataclass(frozen=True)
class TerritoryView:
    """Read-only copy of a territory, safe to hand to display and missions."""
    name: str
    color: str
    troops: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "color": self.color, "troops": self.troops}


class TerritoryStore:
    """
    Ordered, fixed-length collection of territories indexed 0..N-1.

    get/get_pair hand out mutable territories (for the combat resolver);
    snapshot hands out frozen views (for everything else).
    """

    def __init__(self, territories: list[Territory]):
        self._territories = territories

    @classmethod
    def initialize(
        cls,
        count: int,
        entries: Iterable[tuple[str, str, int]],
    ) -> "TerritoryStore":
        """
        Build a store from `count` (name, color, troops) entries.

        Raises InvalidConfig if count < 1, the number of entries differs from
        count, or any troop count is negative or not an integer.
        """
        if not isinstance(count, int) or count < 1:
            raise InvalidConfig(f"Territory count must be at least 1, got {count!r}")

        entries = list(entries)
        if len(entries) != count:
            raise InvalidConfig(f"Expected {count} territories, got {len(entries)}")

        territories = []
        for position, entry in enumerate(entries):
            try:
                name, color, troops = entry
            except (TypeError, ValueError):
                raise InvalidConfig(f"Territory {position} must be a (name, color, troops) entry")
            if isinstance(troops, bool) or not isinstance(troops, int):
                raise InvalidConfig(f"Territory {position} troop count must be an integer, got {troops!r}")
            if troops < 0:
                raise InvalidConfig(f"Territory {position} has negative troop count {troops}")
            territories.append(Territory(
                name=bounded_text(name),
                color=bounded_text(color),
                troops=troops,
            ))
        return cls(territories)

    def __len__(self) -> int:
        return len(self._territories)

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._territories):
            raise IndexOutOfRange(index, len(self._territories))

    def get(self, index: int) -> Territory:
        """Bounds-checked mutable access to one territory."""
        self._check_index(index)
        return self._territories[index]

    def get_pair(self, i: int, j: int) -> tuple[Territory, Territory]:
        """Bounds-checked mutable access to two distinct territories."""
        self._check_index(i)
        self._check_index(j)
        if i == j:
            raise SameTerritory(f"Territory {i} cannot attack itself")
        return self._territories[i], self._territories[j]

    def snapshot(self) -> tuple[TerritoryView, ...]:
        """Immutable ordered view of every territory."""
        return tuple(t.to_view() for t in self._territories)

    def to_dict(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self._territories]


@dataclass
class GameSession:
    """Complete state of one game."""
    store: TerritoryStore
    player_color: str
    # territory_war.engine.missions.Mission; None only while in setup
    mission: Any = None
    phase: str = PHASE_SETUP
    turn_number: int = 1
    # Player color once the mission is completed, None while the game is ongoing
    winner: str | None = None

    @property
    def is_over(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def copy(self) -> "GameSession":
        """Return a deep copy of this session."""
        return deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "territories": self.store.to_dict(),
            "player_color": self.player_color,
            "mission": self.mission.to_dict() if self.mission is not None else None,
            "phase": self.phase,
            "turn_number": self.turn_number,
            "winner": self.winner,
        }
