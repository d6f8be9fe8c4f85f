"""
Mission system.
A mission is a closed, tagged variant drawn once per game from a fixed catalog.
Every predicate is a pure function of (territory snapshot, player color).
"""

import random
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from territory_war.engine.errors import InvalidConfig
from territory_war.engine.state import TerritoryView

OWNS_AT_LEAST = "owns_at_least"
TROOP_SUM_AT_LEAST = "troop_sum_at_least"
CONSECUTIVE_PAIR_OWNED = "consecutive_pair_owned"
ALL_COLORS_REPRESENTED = "all_colors_represented"
ALL_TERRITORIES_OWNED = "all_territories_owned"
NO_TERRITORY_OF_COLOR = "no_territory_of_color"


@dataclass(frozen=True)
class Mission:
    """A secret victory condition. target/color are bound per catalog entry."""
    kind: str
    target: int | None = None  # k for the *_at_least kinds
    color: str | None = None  # targeted color for no_territory_of_color

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "target": self.target, "color": self.color}


# ===== Mission constructors =====

def owns_at_least(k: int) -> Mission:
    return Mission(OWNS_AT_LEAST, target=k)


def troop_sum_at_least(k: int) -> Mission:
    return Mission(TROOP_SUM_AT_LEAST, target=k)


def consecutive_pair_owned() -> Mission:
    return Mission(CONSECUTIVE_PAIR_OWNED)


def all_colors_represented() -> Mission:
    return Mission(ALL_COLORS_REPRESENTED)


def all_territories_owned() -> Mission:
    return Mission(ALL_TERRITORIES_OWNED)


def no_territory_of_color(color: str) -> Mission:
    return Mission(NO_TERRITORY_OF_COLOR, color=color)


def default_catalog(elimination_color: str = "Vermelho") -> tuple[Mission, ...]:
    """
    Default mission table. The first three are the classic missions
    (conquer 2 territories, eliminate one army, control 15 troops).
    """
    return (
        owns_at_least(2),
        no_territory_of_color(elimination_color),
        troop_sum_at_least(15),
        consecutive_pair_owned(),
        owns_at_least(3),
        all_colors_represented(),
        all_territories_owned(),
    )


# ===== Predicates =====

def _owns_at_least(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    owned = sum(1 for t in snapshot if t.color == player_color)
    return owned >= (mission.target or 0)


def _troop_sum_at_least(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    total = sum(t.troops for t in snapshot if t.color == player_color)
    return total >= (mission.target or 0)


def _consecutive_pair_owned(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    for left, right in zip(snapshot, snapshot[1:]):
        if left.color == player_color and right.color == player_color:
            return True
    return False


def _all_colors_represented(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    """
    For every color on the map, some territory must have exactly that color
    AND be the player's. That is only possible when the player's color is the
    only one on the map; it is NOT "the player holds one territory of each color".
    """
    colors = []
    for t in snapshot:
        if t.color not in colors:
            colors.append(t.color)

    for color in colors:
        represented = False
        for t in snapshot:
            if t.color == color and t.color == player_color:
                represented = True
                break
        if not represented:
            return False
    return True


def _all_territories_owned(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    return all(t.color == player_color for t in snapshot)


def _no_territory_of_color(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    return all(t.color != mission.color for t in snapshot)


_PREDICATES: dict[str, Callable[[Mission, Sequence[TerritoryView], str], bool]] = {
    OWNS_AT_LEAST: _owns_at_least,
    TROOP_SUM_AT_LEAST: _troop_sum_at_least,
    CONSECUTIVE_PAIR_OWNED: _consecutive_pair_owned,
    ALL_COLORS_REPRESENTED: _all_colors_represented,
    ALL_TERRITORIES_OWNED: _all_territories_owned,
    NO_TERRITORY_OF_COLOR: _no_territory_of_color,
}

MISSION_KINDS = tuple(_PREDICATES)


def evaluate(mission: Mission, snapshot: Sequence[TerritoryView], player_color: str) -> bool:
    """
    Check whether the mission is fulfilled on this snapshot.
    Never mutates; same snapshot and color always give the same answer.
    """
    predicate = _PREDICATES.get(mission.kind)
    if predicate is None:
        raise ValueError(f"Unknown mission kind: {mission.kind}")
    return predicate(mission, tuple(snapshot), player_color)


def assign_random(catalog: Sequence[Mission], rng: random.Random | None = None) -> Mission:
    """Draw one mission uniformly from the catalog (a single randrange over its size)."""
    if not catalog:
        raise InvalidConfig("Mission catalog is empty")
    rng = rng if rng is not None else random.Random()
    return catalog[rng.randrange(len(catalog))]


def describe(mission: Mission) -> str:
    """Human-readable mission text for the player."""
    if mission.kind == OWNS_AT_LEAST:
        return f"Control at least {mission.target} territories."
    if mission.kind == TROOP_SUM_AT_LEAST:
        return f"Control at least {mission.target} troops."
    if mission.kind == CONSECUTIVE_PAIR_OWNED:
        return "Control two neighbouring territories (consecutive on the map)."
    if mission.kind == ALL_COLORS_REPRESENTED:
        return "Have your army represent every color on the map."
    if mission.kind == ALL_TERRITORIES_OWNED:
        return "Conquer every territory."
    if mission.kind == NO_TERRITORY_OF_COLOR:
        return f"Eliminate all {mission.color} armies."
    return "Unknown mission."
