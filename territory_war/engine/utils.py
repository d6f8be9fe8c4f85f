"""
Utility functions for the game engine.
"""

import logging
import random
from typing import Any, Iterable, Sequence

from territory_war.engine.state import (
    GameSession,
    TerritoryStore,
    PHASE_SETUP,
    PHASE_AWAITING_COMMAND,
)
from territory_war.engine.missions import Mission, assign_random, default_catalog, describe
from territory_war.engine.events import GameEvent, game_started, mission_assigned, phase_changed

logger = logging.getLogger(__name__)


def initialize_session(
    count: int,
    entries: Iterable[tuple[str, str, int]],
    player_color: str,
    catalog: Sequence[Mission] | None = None,
    rng: random.Random | None = None,
) -> tuple[GameSession, list[GameEvent]]:
    """
    Create a session, run the setup phase and leave it awaiting the first command.

    Args:
        count: Number of territories (>= 1)
        entries: (name, color, troops) for each territory, in map order
        player_color: Army color controlled by the player
        catalog: Missions to draw from (default_catalog() if None)
        rng: Random source for the mission draw

    Returns:
        Tuple of (session, events)

    Raises:
        InvalidConfig if the territory data breaks the store invariants
    """
    store = TerritoryStore.initialize(count, entries)
    session = GameSession(store=store, player_color=player_color)
    events: list[GameEvent] = [game_started(player_color, store.to_dict())]

    if catalog is None:
        catalog = default_catalog()
    session.mission = assign_random(catalog, rng)
    logger.debug("Mission drawn: %s", session.mission)
    events.append(mission_assigned(session.mission.to_dict(), describe(session.mission)))

    session.phase = PHASE_AWAITING_COMMAND
    events.append(phase_changed(PHASE_SETUP, PHASE_AWAITING_COMMAND))
    return session, events


def territories_of_color(session: GameSession, color: str) -> list[int]:
    """Indices of territories controlled by `color`."""
    return [i for i, t in enumerate(session.store.snapshot()) if t.color == color]


def format_map_table(session: GameSession) -> str:
    """Render the map as the classic fixed-width table (index, territory, army, troops)."""
    lines = [
        f"{'#':>2} | {'Territory':<20} | {'Army':<15} | Troops",
        "-" * 52,
    ]
    for i, t in enumerate(session.store.snapshot()):
        lines.append(f"{i:>2} | {t.name:<20} | {t.color:<15} | {t.troops}")
    return "\n".join(lines)


def format_outcome(payload: dict[str, Any]) -> str:
    """One-line summary of an attack_resolved event payload."""
    text = f"Attack: {payload['attacker_roll']} | Defense: {payload['defender_roll']}"
    if payload["outcome"] == "win":
        text += " -> attacker wins"
    else:
        text += " -> defender holds, attacker lost 1 troop"
    return text
