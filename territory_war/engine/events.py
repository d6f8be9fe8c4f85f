"""
Game events for UI hooks and logging.
Events describe what happened during action processing.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class GameEvent:
    """Base event class. All events have a type and payload."""
    type: str
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}


# ===== Event Type Constants =====

# Session events
GAME_STARTED = "game_started"
MISSION_ASSIGNED = "mission_assigned"
PHASE_CHANGED = "phase_changed"
GAME_QUIT = "game_quit"

# Combat events
ATTACK_RESOLVED = "attack_resolved"
TERRITORY_CONQUERED = "territory_conquered"

# Mission events
MISSION_CHECKED = "mission_checked"
VICTORY = "victory"

# Rejections (recoverable errors reported back to the shell)
COMMAND_REJECTED = "command_rejected"


# ===== Event Factory Functions =====

def game_started(player_color: str, territories: list[dict[str, Any]]) -> GameEvent:
    return GameEvent(GAME_STARTED, {
        "player_color": player_color,
        "territories": territories,
    })


def mission_assigned(mission: dict[str, Any], description: str) -> GameEvent:
    return GameEvent(MISSION_ASSIGNED, {
        "mission": mission,
        "description": description,
    })


def phase_changed(old_phase: str, new_phase: str) -> GameEvent:
    return GameEvent(PHASE_CHANGED, {
        "old_phase": old_phase,
        "new_phase": new_phase,
    })


def attack_resolved(
    origin: int,
    destination: int,
    outcome: dict[str, Any],
) -> GameEvent:
    """
    outcome is AttackOutcome.to_dict():
    {attacker_roll, defender_roll, outcome, troop_deltas, conquered, previous_color}
    """
    return GameEvent(ATTACK_RESOLVED, {
        "origin": origin,
        "destination": destination,
        **outcome,
    })


def territory_conquered(
    territory: str,
    index: int,
    old_color: str,
    new_color: str,
    troops: int,
) -> GameEvent:
    return GameEvent(TERRITORY_CONQUERED, {
        "territory": territory,
        "index": index,
        "old_color": old_color,
        "new_color": new_color,
        "troops": troops,
    })


def mission_checked(description: str, completed: bool, automatic: bool) -> GameEvent:
    return GameEvent(MISSION_CHECKED, {
        "description": description,
        "completed": completed,
        "automatic": automatic,  # True when checked after an attack rather than on request
    })


def victory(winner: str, description: str, turn_number: int) -> GameEvent:
    return GameEvent(VICTORY, {
        "winner": winner,
        "mission": description,
        "turn_number": turn_number,
    })


def game_quit(turn_number: int) -> GameEvent:
    return GameEvent(GAME_QUIT, {"turn_number": turn_number})


def command_rejected(action_type: str, error_kind: str, message: str) -> GameEvent:
    return GameEvent(COMMAND_REJECTED, {
        "action": action_type,
        "error": error_kind,
        "message": message,
    })
