"""
Query functions for UI integration.
These functions help the shell understand what actions are available
without mutating game state.
"""

from dataclasses import dataclass
from typing import Any

from territory_war.engine import MIN_ATTACKING_TROOPS
from territory_war.engine.state import GameSession
from territory_war.engine.actions import Action, ATTACK
from territory_war.engine.combat import check_attack_preconditions
from territory_war.engine.errors import GameError
from territory_war.engine.missions import describe
from territory_war.engine.reducer import PHASE_ALLOWED_ACTIONS
from territory_war.engine.utils import territories_of_color


@dataclass
class ValidationResult:
    """Result of action validation."""
    valid: bool
    error: str | None = None
    error_kind: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "error": self.error, "error_kind": self.error_kind}


# ===== Action Validation =====

def validate_action(session: GameSession, action: Action) -> ValidationResult:
    """
    Validate an action without applying it.
    Returns ValidationResult with valid=True or valid=False with error message.
    """
    if session.is_over:
        return ValidationResult(False, "Game is over.", "game_over")

    allowed = PHASE_ALLOWED_ACTIONS.get(session.phase, [])
    if action.type not in allowed:
        return ValidationResult(
            False,
            f"Cannot {action.type} during {session.phase} phase. Allowed: {allowed}",
            "invalid_command",
        )

    if action.type == ATTACK:
        try:
            origin, destination = session.store.get_pair(
                action.payload.get("origin"), action.payload.get("destination")
            )
            check_attack_preconditions(origin, destination, session.player_color)
        except GameError as exc:
            return ValidationResult(False, str(exc), exc.kind)

    return ValidationResult(True)


def get_available_action_types(session: GameSession) -> list[str]:
    """Action types the player may send right now (attack only if some origin can attack)."""
    if session.is_over:
        return []
    actions = list(PHASE_ALLOWED_ACTIONS.get(session.phase, []))
    if ATTACK in actions and not get_attack_origins(session):
        actions.remove(ATTACK)
    return actions


def get_attack_origins(session: GameSession) -> list[int]:
    """Indices of player territories with enough troops to attack."""
    return [
        i for i in territories_of_color(session, session.player_color)
        if session.store.get(i).troops >= MIN_ATTACKING_TROOPS
    ]


def get_attack_targets(session: GameSession, origin: int) -> list[int]:
    """Indices the given origin may attack (every other territory), empty if origin cannot attack."""
    if origin not in get_attack_origins(session):
        return []
    return [i for i in range(len(session.store)) if i != origin]


def get_game_summary(session: GameSession) -> dict[str, Any]:
    """Compact overview for display."""
    owned = territories_of_color(session, session.player_color)
    snapshot = session.store.snapshot()
    return {
        "turn_number": session.turn_number,
        "phase": session.phase,
        "player_color": session.player_color,
        "mission": describe(session.mission) if session.mission is not None else None,
        "territories_owned": len(owned),
        "territory_count": len(snapshot),
        "troops_owned": sum(snapshot[i].troops for i in owned),
        "winner": session.winner,
    }
