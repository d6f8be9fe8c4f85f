"""
Action definitions for the game.
Actions are immutable instructions built by the shell from the player's input.
"""

from dataclasses import dataclass, field

ATTACK = "attack"
CHECK_MISSION = "check_mission"
QUIT = "quit"
INVALID = "invalid"


@dataclass(frozen=True)
class Action:
    """Base action class. All actions have a type and a payload."""
    type: str  # "attack", "check_mission", "quit" or "invalid"
    payload: dict = field(default_factory=dict)  # Action-specific data


def attack(origin: int, destination: int) -> Action:
    """
    Attack the territory at index `destination` from the territory at index `origin`.
    Origin must be controlled by the player and hold at least 2 troops.

    Example: attack(0, 3)
    """
    return Action(
        type=ATTACK,
        payload={"origin": origin, "destination": destination},
    )


def check_mission() -> Action:
    """Evaluate the player's secret mission against the current map."""
    return Action(type=CHECK_MISSION)


def quit_game() -> Action:
    """End the session without a winner."""
    return Action(type=QUIT)


def invalid_command(raw: str = "") -> Action:
    """Input the shell could not parse. Always rejected, kept so it is reported uniformly."""
    return Action(type=INVALID, payload={"raw": raw})
