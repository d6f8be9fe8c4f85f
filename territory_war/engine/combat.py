"""
Combat resolution system.
One attacker die against one defender die; the defender wins ties.
Dice come from an injected source so tests can replay fixed rolls.
Two conquest policies:
- decrement: the defender loses one troop per lost roll and is conquered at zero
- transfer: the first won roll conquers and moves half the attacking troops in
"""

import random
from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

from territory_war.engine import DICE_SIDES, MIN_ATTACKING_TROOPS
from territory_war.engine.errors import InsufficientTroops, NotOwner, SameTerritory
from territory_war.engine.state import Territory

POLICY_DECREMENT = "decrement"
POLICY_TRANSFER = "transfer"
COMBAT_POLICIES = (POLICY_DECREMENT, POLICY_TRANSFER)

OUTCOME_WIN = "win"
OUTCOME_LOSE = "lose"


class DiceSource(Protocol):
    def roll(self) -> int:
        ...


class RandomDice:
    """Uniform d6 rolls from a random.Random instance (seedable)."""

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def roll(self) -> int:
        return self.rng.randint(1, DICE_SIDES)


class SequenceDice:
    """
    Replays a fixed list of rolls in order.
    Raises RuntimeError when exhausted so a test never silently reuses rolls.
    """

    def __init__(self, rolls: Iterable[int]):
        self.rolls = list(rolls)
        for roll in self.rolls:
            if not 1 <= roll <= DICE_SIDES:
                raise ValueError(f"Die roll {roll} outside 1-{DICE_SIDES}")
        self._next = 0

    @property
    def remaining(self) -> int:
        return len(self.rolls) - self._next

    def roll(self) -> int:
        if self._next >= len(self.rolls):
            raise RuntimeError("SequenceDice exhausted")
        value = self.rolls[self._next]
        self._next += 1
        return value


@dataclass
class AttackOutcome:
    """Result of a single attack, for the caller to render."""
    attacker_roll: int
    defender_roll: int
    outcome: str  # "win" or "lose" from the attacker's point of view
    troop_deltas: dict[str, int] = field(default_factory=dict)  # {"origin": d, "destination": d}
    conquered: bool = False
    previous_color: str = ""  # destination color before the attack

    @property
    def attacker_won(self) -> bool:
        return self.outcome == OUTCOME_WIN

    def to_dict(self) -> dict[str, Any]:
        return {
            "attacker_roll": self.attacker_roll,
            "defender_roll": self.defender_roll,
            "outcome": self.outcome,
            "troop_deltas": dict(self.troop_deltas),
            "conquered": self.conquered,
            "previous_color": self.previous_color,
        }


def check_attack_preconditions(
    origin: Territory,
    destination: Territory,
    attacker_color: str,
) -> None:
    """
    Raise if the attack may not happen. Never mutates.

    Order: same territory, ownership, minimum attacking force.
    """
    if origin is destination:
        raise SameTerritory(f"{origin.name} cannot attack itself")
    if origin.color != attacker_color:
        raise NotOwner(
            f"You can only attack from territories you control: "
            f"{origin.name} belongs to {origin.color}"
        )
    if origin.troops < MIN_ATTACKING_TROOPS:
        raise InsufficientTroops(
            f"{origin.name} has {origin.troops} troop(s); at least "
            f"{MIN_ATTACKING_TROOPS} are needed to attack"
        )


def resolve_attack(
    origin: Territory,
    destination: Territory,
    attacker_color: str,
    dice: DiceSource,
    policy: str = POLICY_DECREMENT,
) -> AttackOutcome:
    """
    Resolve one attack from origin into destination.

    Rules:
    - Attacker rolls first, then defender; attacker wins only on a strictly higher roll
    - Attacker loses: origin loses 1 troop (origin had >= 2, so it keeps >= 1)
    - Attacker wins, decrement policy: destination loses 1 troop; at <= 0 it is
      clamped to 1 and taken over by the origin's color
    - Attacker wins, transfer policy: destination is taken over at once, its troops
      become origin.troops // 2 and origin keeps the rest (minimum 1); against a
      territory of the attacker's own color the moved troops are added instead

    Note: This function MODIFIES origin and destination in place and nothing else.
    Preconditions are checked before any die is rolled, so a rejected attack
    consumes no rolls and changes nothing.

    Args:
        origin: Attacking territory (mutable)
        destination: Defending territory (mutable)
        attacker_color: Color that must control origin
        dice: Source of d6 rolls
        policy: "decrement" or "transfer"

    Returns:
        AttackOutcome with both rolls, troop deltas and conquest flag
    """
    if policy not in COMBAT_POLICIES:
        raise ValueError(f"Unknown combat policy: {policy}")

    check_attack_preconditions(origin, destination, attacker_color)

    attacker_roll = dice.roll()
    defender_roll = dice.roll()

    origin_before = origin.troops
    destination_before = destination.troops
    previous_color = destination.color

    if attacker_roll > defender_roll:
        if policy == POLICY_DECREMENT:
            destination.troops -= 1
            if destination.troops <= 0:
                destination.troops = 1
                destination.color = origin.color
        else:
            moved = origin.troops // 2
            if previous_color == origin.color:
                # reinforcing a friendly territory keeps its troops
                destination.troops += moved
            else:
                destination.color = origin.color
                destination.troops = moved
            origin.troops = max(1, origin.troops - moved)
        outcome = OUTCOME_WIN
    else:
        origin.troops -= 1
        outcome = OUTCOME_LOSE

    return AttackOutcome(
        attacker_roll=attacker_roll,
        defender_roll=defender_roll,
        outcome=outcome,
        troop_deltas={
            "origin": origin.troops - origin_before,
            "destination": destination.troops - destination_before,
        },
        conquered=destination.color != previous_color,
        previous_color=previous_color,
    )
