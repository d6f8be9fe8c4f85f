"""
Main game reducer.
Applies actions to a session, enforcing rules and producing a new session.
Returns (new_session, events) where events describe what happened.
The session passed in is never mutated, so a rejected action leaves it untouched.
"""

import logging

from territory_war.engine.state import (
    GameSession,
    PHASE_AWAITING_COMMAND,
    PHASE_RESOLVING,
    PHASE_WON,
    PHASE_QUIT,
)
from territory_war.engine.actions import Action, ATTACK, CHECK_MISSION, QUIT, INVALID
from territory_war.engine.combat import (
    DiceSource,
    POLICY_DECREMENT,
    check_attack_preconditions,
    resolve_attack,
)
from territory_war.engine.errors import GameOver, InvalidCommand
from territory_war.engine.missions import describe, evaluate
from territory_war.engine.events import (
    GameEvent,
    attack_resolved,
    game_quit,
    mission_checked,
    phase_changed,
    territory_conquered,
    victory,
)

logger = logging.getLogger(__name__)


# Phase rules: which action types are allowed in which phases.
# setup has none (sessions leave setup through utils.initialize_session);
# resolving is transient inside a single attack.
PHASE_ALLOWED_ACTIONS = {
    PHASE_AWAITING_COMMAND: [ATTACK, CHECK_MISSION, QUIT, INVALID],
}


def _validate_action_for_phase(action: Action, session: GameSession) -> None:
    allowed_actions = PHASE_ALLOWED_ACTIONS.get(session.phase, [])
    if action.type not in allowed_actions:
        raise InvalidCommand(
            f"Action '{action.type}' is not allowed in phase '{session.phase}'. "
            f"Allowed actions: {', '.join(allowed_actions) or 'none'}"
        )


def apply_action(
    session: GameSession,
    action: Action,
    dice: DiceSource,
    policy: str = POLICY_DECREMENT,
    auto_check_mission: bool = True,
) -> tuple[GameSession, list[GameEvent]]:
    """
    Apply a single action to the current session, returning new session and events.

    Validates:
    - Game is not over
    - Action is valid for the current phase

    Args:
        session: Current game session (not modified)
        action: Action to apply
        dice: Source of d6 rolls for attacks
        policy: Combat policy ("decrement" or "transfer")
        auto_check_mission: Evaluate the mission after every resolved attack

    Returns:
        Tuple of (new_session, events) where events describe what happened

    Raises:
        GameError subclass on any rule violation (nothing is changed)
    """
    if session.is_over:
        if session.winner is not None:
            raise GameOver(f"Game is over. {session.winner} completed the mission.")
        raise GameOver("Game is over.")

    _validate_action_for_phase(action, session)

    new_session = session.copy()
    events: list[GameEvent] = []

    if action.type == ATTACK:
        new_session, evts = _handle_attack(new_session, action, dice, policy, auto_check_mission)
        events.extend(evts)

    elif action.type == CHECK_MISSION:
        new_session, evts = _handle_check_mission(new_session)
        events.extend(evts)

    elif action.type == QUIT:
        new_session, evts = _handle_quit(new_session)
        events.extend(evts)

    elif action.type == INVALID:
        raw = action.payload.get("raw", "")
        raise InvalidCommand(f"Invalid option: {raw!r}" if raw else "Invalid option")

    else:
        raise InvalidCommand(f"Unknown action type: {action.type}")

    return new_session, events


def _handle_attack(
    session: GameSession,
    action: Action,
    dice: DiceSource,
    policy: str,
    auto_check_mission: bool,
) -> tuple[GameSession, list[GameEvent]]:
    """
    Resolve an attack between two territories.

    Validates:
    - Both indices are in range (IndexOutOfRange)
    - Origin and destination differ (SameTerritory)
    - Origin is controlled by the player (NotOwner)
    - Origin has at least 2 troops (InsufficientTroops)
    """
    events: list[GameEvent] = []
    origin_index = action.payload.get("origin")
    destination_index = action.payload.get("destination")

    origin, destination = session.store.get_pair(origin_index, destination_index)
    check_attack_preconditions(origin, destination, session.player_color)

    session.phase = PHASE_RESOLVING
    outcome = resolve_attack(origin, destination, session.player_color, dice, policy)
    events.append(attack_resolved(origin_index, destination_index, outcome.to_dict()))

    if outcome.conquered:
        logger.info(
            "%s conquered %s from %s", origin.color, destination.name, outcome.previous_color
        )
        events.append(territory_conquered(
            destination.name, destination_index,
            outcome.previous_color, destination.color, destination.troops,
        ))

    session.phase = PHASE_AWAITING_COMMAND
    session.turn_number += 1

    if auto_check_mission:
        session, evts = _evaluate_mission(session, automatic=True)
        events.extend(evts)

    return session, events


def _handle_check_mission(session: GameSession) -> tuple[GameSession, list[GameEvent]]:
    session.turn_number += 1
    return _evaluate_mission(session, automatic=False)


def _evaluate_mission(
    session: GameSession,
    automatic: bool,
) -> tuple[GameSession, list[GameEvent]]:
    """
    Evaluate the held mission; on success move the session to won.
    Automatic checks only report when the mission is complete.
    """
    events: list[GameEvent] = []
    description = describe(session.mission)
    completed = evaluate(session.mission, session.store.snapshot(), session.player_color)

    if completed or not automatic:
        events.append(mission_checked(description, completed, automatic))

    if completed:
        old_phase = session.phase
        session.phase = PHASE_WON
        session.winner = session.player_color
        logger.info("Mission completed by %s: %s", session.player_color, description)
        events.append(phase_changed(old_phase, PHASE_WON))
        events.append(victory(session.player_color, description, session.turn_number))

    return session, events


def _handle_quit(session: GameSession) -> tuple[GameSession, list[GameEvent]]:
    old_phase = session.phase
    session.phase = PHASE_QUIT
    return session, [phase_changed(old_phase, PHASE_QUIT), game_quit(session.turn_number)]
