"""
Controller and queries: the surface the console shell talks to.
"""

import random

import pytest

from territory_war.engine.actions import attack, check_mission, invalid_command, quit_game
from territory_war.engine.combat import POLICY_DECREMENT, SequenceDice
from territory_war.engine.controller import GameController
from territory_war.engine.errors import GameOver, InvalidConfig
from territory_war.engine.events import COMMAND_REJECTED, GAME_QUIT, VICTORY
from territory_war.engine.missions import all_territories_owned, owns_at_least
from territory_war.engine.queries import (
    get_attack_origins,
    get_attack_targets,
    get_available_action_types,
    get_game_summary,
    validate_action,
)
from territory_war.engine.utils import format_map_table, format_outcome

ENTRIES = [
    ("America", "Azul", 5),
    ("Europa", "Vermelho", 1),
    ("Asia", "Azul", 1),
    ("Africa", "Verde", 2),
]


def start(rolls=(), mission=None, **kwargs):
    return GameController.start(
        len(ENTRIES),
        ENTRIES,
        player_color="Azul",
        catalog=[mission or all_territories_owned()],
        rng=random.Random(3),
        dice=SequenceDice(rolls),
        policy=kwargs.pop("policy", POLICY_DECREMENT),
        auto_check_mission=kwargs.pop("auto_check_mission", True),
        **kwargs,
    )


def test_start_records_setup_events():
    controller = start()

    assert [e.type for e in controller.history] == ["game_started", "mission_assigned", "phase_changed"]
    assert controller.mission_description() == "Conquer every territory."
    assert [t.name for t in controller.snapshot()] == ["America", "Europa", "Asia", "Africa"]


def test_start_rejects_bad_setup():
    with pytest.raises(InvalidConfig):
        GameController.start(2, [("A", "Azul", 3), ("B", "Verde", -1)], player_color="Azul")
    with pytest.raises(InvalidConfig):
        GameController.start(0, [], player_color="Azul")


def test_unknown_policy_is_a_config_error():
    with pytest.raises(InvalidConfig):
        start(policy="blitz")


def test_rejected_command_becomes_event_and_state_is_kept():
    controller = start(rolls=[6, 1])
    before = controller.session.to_dict()

    events = controller.submit(attack(1, 0))

    assert len(events) == 1
    assert events[0].type == COMMAND_REJECTED
    assert events[0].payload["error"] == "not_owner"
    assert controller.session.to_dict() == before
    assert controller.dice.remaining == 2
    assert controller.history[-1] is events[0]


@pytest.mark.parametrize("action, kind", [
    (attack(2, 1), "insufficient_troops"),
    (attack(0, 9), "index_out_of_range"),
    (attack(0, 0), "same_territory"),
    (invalid_command("x"), "invalid_command"),
])
def test_every_recoverable_error_is_reported(action, kind):
    controller = start()

    events = controller.submit(action)

    assert events[0].type == COMMAND_REJECTED
    assert events[0].payload["error"] == kind
    assert not controller.is_over


def test_play_until_victory():
    controller = start(rolls=[6, 1, 6, 1, 5, 2], mission=owns_at_least(4))

    controller.submit(attack(0, 1))
    assert not controller.is_over
    controller.submit(attack(0, 3))
    assert not controller.is_over
    events = controller.submit(attack(0, 3))

    assert controller.is_over
    assert controller.session.winner == "Azul"
    assert events[-1].type == VICTORY
    with pytest.raises(GameOver):
        controller.submit(check_mission())


def test_quit_then_game_over():
    controller = start()

    events = controller.submit(quit_game())

    assert events[-1].type == GAME_QUIT
    assert controller.is_over
    with pytest.raises(GameOver):
        controller.submit(quit_game())


def test_random_mission_draw_is_reproducible():
    first = GameController.start(len(ENTRIES), ENTRIES, player_color="Azul", rng=random.Random(11))
    second = GameController.start(len(ENTRIES), ENTRIES, player_color="Azul", rng=random.Random(11))

    assert first.session.mission == second.session.mission


def test_queries_on_fresh_game():
    controller = start()
    session = controller.session

    assert get_attack_origins(session) == [0]
    assert get_attack_targets(session, 0) == [1, 2, 3]
    assert get_attack_targets(session, 2) == []
    assert "attack" in get_available_action_types(session)

    result = validate_action(session, attack(2, 1))
    assert result.valid is False
    assert result.error_kind == "insufficient_troops"
    assert validate_action(session, attack(0, 1)).valid is True

    summary = get_game_summary(session)
    assert summary["territories_owned"] == 2
    assert summary["troops_owned"] == 6
    assert summary["territory_count"] == 4
    assert summary["winner"] is None


def test_queries_when_no_origin_can_attack():
    controller = GameController.start(
        2, [("A", "Azul", 1), ("B", "Verde", 3)],
        player_color="Azul", catalog=[all_territories_owned()], rng=random.Random(1),
    )

    assert get_attack_origins(controller.session) == []
    assert "attack" not in get_available_action_types(controller.session)


def test_queries_after_game_over():
    controller = start()
    controller.submit(quit_game())

    assert get_available_action_types(controller.session) == []
    assert validate_action(controller.session, check_mission()).error_kind == "game_over"


def test_map_table_and_outcome_text():
    controller = start(rolls=[2, 4])
    table = format_map_table(controller.session)

    assert "America" in table
    assert table.splitlines()[2].startswith(" 0 | America")

    events = controller.submit(attack(0, 3))
    assert format_outcome(events[0].payload) == "Attack: 2 | Defense: 4 -> defender holds, attacker lost 1 troop"


def test_history_keeps_only_the_latest_events():
    controller = GameController.start(
        len(ENTRIES), ENTRIES, player_color="Azul", catalog=[all_territories_owned()],
        rng=random.Random(3), dice=SequenceDice([]), history_limit=4,
    )

    for raw in ["a", "b", "c", "d", "e"]:
        controller.submit(invalid_command(raw))

    assert len(controller.history) == 4
    assert [e.payload["message"] for e in controller.history] == [
        "Invalid option: 'b'",
        "Invalid option: 'c'",
        "Invalid option: 'd'",
        "Invalid option: 'e'",
    ]


def test_history_limit_must_be_positive():
    with pytest.raises(InvalidConfig):
        start(history_limit=0)
