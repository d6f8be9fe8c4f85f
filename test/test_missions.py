"""
Mission predicates, random assignment and descriptions.
"""

import random

import pytest

from territory_war.engine.errors import InvalidConfig
from territory_war.engine.missions import (
    Mission,
    MISSION_KINDS,
    all_colors_represented,
    all_territories_owned,
    assign_random,
    consecutive_pair_owned,
    default_catalog,
    describe,
    evaluate,
    no_territory_of_color,
    owns_at_least,
    troop_sum_at_least,
)
from territory_war.engine.state import TerritoryStore


def snapshot_of(*entries):
    return TerritoryStore.initialize(len(entries), entries).snapshot()


def five_territory_snapshot():
    # Player (Azul) owns two territories with 8 and 7 troops
    return snapshot_of(
        ("America", "Azul", 8),
        ("Europa", "Vermelho", 3),
        ("Asia", "Azul", 7),
        ("Africa", "Verde", 2),
        ("Oceania", "Vermelho", 1),
    )


def test_five_territory_scenario():
    snapshot = five_territory_snapshot()

    assert evaluate(owns_at_least(2), snapshot, "Azul") is True
    assert evaluate(troop_sum_at_least(15), snapshot, "Azul") is True
    assert evaluate(all_territories_owned(), snapshot, "Azul") is False


def test_thresholds_are_inclusive_and_strict_above():
    snapshot = five_territory_snapshot()

    assert evaluate(owns_at_least(3), snapshot, "Azul") is False
    assert evaluate(troop_sum_at_least(16), snapshot, "Azul") is False


def test_troop_sum_ignores_other_colors():
    snapshot = snapshot_of(("A", "Azul", 2), ("B", "Vermelho", 50))

    assert evaluate(troop_sum_at_least(15), snapshot, "Azul") is False


def test_consecutive_pair_owned():
    apart = five_territory_snapshot()
    together = snapshot_of(("A", "Vermelho", 1), ("B", "Azul", 1), ("C", "Azul", 1))

    assert evaluate(consecutive_pair_owned(), apart, "Azul") is False
    assert evaluate(consecutive_pair_owned(), together, "Azul") is True


def test_consecutive_pair_needs_two_territories():
    assert evaluate(consecutive_pair_owned(), snapshot_of(("A", "Azul", 1)), "Azul") is False


def test_no_territory_of_color():
    mission = no_territory_of_color("Vermelho")

    assert evaluate(mission, five_territory_snapshot(), "Azul") is False
    assert evaluate(mission, snapshot_of(("A", "Azul", 1), ("B", "Verde", 1)), "Azul") is True


def test_all_territories_owned():
    snapshot = snapshot_of(("A", "Azul", 1), ("B", "Azul", 4))

    assert evaluate(all_territories_owned(), snapshot, "Azul") is True


def test_all_colors_represented_is_literal_only_player_color_on_map():
    # Taken literally, every color on the map must match the player's color too.
    # Holding territories among several colors is NOT enough.
    mixed = snapshot_of(("A", "Azul", 3), ("B", "Vermelho", 2), ("C", "Verde", 1))
    only_player = snapshot_of(("A", "Azul", 3), ("B", "Azul", 2))
    none_owned = snapshot_of(("A", "Vermelho", 3))

    assert evaluate(all_colors_represented(), mixed, "Azul") is False
    assert evaluate(all_colors_represented(), only_player, "Azul") is True
    assert evaluate(all_colors_represented(), none_owned, "Azul") is False


def test_all_colors_represented_agrees_with_all_territories_owned():
    snapshots = [
        five_territory_snapshot(),
        snapshot_of(("A", "Azul", 1)),
        snapshot_of(("A", "Azul", 1), ("B", "Verde", 1)),
    ]
    for snapshot in snapshots:
        assert evaluate(all_colors_represented(), snapshot, "Azul") == \
            evaluate(all_territories_owned(), snapshot, "Azul")


def test_evaluate_is_idempotent_and_pure():
    snapshot = five_territory_snapshot()
    before = list(snapshot)

    for mission in default_catalog():
        first = evaluate(mission, snapshot, "Azul")
        second = evaluate(mission, snapshot, "Azul")
        assert first == second

    assert list(snapshot) == before


def test_unknown_mission_kind():
    with pytest.raises(ValueError):
        evaluate(Mission("hold_the_line"), five_territory_snapshot(), "Azul")


def test_default_catalog_covers_every_kind():
    catalog = default_catalog()

    assert {m.kind for m in catalog} == set(MISSION_KINDS)
    assert catalog[:3] == (owns_at_least(2), no_territory_of_color("Vermelho"), troop_sum_at_least(15))


def test_default_catalog_elimination_color_is_configurable():
    assert no_territory_of_color("Preto") in default_catalog("Preto")


class RecordingRng:
    def __init__(self, index):
        self.index = index
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        return self.index


def test_assign_random_draws_once_over_catalog_size():
    catalog = default_catalog()
    rng = RecordingRng(2)

    mission = assign_random(catalog, rng)

    assert mission == catalog[2]
    assert rng.calls == [len(catalog)]


def test_assign_random_reaches_every_entry():
    catalog = default_catalog()
    rng = random.Random(99)

    drawn = {assign_random(catalog, rng) for _ in range(500)}

    assert drawn == set(catalog)


def test_assign_random_empty_catalog():
    with pytest.raises(InvalidConfig):
        assign_random([], random.Random(1))


def test_describe_every_default_mission():
    texts = [describe(m) for m in default_catalog()]

    assert "Unknown mission." not in texts
    assert describe(owns_at_least(2)) == "Control at least 2 territories."
    assert describe(no_territory_of_color("Vermelho")) == "Eliminate all Vermelho armies."
    assert describe(troop_sum_at_least(15)) == "Control at least 15 troops."
