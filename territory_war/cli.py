"""
Interactive console for Territory War.
Run: python -m territory_war  (or the territory-war script)

Environment overrides (see territory_war/config.py):
  WAR_SETUP_ID=classic     use a preset map instead of typing territories
  WAR_COMBAT_POLICY=transfer
  WAR_RANDOM_SEED=42
"""

import logging

from territory_war import config
from territory_war.engine.actions import attack, check_mission, invalid_command, quit_game
from territory_war.engine.controller import GameController
from territory_war.engine.definitions import GameSetup, build_setup, load_setup
from territory_war.engine.errors import InvalidConfig
from territory_war.engine.events import (
    ATTACK_RESOLVED,
    COMMAND_REJECTED,
    GAME_QUIT,
    MISSION_CHECKED,
    TERRITORY_CONQUERED,
    VICTORY,
)
from territory_war.engine.queries import get_attack_origins, get_game_summary
from territory_war.engine.utils import format_map_table, format_outcome


def prompt_setup(count: int) -> GameSetup:
    """Ask for name, army color and troops of each territory."""
    entries = []
    for i in range(count):
        print(f"\n--- Territory {i + 1} of {count} ---")
        name = input("Territory name: ")
        color = input("Army color: ")
        troops = input("Number of troops: ").strip()
        entries.append({"name": name, "color": color, "troops": troops})
    return build_setup(count, entries, player_color=config.PLAYER_COLOR)


def print_header(controller: GameController):
    summary = get_game_summary(controller.session)
    print("\n" + "=" * 52)
    print(
        f"  TURN {summary['turn_number']} | {summary['player_color'].upper()} | "
        f"{summary['territories_owned']}/{summary['territory_count']} territories, "
        f"{summary['troops_owned']} troops"
    )
    print("=" * 52)


def print_map(controller: GameController):
    print("\n=== CURRENT MAP ===")
    print(format_map_table(controller.session))


def print_mission(controller: GameController):
    print("\n=== YOUR MISSION ===")
    print(controller.mission_description())


def print_menu():
    print("\n=== MAIN MENU ===")
    print("1 - Attack")
    print("2 - Check mission")
    print("0 - Quit")


def prompt_attack(controller: GameController):
    """Read origin and destination indices; anything unparseable becomes an invalid command."""
    last = len(controller.session.store) - 1
    origins = get_attack_origins(controller.session)
    if origins:
        print(f"\nTerritories able to attack: {', '.join(str(i) for i in origins)}")
    raw_origin = input(f"Origin territory index (0-{last}): ").strip()
    raw_destination = input(f"Destination territory index (0-{last}): ").strip()
    try:
        return attack(int(raw_origin), int(raw_destination))
    except ValueError:
        return invalid_command(f"{raw_origin} {raw_destination}")


def print_events(events):
    for e in events:
        if e.type == ATTACK_RESOLVED:
            print(format_outcome(e.payload))
        elif e.type == TERRITORY_CONQUERED:
            print(f"Territory {e.payload['territory']} conquered by {e.payload['new_color']}!")
        elif e.type == MISSION_CHECKED and not e.payload["automatic"]:
            if not e.payload["completed"]:
                print("\nYou have not completed your mission yet.")
        elif e.type == VICTORY:
            print(f"\n*** Mission complete! {e.payload['winner']} wins: {e.payload['mission']} ***")
        elif e.type == COMMAND_REJECTED:
            print(f"\n{e.payload['message']}")
        elif e.type == GAME_QUIT:
            print("Leaving the game...")


def main() -> int:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        if config.DEFAULT_SETUP_ID:
            setup = load_setup(config.DEFAULT_SETUP_ID)
            print(f"Using preset setup: {setup.display_name}")
        else:
            setup = prompt_setup(config.TERRITORY_COUNT)
        controller = GameController.start(
            len(setup.territories),
            setup.entries(),
            player_color=setup.player_color or config.PLAYER_COLOR,
        )
    except InvalidConfig as e:
        print(f"Setup failed: {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nSetup cancelled.")
        return 1

    while not controller.is_over:
        print_header(controller)
        print_map(controller)
        print_mission(controller)
        print_menu()
        try:
            choice = input("Choice: ").strip()
            if choice == "1":
                action = prompt_attack(controller)
            elif choice == "2":
                action = check_mission()
            elif choice == "0":
                action = quit_game()
            else:
                action = invalid_command(choice)
        except (EOFError, KeyboardInterrupt):
            action = quit_game()

        print_events(controller.submit(action))

    if controller.session.winner:
        print_map(controller)
    return 0
