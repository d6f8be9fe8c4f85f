"""
Game controller.
Owns one session and its random source for the whole game and is the only
entry point the shell talks to. Recoverable rule violations come back as a
command_rejected event; the session is left exactly as it was.
"""

import logging
import random
from collections import deque
from typing import Iterable, Sequence

from territory_war import config
from territory_war.engine.actions import Action
from territory_war.engine.combat import COMBAT_POLICIES, DiceSource, RandomDice
from territory_war.engine.errors import GameError, GameOver, InvalidConfig
from territory_war.engine.events import GameEvent, command_rejected
from territory_war.engine.missions import Mission, default_catalog, describe
from territory_war.engine.reducer import apply_action
from territory_war.engine.state import GameSession, TerritoryView
from territory_war.engine.utils import initialize_session

logger = logging.getLogger(__name__)


class GameController:

    def __init__(
        self,
        session: GameSession,
        dice: DiceSource,
        policy: str = config.COMBAT_POLICY,
        auto_check_mission: bool = config.AUTO_CHECK_MISSION,
        history_limit: int = config.HISTORY_LIMIT,
    ):
        if policy not in COMBAT_POLICIES:
            raise InvalidConfig(f"Unknown combat policy: {policy}")
        self.session = session
        self.dice = dice
        self.policy = policy
        self.auto_check_mission = auto_check_mission
        if history_limit < 1:
            raise InvalidConfig(f"History limit must be at least 1, got {history_limit}")
        # most recent events only, oldest dropped first
        self.history: deque[GameEvent] = deque(maxlen=history_limit)

    @classmethod
    def start(
        cls,
        count: int,
        entries: Iterable[tuple[str, str, int]],
        player_color: str = config.PLAYER_COLOR,
        catalog: Sequence[Mission] | None = None,
        rng: random.Random | None = None,
        dice: DiceSource | None = None,
        policy: str = config.COMBAT_POLICY,
        auto_check_mission: bool = config.AUTO_CHECK_MISSION,
        history_limit: int = config.HISTORY_LIMIT,
    ) -> "GameController":
        """
        Run setup and return a controller awaiting the first command.

        rng drives the mission draw and, when no dice are given, the combat dice.
        Raises InvalidConfig if the territory data is invalid (fatal to startup).
        """
        if rng is None:
            rng = random.Random(config.RANDOM_SEED)
        if catalog is None:
            catalog = default_catalog(config.ELIMINATION_TARGET_COLOR)
        session, events = initialize_session(count, entries, player_color, catalog, rng)
        controller = cls(
            session,
            dice if dice is not None else RandomDice(rng=rng),
            policy=policy,
            auto_check_mission=auto_check_mission,
            history_limit=history_limit,
        )
        controller.history.extend(events)
        logger.info("Game started with %d territories for %s", count, player_color)
        return controller

    @property
    def is_over(self) -> bool:
        return self.session.is_over

    def snapshot(self) -> tuple[TerritoryView, ...]:
        return self.session.store.snapshot()

    def mission_description(self) -> str:
        return describe(self.session.mission)

    def submit(self, action: Action) -> list[GameEvent]:
        """
        Apply one command. Returns the events it produced.

        GameOver propagates (the shell should have stopped asking);
        every other GameError becomes a single command_rejected event.
        """
        try:
            self.session, events = apply_action(
                self.session,
                action,
                self.dice,
                policy=self.policy,
                auto_check_mission=self.auto_check_mission,
            )
        except GameOver:
            raise
        except GameError as exc:
            logger.info("Rejected %s: %s", action.type, exc)
            events = [command_rejected(action.type, exc.kind, str(exc))]
        self.history.extend(events)
        return events
