"""
Single place for default game configuration.
Every value can be overridden through the matching WAR_* environment variable.
"""

import os

from territory_war.engine.errors import InvalidConfig


def _int_env(name: str, default: str | None) -> int | None:
    raw = os.environ.get(name) or default
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfig(f"{name} must be an integer, got {raw!r}")


# Army color controlled by the player.
PLAYER_COLOR = os.environ.get("WAR_PLAYER_COLOR", "Azul")

# Color targeted by the "eliminate" mission in the default catalog.
ELIMINATION_TARGET_COLOR = os.environ.get("WAR_ELIMINATION_COLOR", "Vermelho")

# "decrement" (defender loses one troop per lost roll) or "transfer" (conquest on first win).
COMBAT_POLICY = os.environ.get("WAR_COMBAT_POLICY", "decrement")

# Evaluate the mission after every resolved attack, not only on request.
AUTO_CHECK_MISSION = os.environ.get("WAR_AUTO_CHECK_MISSION", "true").lower() == "true"

# Number of territories prompted for when no preset setup is used.
TERRITORY_COUNT = _int_env("WAR_TERRITORY_COUNT", "5")

# Preset id from data/setups/<id>.json (e.g. "classic"). None = prompt for territories.
DEFAULT_SETUP_ID = os.environ.get("WAR_SETUP_ID") or None

LOG_LEVEL = os.environ.get("WAR_LOG_LEVEL", "WARNING").upper()

RANDOM_SEED = _int_env("WAR_RANDOM_SEED", None)

# Events kept in GameController.history (oldest are dropped first).
HISTORY_LIMIT = _int_env("WAR_HISTORY_LIMIT", "200")
