"""
Setup definitions: validated territory data handed to the engine at game start.
Preset setups live under data/setups/<setup_id>.json:
{"id": ..., "display_name": ..., "player_color": ..., "territories": [{"name", "color", "troops"}, ...]}
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel, Field, ValidationError, field_validator

from territory_war.engine.errors import InvalidConfig
from territory_war.engine.state import bounded_text

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent.parent / "data"
SETUPS_DIR = DATA_DIR / "setups"


class TerritorySetup(BaseModel):
    name: str
    color: str  # army color controlling the territory at start
    troops: int = Field(ge=0)

    @field_validator("name", "color", mode="before")
    @classmethod
    def _bounded(cls, value: Any) -> str:
        return bounded_text(value)

    def as_entry(self) -> tuple[str, str, int]:
        return (self.name, self.color, self.troops)


class GameSetup(BaseModel):
    id: str = "custom"
    display_name: str = "Custom"
    """Player color for this setup. None = territory_war.config.PLAYER_COLOR."""
    player_color: str | None = None
    territories: list[TerritorySetup] = Field(min_length=1)

    def entries(self) -> list[tuple[str, str, int]]:
        return [t.as_entry() for t in self.territories]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


def build_setup(
    count: int,
    entries: Iterable[Any],
    player_color: str | None = None,
) -> GameSetup:
    """
    Validate collaborator-supplied setup data.

    entries: (name, color, troops) tuples or {"name", "color", "troops"} dicts.
    Troop counts may arrive as text (e.g. straight from input()) and are coerced.
    Raises InvalidConfig on count < 1, a count/entries mismatch, or bad troop values.
    """
    if not isinstance(count, int) or count < 1:
        raise InvalidConfig(f"Territory count must be at least 1, got {count!r}")

    raw = []
    for entry in entries:
        if isinstance(entry, dict):
            raw.append(entry)
        else:
            try:
                name, color, troops = entry
            except (TypeError, ValueError):
                raise InvalidConfig(f"Malformed territory entry: {entry!r}")
            raw.append({"name": name, "color": color, "troops": troops})

    if len(raw) != count:
        raise InvalidConfig(f"Expected {count} territories, got {len(raw)}")

    try:
        return GameSetup(player_color=player_color, territories=raw)
    except ValidationError as exc:
        raise InvalidConfig(f"Invalid setup: {_format_validation_error(exc)}")


def list_setups() -> list[dict]:
    """Return [{ id, display_name, territory_count }, ...] for every preset in data/setups/."""
    out = []
    if not SETUPS_DIR.exists():
        return out
    for path in sorted(SETUPS_DIR.glob("*.json")):
        try:
            setup = load_setup(path.stem)
        except InvalidConfig as exc:
            logger.warning("Skipping preset %s: %s", path.name, exc)
            continue
        out.append({
            "id": setup.id,
            "display_name": setup.display_name,
            "territory_count": len(setup.territories),
        })
    return out


def load_setup(setup_id: str, setups_dir: Path | str | None = None) -> GameSetup:
    """Load and validate data/setups/<setup_id>.json."""
    base = Path(setups_dir) if setups_dir is not None else SETUPS_DIR
    path = base / f"{setup_id}.json"
    if not path.exists():
        raise InvalidConfig(f"Setup not found: {setup_id}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        raise InvalidConfig(f"Could not read setup {setup_id}: {exc}")
    if not isinstance(data, dict):
        raise InvalidConfig(f"Setup {setup_id} must be a JSON object")
    data.setdefault("id", setup_id)
    data.setdefault("display_name", setup_id)
    try:
        return GameSetup.model_validate(data)
    except ValidationError as exc:
        raise InvalidConfig(f"Invalid setup {setup_id}: {_format_validation_error(exc)}")
