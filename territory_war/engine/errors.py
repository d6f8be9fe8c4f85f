"""
Engine error hierarchy.
All errors derive from ValueError so callers can keep catching ValueError.
InvalidConfig is fatal to startup; the others are recoverable and leave state unchanged.
"""


class GameError(ValueError):
    """Base class for rule violations raised by the engine."""
    kind = "game_error"


class InvalidConfig(GameError):
    """Setup data violates the store invariants (count < 1, negative troops, ...)."""
    kind = "invalid_config"


class IndexOutOfRange(GameError):
    """A command references a territory index outside [0, count)."""
    kind = "index_out_of_range"

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(f"Territory index {index} out of range (0-{count - 1})")


class NotOwner(GameError):
    """Attack launched from a territory not controlled by the attacker."""
    kind = "not_owner"


class InsufficientTroops(GameError):
    """Origin territory does not have enough troops to attack."""
    kind = "insufficient_troops"


class SameTerritory(GameError):
    """Origin and destination are the same territory."""
    kind = "same_territory"


class InvalidCommand(GameError):
    """The shell could not turn the player's input into a command."""
    kind = "invalid_command"


class GameOver(GameError):
    """A command arrived after the session reached a terminal phase."""
    kind = "game_over"
