"""
Territory War Game Engine
Core rules only: territory store, combat, missions and the turn state machine.
"""

DICE_SIDES = 6

# An attack needs at least this many troops in the origin territory.
MIN_ATTACKING_TROOPS = 2

# Names and colors are bounded text: 49 characters, the capacity of a 50-byte C buffer.
MAX_TEXT_LENGTH = 49
