"""Error kinds raised by the generator core.

Room placement running out of tries is not an error: it simply ends stage 1
with the rooms accepted so far.
"""


class MazeGenError(Exception):
    """Base class for every error raised by mazegen.dungeon."""


class ConfigurationError(MazeGenError, ValueError):
    """Dimensions or ranges violate the parity/size preconditions.

    Raised before any grid mutation.
    """


class RngExhausted(MazeGenError):
    """The random source failed; no partial map is returned."""


class InternalInvariantViolation(MazeGenError, AssertionError):
    """An internal assertion failed. Indicates a bug, not bad input."""


__all__ = ["MazeGenError", "ConfigurationError", "RngExhausted", "InternalInvariantViolation"]
