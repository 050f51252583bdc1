from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Mapping, Optional, Tuple

from .errors import ConfigurationError

Range = Tuple[int, int]

ENV_PREFIX = "MAZEGEN_"
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


@dataclass
class GeneratorConfig:
    width: int = 79
    height: int = 25
    max_rooms: int = 16
    room_width: Range = (7, 10)
    room_height: Range = (5, 7)
    max_tries: int = 200
    seed: Optional[int] = None
    # Maze walk direction weights relative to the previous step
    forward_weight: int = 1
    left_weight: int = 1
    right_weight: int = 1
    enable_metrics: bool = True

    def validate(self) -> "GeneratorConfig":
        """Raise ConfigurationError on the first violated precondition."""
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 3:
                raise ConfigurationError(f"{name} must be an integer >= 3, got {value!r}")
            if value % 2 == 0:
                raise ConfigurationError(f"{name} must be odd, got {value}")
        if self.max_rooms < 0:
            raise ConfigurationError(f"max_rooms must not be negative, got {self.max_rooms}")
        if self.max_tries <= 0:
            raise ConfigurationError(f"max_tries must be positive, got {self.max_tries}")
        for name in ("forward_weight", "left_weight", "right_weight"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        _check_range("room_width", self.room_width)
        _check_range("room_height", self.room_height)
        if self.room_width[0] < 3:
            raise ConfigurationError(f"room_width minimum must be >= 3, got {self.room_width[0]}")
        if self.room_height[0] < 3:
            raise ConfigurationError(f"room_height minimum must be >= 3, got {self.room_height[0]}")
        if self.max_rooms > 0:
            # A room must fit inside the grid or the corner sampling range is empty
            if _largest_odd(self.room_width[1]) > self.width:
                raise ConfigurationError(
                    f"room_width {self.room_width} does not fit a grid of width {self.width}"
                )
            if _largest_odd(self.room_height[1]) > self.height:
                raise ConfigurationError(
                    f"room_height {self.room_height} does not fit a grid of height {self.height}"
                )
        return self

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, object],
        prefix: str = ENV_PREFIX,
        base: "GeneratorConfig | None" = None,
    ) -> "GeneratorConfig":
        """Build a config from ``PREFIX_FIELD`` keys (env vars, Flask config).

        Unknown keys are ignored; malformed values raise ConfigurationError.
        """
        config = base if base is not None else cls()
        changes = {}
        for f in fields(cls):
            key = prefix + f.name.upper()
            if key not in mapping:
                continue
            raw = mapping[key]
            try:
                changes[f.name] = _coerce(f.name, raw)
            except (TypeError, ValueError) as exc:
                raise ConfigurationError(f"invalid value for {key}: {raw!r}") from exc
        return replace(config, **changes)

    @classmethod
    def from_env(cls, base: "GeneratorConfig | None" = None) -> "GeneratorConfig":
        return cls.from_mapping(os.environ, base=base)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def cache_key(self) -> tuple:
        return (
            self.width,
            self.height,
            self.max_rooms,
            tuple(self.room_width),
            tuple(self.room_height),
            self.max_tries,
            self.forward_weight,
            self.left_weight,
            self.right_weight,
        )


def _largest_odd(value: int) -> int:
    return value if value % 2 else value - 1


def _check_range(name: str, rng: Range) -> None:
    try:
        lo, hi = rng
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be a (lo, hi) pair, got {rng!r}") from exc
    if lo > hi:
        raise ConfigurationError(f"{name} is inverted: {rng}")
    if lo % 2 == 0 and lo + 1 > hi:
        raise ConfigurationError(f"{name} {rng} contains no odd value")


def _coerce(name: str, raw):
    if name == "enable_metrics":
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() not in _FALSE_STRINGS
    if name in ("room_width", "room_height"):
        if isinstance(raw, (tuple, list)):
            lo, hi = raw
        else:
            lo, hi = str(raw).split(",")
        return (int(lo), int(hi))
    if name == "seed":
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None
        return int(raw)
    return int(raw)


__all__ = ["GeneratorConfig", "ENV_PREFIX"]
