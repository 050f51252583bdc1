"""Progress sinks for watching a generation unfold.

The generator calls ``notify`` at fixed points (room placed, maze cell carved,
connector merged, dead-end pass finished). Sinks never influence the map: they
get no random source and their return value is ignored.
"""
from __future__ import annotations

from typing import List, NamedTuple

# Highlight classes, loosely matching the colours a display front end would use
HL_ACCEPT = "accept"
HL_ACTIVE = "active"
HL_SCAN = "scan"
HL_CHOSEN = "chosen"
HL_CULL = "cull"


class ProgressEvent(NamedTuple):
    stage: str
    action: str
    x0: int
    y0: int
    x1: int
    y1: int
    highlight: str

    @classmethod
    def tile(cls, stage: str, action: str, x: int, y: int, highlight: str) -> "ProgressEvent":
        return cls(stage, action, x, y, x, y, highlight)


class Visualizer:
    """No-op sink; subclasses override ``notify``."""

    def notify(self, event: ProgressEvent) -> None:
        return None


NullVisualizer = Visualizer


class RecordingVisualizer(Visualizer):
    def __init__(self):
        self.events: List[ProgressEvent] = []

    def notify(self, event: ProgressEvent) -> None:
        self.events.append(event)

    def actions(self, stage: str | None = None) -> List[str]:
        return [e.action for e in self.events if stage is None or e.stage == stage]


class LoggingVisualizer(Visualizer):
    def __init__(self, logger=None):
        if logger is None:
            from mazegen.logging_utils import get_logger

            logger = get_logger("mazegen.visualizer")
        self.logger = logger

    def notify(self, event: ProgressEvent) -> None:
        self.logger.debug(
            event="progress",
            stage=event.stage,
            action=event.action,
            rect=f"{event.x0},{event.y0},{event.x1},{event.y1}",
            highlight=event.highlight,
        )


__all__ = [
    "ProgressEvent",
    "Visualizer",
    "NullVisualizer",
    "RecordingVisualizer",
    "LoggingVisualizer",
    "HL_ACCEPT",
    "HL_ACTIVE",
    "HL_SCAN",
    "HL_CHOSEN",
    "HL_CULL",
]
