"""Common interface of frame sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .collector import Collector

__all__ = ["Fps", "Source"]


@dataclass(frozen=True)
class Fps:
    """Output frame rate and fast-forward factor."""

    fps: float
    speed: float = 1.0


class Source(ABC):
    """Something that decodes frames and feeds them to a collector."""

    @abstractmethod
    def total_frames(self) -> Optional[int]:
        """Number of frames expected, or ``None`` if unknown."""

    @abstractmethod
    def collect(self, dest: Collector) -> None:
        """Add every frame of the source to ``dest``."""