"""Shared data types used across SpritePack."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class Clip:
    """One input sound, as read from its file header."""

    source_path: Path
    display_name: str
    duration: float
    sample_rate: int
    channels: int


@dataclass(frozen=True)
class Placement:
    """Where the packer put a clip: its group and nominal start time."""

    clip_index: int
    group_index: int
    start_time: float
    duration: float

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


@dataclass
class SpriteGroup:
    """Clips sharing one timeline, written out as one mp3/ogg pair."""

    index: int
    placements: list[Placement] = field(default_factory=list)

    def timeline_length(self, spacing: float) -> float:
        """Total length including leading and trailing spacing."""
        if not self.placements:
            return spacing
        return self.placements[-1].end_time + spacing


@dataclass(frozen=True)
class Padding:
    """Silence (seconds) inserted before and after one clip."""

    lead_in: float
    lead_out: float = 0.0


@dataclass(frozen=True)
class Encoding:
    """An output format and the start-of-stream delay its decoders add."""

    name: str
    extension: str
    start_delay: float = 0.0
