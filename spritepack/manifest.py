"""Build configuration, loaded from a JSON manifest or built by the CLI."""

import json
from dataclasses import dataclass, field
from pathlib import Path

from spritepack.analyzers.offsets import MP3_START_DELAY, check_spacing


class ConfigError(ValueError):
    """Raised with every configuration problem found at once."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("\n".join(self.problems))


@dataclass
class AudioFormat:
    """Sample format every input clip must share."""

    sample_rate: int = 44100
    channels: int = 1


@dataclass
class OggConfig:
    """Configuration for the external ffmpeg ogg/vorbis conversion."""

    ffmpeg: str = "ffmpeg"
    quality: int = 6
    timeout: float | None = None


@dataclass
class Manifest:
    """Top-level sprite build manifest."""

    source: Path
    destination: Path
    wav_dir: Path = Path("./wav-audiosprites")
    base_name: str = "audioSprite"
    max_duration: float = 600.0
    spacing: float = 0.1
    indent: int | None = None
    version: str = "1"
    audio: AudioFormat = field(default_factory=AudioFormat)
    ogg: OggConfig = field(default_factory=OggConfig)


def validate_manifest(manifest: Manifest) -> None:
    """Raise ConfigError listing every problem with *manifest*."""
    problems: list[str] = []

    if not manifest.source.is_dir():
        problems.append(f"Source directory {manifest.source} doesn't exist.")

    if not manifest.destination.is_dir():
        problems.append(f"Destination directory {manifest.destination} doesn't exist.")

    if not manifest.base_name:
        problems.append("Base file name must not be empty.")

    if manifest.max_duration <= 0:
        problems.append("Maximum audio sprite duration must be positive.")

    spacing_problem = check_spacing(manifest.spacing, MP3_START_DELAY)
    if spacing_problem:
        problems.append(spacing_problem)

    if manifest.audio.sample_rate <= 0 or manifest.audio.channels <= 0:
        problems.append("Sample rate and channel count must be positive.")

    if manifest.ogg.timeout is not None and manifest.ogg.timeout <= 0:
        problems.append("Converter timeout must be positive when set.")

    if problems:
        raise ConfigError(problems)


def load_manifest(path: str | Path) -> Manifest:
    """Load a manifest from a JSON file. Relative paths resolve against the file."""
    path = Path(path)
    data = json.loads(path.read_text())

    if "source" not in data or "destination" not in data:
        raise ValueError("Manifest must contain 'source' and 'destination' fields")

    base = path.parent

    def _resolve(value: str) -> Path:
        p = Path(value)
        return p if p.is_absolute() else base / p

    audio = AudioFormat(**data["audio"]) if "audio" in data else AudioFormat()
    ogg = OggConfig(**data["ogg"]) if "ogg" in data else OggConfig()

    return Manifest(
        version=data.get("version", "1"),
        source=_resolve(data["source"]),
        destination=_resolve(data["destination"]),
        wav_dir=_resolve(data.get("wav_dir", "./wav-audiosprites")),
        base_name=data.get("base_name", "audioSprite"),
        max_duration=float(data.get("max_duration", 600.0)),
        spacing=float(data.get("spacing", 0.1)),
        indent=data.get("indent"),
        audio=audio,
        ogg=ogg,
    )
