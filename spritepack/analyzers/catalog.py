"""Finds the input clips and checks that they share one sample format."""

import logging
from pathlib import Path

import soundfile as sf

from spritepack.manifest import AudioFormat, Manifest
from spritepack.models import Clip

log = logging.getLogger(__name__)


class ClipValidationError(ValueError):
    """Raised with every clip problem found in the source tree."""

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__("\n".join(self.problems))


def _relative_name(path: Path, root: Path) -> str:
    return path.relative_to(root).as_posix()


def scan_clips(root: Path) -> list[Path]:
    """Return every .wav file under *root*, ordered by relative path.

    Sorting on the forward-slash relative path keeps the order (and therefore
    the packing) identical across runs and platforms.
    """
    found = [
        p for p in root.rglob("*")
        if p.is_file() and p.suffix.lower() == ".wav"
    ]
    return sorted(found, key=lambda p: _relative_name(p, root))


def read_clip(path: Path, root: Path) -> Clip:
    """Read sample rate, channel count and duration from the file header."""
    info = sf.info(str(path))
    return Clip(
        source_path=path,
        display_name=_relative_name(path, root),
        duration=info.frames / info.samplerate,
        sample_rate=info.samplerate,
        channels=info.channels,
    )


def check_clip(
    clip: Clip,
    audio: AudioFormat,
    spacing: float,
    max_duration: float,
) -> list[str]:
    """Return the problems that keep *clip* out of a sprite."""
    problems: list[str] = []
    name = str(clip.source_path)

    if clip.sample_rate != audio.sample_rate:
        problems.append(f"{name} must have a sample rate of {audio.sample_rate}")

    if clip.channels != audio.channels:
        if audio.channels == 1:
            problems.append(f"{name} must be mono channel.")
        else:
            problems.append(f"{name} must have {audio.channels} channels")

    # A clip must fit alone between a leading and a trailing spacing.
    longest = max_duration - spacing * 2
    if clip.duration > longest:
        problems.append(
            f"{name} is too long.  With current parameters sound length "
            f"must be shorter than {longest:g} seconds."
        )

    return problems


def build_catalog(manifest: Manifest) -> list[Clip]:
    """Enumerate and validate every clip. Raises ClipValidationError."""
    paths = scan_clips(manifest.source)
    if not paths:
        raise ClipValidationError([f"No .wav files found in {manifest.source}"])

    clips: list[Clip] = []
    problems: list[str] = []
    for path in paths:
        try:
            clip = read_clip(path, manifest.source)
        except RuntimeError as e:
            problems.append(f"{path} could not be read: {e}")
            continue
        problems.extend(
            check_clip(clip, manifest.audio, manifest.spacing, manifest.max_duration)
        )
        clips.append(clip)

    if problems:
        raise ClipValidationError(problems)

    log.info("Catalogued %d clips from %s", len(clips), manifest.source)
    return clips
