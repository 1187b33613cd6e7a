"""Writers for the concatenated group streams."""

from pathlib import Path
from typing import Iterable

import numpy as np
import soundfile as sf


class EncodeError(RuntimeError):
    """Raised when libsndfile rejects a stream."""


def _write(
    blocks: Iterable[np.ndarray],
    path: Path,
    sample_rate: int,
    channels: int,
    format: str,
    subtype: str,
) -> None:
    try:
        with sf.SoundFile(
            str(path), "w",
            samplerate=sample_rate,
            channels=channels,
            format=format,
            subtype=subtype,
        ) as out:
            for block in blocks:
                out.write(block)
    except (sf.LibsndfileError, ValueError) as e:
        raise EncodeError(f"Could not write {path.name}: {e}") from e


def write_mp3(
    blocks: Iterable[np.ndarray], path: Path, sample_rate: int, channels: int
) -> Path:
    """Encode *blocks* to MP3 in-process (libsndfile >= 1.1 with LAME)."""
    _write(blocks, path, sample_rate, channels, "MP3", "MPEG_LAYER_III")
    return path


def write_wav(
    blocks: Iterable[np.ndarray], path: Path, sample_rate: int, channels: int
) -> Path:
    """Write *blocks* as a 16-bit PCM WAV file."""
    _write(blocks, path, sample_rate, channels, "WAV", "PCM_16")
    return path
