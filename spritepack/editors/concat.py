"""Concatenates padded clips into one sample stream per sprite group."""

from typing import Iterator, Sequence

import numpy as np
import soundfile as sf

from spritepack.models import Clip, Padding

BLOCK_FRAMES = 65536


def seconds_to_frames(seconds: float, sample_rate: int) -> int:
    return int(round(seconds * sample_rate))


def _silence(seconds: float, sample_rate: int, channels: int) -> np.ndarray:
    return np.zeros((seconds_to_frames(seconds, sample_rate), channels), dtype=np.float32)


def iter_group_blocks(
    clips: Sequence[Clip],
    paddings: Sequence[Padding],
    sample_rate: int,
    channels: int,
    block_frames: int = BLOCK_FRAMES,
) -> Iterator[np.ndarray]:
    """Yield float32 ``(frames, channels)`` blocks covering a whole group.

    Each call opens its own read handle per clip, so the mp3 and ogg streams
    of a group never share a cursor. Handles are closed as soon as a clip has
    been consumed, or when the consumer stops early.
    """
    if len(clips) != len(paddings):
        raise ValueError("clips and paddings must be the same length")

    for clip, pad in zip(clips, paddings):
        if pad.lead_in > 0:
            yield _silence(pad.lead_in, sample_rate, channels)

        with sf.SoundFile(str(clip.source_path)) as f:
            for block in f.blocks(blocksize=block_frames, dtype="float32", always_2d=True):
                yield block

        if pad.lead_out > 0:
            yield _silence(pad.lead_out, sample_rate, channels)
