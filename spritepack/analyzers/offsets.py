"""Per-clip silence padding that keeps mp3 and ogg timelines in agreement.

Every clip is preceded by ``spacing`` seconds of silence and the last clip of
a group is followed by another ``spacing``. MP3 decoders start playback a
fixed delay late, so the first lead-in of the mp3 stream is shortened by that
delay. Played back, both encodings then place every clip at the start time the
packer recorded.
"""

from typing import Sequence

from spritepack.models import Encoding, Padding

# Not exactly 1056 / 44100.
MP3_START_DELAY = 0.0269

MP3 = Encoding(name="mp3", extension="mp3", start_delay=MP3_START_DELAY)
OGG = Encoding(name="ogg", extension="ogg")

ENCODINGS = (MP3, OGG)


def check_spacing(spacing: float, start_delay: float = MP3_START_DELAY) -> str | None:
    """Return a problem message if the first lead-in would not be positive."""
    if spacing <= start_delay:
        return f"Spacing duration must be longer than {start_delay}."
    return None


def group_padding(count: int, spacing: float, encoding: Encoding) -> list[Padding]:
    """Lead-in/lead-out silence for each of *count* clips in one group."""
    paddings: list[Padding] = []
    for i in range(count):
        lead_in = spacing - encoding.start_delay if i == 0 else spacing
        lead_out = spacing if i == count - 1 else 0.0
        paddings.append(Padding(lead_in=lead_in, lead_out=lead_out))
    return paddings


def playback_start_times(
    paddings: Sequence[Padding],
    durations: Sequence[float],
    start_delay: float = 0.0,
) -> list[float]:
    """Where each clip is heard when the encoded stream is played back."""
    if len(paddings) != len(durations):
        raise ValueError("paddings and durations must be the same length")

    starts: list[float] = []
    cursor = start_delay
    for pad, duration in zip(paddings, durations):
        cursor += pad.lead_in
        starts.append(cursor)
        cursor += duration + pad.lead_out
    return starts
