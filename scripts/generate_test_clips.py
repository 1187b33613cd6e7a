#!/usr/bin/env python3
"""Generate a directory of synthetic clips for SpritePack testing.

Produces mono 44.1kHz .wav tones, including one in a subdirectory so the
recursive search and forward-slash display names get exercised:
  beep_440.wav        0.5s  440 Hz
  beep_880.wav        0.75s 880 Hz
  long/drone_220.wav  3s    220 Hz
  long/drone_330.wav  4s    330 Hz
"""

import subprocess
import sys
from pathlib import Path

CLIPS = [
    ("beep_440.wav", 440, 0.5),
    ("beep_880.wav", 880, 0.75),
    ("long/drone_220.wav", 220, 3.0),
    ("long/drone_330.wav", 330, 4.0),
]


def generate_test_clips(output_dir: Path) -> None:
    for name, freq, duration in CLIPS:
        out = output_dir / name
        out.parent.mkdir(parents=True, exist_ok=True)
        cmd = [
            "ffmpeg", "-y",
            "-f", "lavfi",
            "-i", f"sine=f={freq}:d={duration}:sample_rate=44100",
            "-ac", "1",
            "-c:a", "pcm_s16le",
            str(out),
        ]
        subprocess.run(cmd, capture_output=True, check=True)
        print(f"Generated: {out}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("tests/fixtures/clips")
    generate_test_clips(out)
