"""Shared test fixtures."""

from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"


@pytest.fixture
def make_clip(tmp_path: Path):
    """Factory writing a constant-valued 16-bit WAV clip under tmp_path/clips."""

    def _make(
        name: str,
        frames: int,
        sample_rate: int = 44100,
        channels: int = 1,
        value: float = 0.5,
    ) -> Path:
        path = tmp_path / "clips" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        data = np.full((frames, channels), value, dtype=np.float32)
        sf.write(str(path), data, sample_rate, subtype="PCM_16")
        return path

    return _make


class FakeRunner:
    """ProcessRunner that records calls and touches the output file."""

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls: list[tuple[str, list[str], float | None]] = []

    def run(self, executable: str, args: list[str], timeout: float | None = None) -> int:
        self.calls.append((executable, args, timeout))
        if self.returncode == 0:
            Path(args[-1]).write_bytes(b"OggS")
        return self.returncode


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()
