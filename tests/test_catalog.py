"""Tests for the clip catalog."""

from pathlib import Path

import pytest

from spritepack.analyzers.catalog import (
    ClipValidationError,
    build_catalog,
    check_clip,
    read_clip,
    scan_clips,
)
from spritepack.manifest import AudioFormat, Manifest
from spritepack.models import Clip

MONO = AudioFormat(sample_rate=44100, channels=1)


def _clip(duration: float = 1.0, sample_rate: int = 44100, channels: int = 1) -> Clip:
    return Clip(
        source_path=Path("sounds/boom.wav"),
        display_name="boom.wav",
        duration=duration,
        sample_rate=sample_rate,
        channels=channels,
    )


class TestScanClips:
    def test_recursive_and_sorted(self, make_clip, tmp_path: Path):
        make_clip("b.wav", 10)
        make_clip("sub/c.wav", 10)
        make_clip("a.WAV", 10)
        (tmp_path / "clips" / "notes.txt").write_text("not audio")

        paths = scan_clips(tmp_path / "clips")

        names = [p.relative_to(tmp_path / "clips").as_posix() for p in paths]
        assert names == ["a.WAV", "b.wav", "sub/c.wav"]

    def test_empty_directory(self, tmp_path: Path):
        assert scan_clips(tmp_path) == []


class TestReadClip:
    def test_reads_header(self, make_clip, tmp_path: Path):
        path = make_clip("ui/click.wav", 22050)
        clip = read_clip(path, tmp_path / "clips")
        assert clip.display_name == "ui/click.wav"
        assert clip.duration == 0.5
        assert clip.sample_rate == 44100
        assert clip.channels == 1


class TestCheckClip:
    def test_valid(self):
        assert check_clip(_clip(), MONO, spacing=0.1, max_duration=600) == []

    def test_wrong_sample_rate(self):
        problems = check_clip(_clip(sample_rate=48000), MONO, 0.1, 600)
        assert problems == ["sounds/boom.wav must have a sample rate of 44100"]

    def test_not_mono(self):
        problems = check_clip(_clip(channels=2), MONO, 0.1, 600)
        assert problems == ["sounds/boom.wav must be mono channel."]

    def test_wrong_channel_count(self):
        stereo = AudioFormat(sample_rate=44100, channels=2)
        problems = check_clip(_clip(channels=1), stereo, 0.1, 600)
        assert problems == ["sounds/boom.wav must have 2 channels"]

    def test_exactly_max_minus_two_spacings_is_accepted(self):
        assert check_clip(_clip(duration=10.0), MONO, spacing=0.25, max_duration=10.5) == []

    def test_longer_than_max_minus_two_spacings_is_rejected(self):
        problems = check_clip(_clip(duration=10.0 + 1e-9), MONO, spacing=0.25, max_duration=10.5)
        assert len(problems) == 1
        assert "is too long" in problems[0]
        assert "shorter than 10 seconds" in problems[0]

    def test_collects_all_problems_for_one_clip(self):
        problems = check_clip(_clip(duration=700, sample_rate=22050, channels=2), MONO, 0.1, 600)
        assert len(problems) == 3


class TestBuildCatalog:
    def _manifest(self, tmp_path: Path, **kwargs) -> Manifest:
        return Manifest(source=tmp_path / "clips", destination=tmp_path, **kwargs)

    def test_catalog_order_and_durations(self, make_clip, tmp_path: Path):
        make_clip("b.wav", 44100)
        make_clip("a.wav", 22050)

        clips = build_catalog(self._manifest(tmp_path))

        assert [c.display_name for c in clips] == ["a.wav", "b.wav"]
        assert [c.duration for c in clips] == [0.5, 1.0]

    def test_symlinked_clip_keeps_link_name(self, make_clip, tmp_path: Path):
        target = make_clip("../elsewhere/real.wav", 44100)
        make_clip("a.wav", 22050)
        (tmp_path / "clips" / "link.wav").symlink_to(target)

        clips = build_catalog(self._manifest(tmp_path))

        assert [c.display_name for c in clips] == ["a.wav", "link.wav"]
        assert clips[1].duration == 1.0

    def test_no_clips(self, tmp_path: Path):
        (tmp_path / "clips").mkdir()
        with pytest.raises(ClipValidationError, match="No .wav files found"):
            build_catalog(self._manifest(tmp_path))

    def test_collects_problems_across_clips(self, make_clip, tmp_path: Path):
        make_clip("ok.wav", 44100)
        make_clip("stereo.wav", 44100, channels=2)
        make_clip("slow.wav", 48000, sample_rate=48000)
        make_clip("long.wav", 44100 * 2)

        with pytest.raises(ClipValidationError) as exc_info:
            build_catalog(self._manifest(tmp_path, max_duration=1.5, spacing=0.25))

        problems = exc_info.value.problems
        assert len(problems) == 3
        assert any("stereo.wav must be mono channel." in p for p in problems)
        assert any("slow.wav must have a sample rate of 44100" in p for p in problems)
        assert any("long.wav is too long" in p for p in problems)

    def test_exact_fit_clip_accepted(self, make_clip, tmp_path: Path):
        make_clip("fits.wav", 44100)
        clips = build_catalog(self._manifest(tmp_path, max_duration=1.5, spacing=0.25))
        assert len(clips) == 1

    def test_unreadable_clip_reported(self, make_clip, tmp_path: Path):
        make_clip("ok.wav", 100)
        (tmp_path / "clips" / "broken.wav").write_bytes(b"not a wav file")

        with pytest.raises(ClipValidationError, match="broken.wav could not be read"):
            build_catalog(self._manifest(tmp_path))
