"""Tests for per-encoding padding and start-delay compensation."""

from pathlib import Path

import pytest

from spritepack.analyzers.offsets import (
    MP3,
    MP3_START_DELAY,
    OGG,
    check_spacing,
    group_padding,
    playback_start_times,
)
from spritepack.analyzers.packer import pack
from spritepack.models import Clip, Padding


class TestCheckSpacing:
    def test_default_spacing_ok(self):
        assert check_spacing(0.1) is None

    def test_equal_to_delay_rejected(self):
        assert check_spacing(MP3_START_DELAY) == "Spacing duration must be longer than 0.0269."

    def test_below_delay_rejected(self):
        assert check_spacing(0.01) is not None


class TestGroupPadding:
    def test_single_clip_mp3(self):
        [pad] = group_padding(1, 0.1, MP3)
        assert pad.lead_in == pytest.approx(0.0731)
        assert pad.lead_out == 0.1

    def test_single_clip_ogg(self):
        assert group_padding(1, 0.1, OGG) == [Padding(lead_in=0.1, lead_out=0.1)]

    def test_only_first_lead_in_is_compensated(self):
        pads = group_padding(3, 0.1, MP3)
        assert pads[0].lead_in == pytest.approx(0.1 - MP3_START_DELAY)
        assert [p.lead_in for p in pads[1:]] == [0.1, 0.1]

    def test_only_last_clip_has_lead_out(self):
        for encoding in (MP3, OGG):
            pads = group_padding(3, 0.1, encoding)
            assert [p.lead_out for p in pads] == [0.0, 0.0, 0.1]

    def test_empty_group(self):
        assert group_padding(0, 0.1, MP3) == []


class TestPlaybackStartTimes:
    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            playback_start_times([Padding(0.1)], [1.0, 2.0])

    def test_encodings_agree_with_packer(self):
        durations = [0.5, 1.25, 3.0, 0.75]
        clips = [
            Clip(Path(f"{i}.wav"), f"{i}.wav", d, 44100, 1)
            for i, d in enumerate(durations)
        ]
        [group] = pack(clips, spacing=0.1, max_duration=600)
        expected = [p.start_time for p in group.placements]

        for encoding in (MP3, OGG):
            pads = group_padding(len(clips), 0.1, encoding)
            starts = playback_start_times(pads, durations, encoding.start_delay)
            assert starts == pytest.approx(expected)

    def test_first_clip_heard_at_spacing(self):
        mp3 = playback_start_times(group_padding(1, 0.1, MP3), [2.0], MP3.start_delay)
        ogg = playback_start_times(group_padding(1, 0.1, OGG), [2.0], OGG.start_delay)
        assert mp3 == pytest.approx([0.1])
        assert ogg == pytest.approx([0.1])
