"""Runs a sprite build from a Manifest, from catalog to audioSprites.json."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from spritepack import ffutil
from spritepack.analyzers.catalog import build_catalog
from spritepack.analyzers.offsets import MP3, OGG, group_padding, playback_start_times
from spritepack.analyzers.packer import pack
from spritepack.editors.concat import iter_group_blocks
from spritepack.editors.encode import write_mp3, write_wav
from spritepack.manifest import Manifest, validate_manifest
from spritepack.metadata import METADATA_FILENAME, build_document, sprite_stem, write_document
from spritepack.models import Clip, Encoding, SpriteGroup

log = logging.getLogger(__name__)


@dataclass
class SpritePlan:
    clips: list[Clip]
    groups: list[SpriteGroup]


@dataclass
class EngineResult:
    metadata_path: Path
    document: dict = field(default_factory=dict)
    sprite_files: list[Path] = field(default_factory=list)
    clip_count: int = 0
    group_count: int = 0


def plan(manifest: Manifest) -> SpritePlan:
    """Validate the manifest, catalog the clips and pack them. Writes nothing."""
    validate_manifest(manifest)
    clips = build_catalog(manifest)
    groups = pack(clips, manifest.spacing, manifest.max_duration)
    return SpritePlan(clips=clips, groups=groups)


def describe_group(sprite_plan: SpritePlan, group: SpriteGroup, base_name: str) -> list[str]:
    """Human-readable listing of one group, one line per clip."""
    lines = [f"{sprite_stem(base_name, group.index)}:"]
    for p in group.placements:
        clip = sprite_plan.clips[p.clip_index]
        lines.append(
            f"- {clip.display_name} start time: {p.start_time:g} duration: {p.duration:g}"
        )
    return lines


def _log_boundaries(group: SpriteGroup, clips: list[Clip], spacing: float, encoding: Encoding) -> None:
    if not log.isEnabledFor(logging.DEBUG):
        return
    paddings = group_padding(len(clips), spacing, encoding)
    starts = playback_start_times(paddings, [c.duration for c in clips], encoding.start_delay)
    log.debug(
        "%s group %d clip starts: %s",
        encoding.name, group.index, ", ".join(f"{s:.4f}" for s in starts),
    )


def process(
    manifest: Manifest,
    on_progress: Callable[[str, float], None] | None = None,
    runner: ffutil.ProcessRunner | None = None,
) -> EngineResult:
    """Execute the full sprite build.

    Args:
        manifest: Sprite build manifest; validated here.
        on_progress: Optional callback(stage_name, fraction_complete).
        runner: Runs the external ogg converter. Defaults to SubprocessRunner.
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    runner = runner or ffutil.SubprocessRunner()

    _progress("Checking configuration", 0.0)
    validate_manifest(manifest)
    ffutil.check_ffmpeg(manifest.ogg.ffmpeg)

    _progress("Reading clips", 0.02)
    clips = build_catalog(manifest)
    sprite_plan = SpritePlan(clips=clips, groups=pack(clips, manifest.spacing, manifest.max_duration))
    groups = sprite_plan.groups
    _progress(f"Packed {len(sprite_plan.clips)} clips into {len(groups)} sprites", 0.10)

    # Absent until every group below has been rewritten
    (manifest.destination / METADATA_FILENAME).unlink(missing_ok=True)
    manifest.wav_dir.mkdir(parents=True, exist_ok=True)
    rate = manifest.audio.sample_rate
    channels = manifest.audio.channels
    sprite_files: list[Path] = []

    for n, group in enumerate(groups):
        base = 0.10 + 0.85 * n / len(groups)
        span = 0.85 / len(groups)
        stem = sprite_stem(manifest.base_name, group.index)
        for line in describe_group(sprite_plan, group, manifest.base_name):
            log.info(line)

        group_clips = [sprite_plan.clips[p.clip_index] for p in group.placements]

        _progress(f"Encoding {stem}.mp3", base)
        _log_boundaries(group, group_clips, manifest.spacing, MP3)
        mp3_path = manifest.destination / f"{stem}.{MP3.extension}"
        write_mp3(
            iter_group_blocks(group_clips, group_padding(len(group_clips), manifest.spacing, MP3), rate, channels),
            mp3_path, rate, channels,
        )

        _progress(f"Encoding {stem}.ogg", base + span / 2)
        _log_boundaries(group, group_clips, manifest.spacing, OGG)
        wav_path = manifest.wav_dir / f"{stem}.wav"
        write_wav(
            iter_group_blocks(group_clips, group_padding(len(group_clips), manifest.spacing, OGG), rate, channels),
            wav_path, rate, channels,
        )
        ogg_path = ffutil.convert_to_ogg(
            wav_path,
            manifest.destination / f"{stem}.{OGG.extension}",
            runner,
            ffmpeg=manifest.ogg.ffmpeg,
            quality=manifest.ogg.quality,
            timeout=manifest.ogg.timeout,
        )
        sprite_files.extend([mp3_path, ogg_path])

    # Only reached when every group was written
    _progress("Writing metadata", 0.96)
    document = build_document(sprite_plan.clips, groups, manifest.base_name)
    metadata_path = write_document(document, manifest.destination, indent=manifest.indent)

    _progress("Done", 1.0)
    return EngineResult(
        metadata_path=metadata_path,
        document=document,
        sprite_files=sprite_files,
        clip_count=len(sprite_plan.clips),
        group_count=len(groups),
    )
