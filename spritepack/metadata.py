"""Builds audioSprites.json, the index clients use to find each sound."""

import json
from pathlib import Path
from typing import Sequence

import numpy as np

from spritepack.analyzers.offsets import ENCODINGS
from spritepack.analyzers.packer import placements_by_clip
from spritepack.models import Clip, SpriteGroup

METADATA_FILENAME = "audioSprites.json"


def sprite_stem(base_name: str, group_index: int) -> str:
    return f"{base_name}_{group_index}"


def _single(value: float) -> float:
    """Round to single precision, keeping float32's shortest decimal form."""
    return float(str(np.float32(value)))


def build_document(
    clips: Sequence[Clip],
    groups: Sequence[SpriteGroup],
    base_name: str,
) -> dict:
    """Assemble the metadata document for packed *groups*."""
    audio_sprites = [
        {
            enc.name: f"{sprite_stem(base_name, g.index)}.{enc.extension}"
            for enc in ENCODINGS
        }
        for g in groups
    ]

    placements = placements_by_clip(groups)
    if len(placements) != len(clips):
        raise ValueError(
            f"{len(clips)} clips but {len(placements)} placements; every clip must be packed"
        )

    sounds = [
        {
            "filename": clips[p.clip_index].display_name.replace("\\", "/"),
            "asIndex": p.group_index,
            "startTime": _single(p.start_time),
            "duration": _single(p.duration),
        }
        for p in placements
    ]

    return {"audioSprites": audio_sprites, "sounds": sounds}


def write_document(
    document: dict, destination: Path, indent: int | None = None
) -> Path:
    path = destination / METADATA_FILENAME
    path.write_text(json.dumps(document, indent=indent), encoding="utf-8")
    return path
