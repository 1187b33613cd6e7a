"""First-fit grouping of clips into sprites under a duration ceiling."""

from typing import Sequence

from spritepack.models import Clip, Placement, SpriteGroup


def pack(
    clips: Sequence[Clip],
    spacing: float,
    max_duration: float,
) -> list[SpriteGroup]:
    """Split *clips* into sprite groups, in order, without reordering.

    Each group starts with ``spacing`` seconds of silence and every clip is
    followed by another ``spacing``. A clip that would push the group past
    ``max_duration`` starts the next group instead. Clips are never moved to
    a later group to fill earlier ones better, so the output mirrors the
    catalog order.
    """
    groups: list[SpriteGroup] = []
    current = SpriteGroup(index=0)
    elapsed = spacing

    for clip_index, clip in enumerate(clips):
        if current.placements and elapsed + clip.duration + spacing > max_duration:
            groups.append(current)
            current = SpriteGroup(index=current.index + 1)
            elapsed = spacing

        current.placements.append(
            Placement(
                clip_index=clip_index,
                group_index=current.index,
                start_time=elapsed,
                duration=clip.duration,
            )
        )
        elapsed += clip.duration + spacing

    if current.placements:
        groups.append(current)

    return groups


def placements_by_clip(groups: Sequence[SpriteGroup]) -> list[Placement]:
    """Flatten *groups* back into catalog order."""
    placements = [p for g in groups for p in g.placements]
    return sorted(placements, key=lambda p: p.clip_index)
