from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List

from .models import CreateVideoReq, Clip, Track, VideoAsset

logger = logging.getLogger(__name__)

# Every overlay asset is a 19 second loop
OVERLAY_SEGMENT_LENGTH = 19.0

_ASSET_BASE = "https://byktarizdjtreqwudqmv.supabase.co/storage/v1/object/public/video-generator"


@dataclass(frozen=True)
class OverlayKind:
    name: str
    src: str
    opacity: float


DUST = OverlayKind("dust", f"{_ASSET_BASE}/overlay.webm", 0.15)
SNOW = OverlayKind("snow", f"{_ASSET_BASE}/overlays/snow-falling-2023-11-27-04-51-47-utc.webm", 0.2)
SCREEN_DISPLACEMENT = OverlayKind(
    "screen_displacement",
    f"{_ASSET_BASE}/overlays/screen-displacement-map-glitch-effect-digital-pixe-2024-07-17-05-42-56-utc.webm",
    0.25,
)
FIRE = OverlayKind("fire", f"{_ASSET_BASE}/overlays/Fire%20Particles%20Overlay.webm", 0.3)

# Track order in the timeline
OVERLAY_KINDS = (DUST, SNOW, SCREEN_DISPLACEMENT, FIRE)


def enabled_overlays(req: CreateVideoReq) -> List[OverlayKind]:
    flags = {
        DUST.name: req.dust_overlay,
        SNOW.name: req.snow_overlay,
        SCREEN_DISPLACEMENT.name: req.screen_displacement_overlay,
        FIRE.name: req.fire_overlay,
    }
    return [k for k in OVERLAY_KINDS if flags[k.name]]


def build_overlay_track(kind: OverlayKind, total: float) -> Track:
    num_clips = math.ceil(total / OVERLAY_SEGMENT_LENGTH)
    clips = []
    for i in range(num_clips):
        start = i * OVERLAY_SEGMENT_LENGTH
        length = min(OVERLAY_SEGMENT_LENGTH, total - start)
        if length <= 0:
            continue
        clips.append(Clip(
            asset=VideoAsset(src=kind.src, volume=0),
            start=start,
            length=length,
            fit="cover",
            opacity=kind.opacity,
        ))
    logger.info("Overlay %s: %d clips to cover %.1fs", kind.name, len(clips), total)
    return Track(clips=clips)
