from __future__ import annotations
import logging
from typing import List, Optional, Union

from .models import CreateVideoReq, AudioAsset, Clip, ImageAsset, MediaItem, Timeline, Track, VideoAsset
from .durations import DurationPlan
from .overlays import build_overlay_track, enabled_overlays
from .captions import build_caption_track
from .music import build_music_track

logger = logging.getLogger(__name__)

DEFAULT_VOICEOVER_VOLUME = 0.8
_ZOOMABLE = ("image", "animation")


def _media_clip(item: MediaItem, index: int, start: float, length: float, zoom: bool) -> Clip:
    # "animation" only exists in the UI; the renderer sees a still image
    asset: Union[ImageAsset, VideoAsset]
    if item.type == "video":
        asset = VideoAsset(src=item.url)
    else:
        asset = ImageAsset(src=item.url)
    effect = None
    if zoom and item.type in _ZOOMABLE:
        effect = "zoomIn" if index % 2 == 0 else "zoomOut"
    return Clip(asset=asset, start=start, length=length, fit="cover", effect=effect)


def build_media_track(req: CreateVideoReq, plan: DurationPlan) -> Track:
    items = req.media()
    clips: List[Clip] = []
    running = 0.0
    if plan.segmented:
        timings = req.segment_timings or []
        for i, item in enumerate(items):
            length = timings[i].duration
            clips.append(_media_clip(item, i, running, length, req.zoom_effect))
            running += length
    else:
        for i, item in enumerate(items):
            clips.append(_media_clip(item, i, running, plan.per_item, req.zoom_effect))
            running += plan.per_item
    logger.info("Media track: %d clips (%s), %.2fs", len(clips), "segmented" if plan.segmented else "uniform", running)
    return Track(clips=clips)


def build_voiceover_track(req: CreateVideoReq, total: float) -> Optional[Track]:
    src = req.voiceover_url()
    if not src:
        logger.warning("No voiceover audio URL provided for video generation")
        return None
    volume = DEFAULT_VOICEOVER_VOLUME if req.voiceover_volume is None else req.voiceover_volume
    logger.info("Voiceover (%s): %s", "original" if req.audio_url else "compressed", src)
    return Track(clips=[Clip(asset=AudioAsset(src=src, volume=volume), start=0, length=total)])


def build_timeline(req: CreateVideoReq, plan: DurationPlan) -> Timeline:
    """Assemble every track in renderer layer order.

    overlays (dust, snow, screen displacement, fire) -> captions -> media
    -> voiceover -> background music
    """
    total = plan.total
    tracks: List[Track] = [build_overlay_track(kind, total) for kind in enabled_overlays(req)]

    captions = build_caption_track(req, total)
    if captions is not None:
        tracks.append(captions)

    tracks.append(build_media_track(req, plan))

    for optional in (build_voiceover_track(req, total), build_music_track(req, total)):
        if optional is not None:
            tracks.append(optional)

    logger.info("Timeline: %d tracks, %.2fs", len(tracks), total)
    return Timeline(tracks=tracks)
