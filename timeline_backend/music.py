from __future__ import annotations
import logging
import math
from typing import List, Optional

from .models import CreateVideoReq, AudioAsset, Clip, Track

logger = logging.getLogger(__name__)

DEFAULT_MUSIC_VOLUME = 0.3
DEFAULT_TRACK_DURATION = 30.0  # used when a source does not report its length


def _duration(value: Optional[float]) -> float:
    # zero / negative lengths would never advance the playlist
    if not value or value <= 0:
        return DEFAULT_TRACK_DURATION
    return float(value)


def _clip(src: str, start: float, length: float, volume: float) -> Clip:
    return Clip(asset=AudioAsset(src=src, volume=volume), start=start, length=length)


def _sequence(items: List[tuple[str, float]], total: float, volume: float) -> List[Clip]:
    """Play ``(src, duration)`` items back to back, wrapping the list until total is covered."""
    clips: List[Clip] = []
    current = 0.0
    if not items:
        return clips
    while current < total:
        for src, dur in items:
            if current >= total:
                break
            length = min(dur, total - current)
            clips.append(_clip(src, current, length, volume))
            current += length
    return clips


def _playlist_clips(req: CreateVideoReq, total: float, volume: float) -> Optional[List[Clip]]:
    tracks = req.selected_music_tracks or []
    valid = [t for t in tracks if t.preview_url and t.title]
    if not valid:
        logger.warning("No valid tracks in selectedMusicTracks (missing preview_url or title); skipping music")
        return None
    logger.info("Music playlist: %d/%d valid tracks", len(valid), len(tracks))
    ordered = sorted(valid, key=lambda t: t.order or 0)
    for i, t in enumerate(ordered):
        logger.debug("  #%s %r by %s", t.order or (i + 1), t.title, t.artist)
    return _sequence([(t.preview_url, _duration(t.duration)) for t in ordered], total, volume)


def _single_track_clips(req: CreateVideoReq, total: float, volume: float) -> List[Clip]:
    track = req.selected_music_track
    dur = _duration(track.duration)
    loop_count = math.ceil(total / dur)
    logger.info("Looping %r (%.1fs) %d times over %.1fs", track.title, dur, max(0, loop_count), total)
    clips = []
    for i in range(loop_count):
        start = i * dur
        length = min(dur, total - start)
        if length > 0:
            clips.append(_clip(track.preview_url or "", start, length, volume))
    return clips


def _custom_file_clips(req: CreateVideoReq, total: float, volume: float) -> List[Clip]:
    files = req.custom_music_files or []
    logger.info("Music from %d uploaded file(s)", len(files))
    return _sequence([(f.url, _duration(f.duration)) for f in files], total, volume)


def build_music_track(req: CreateVideoReq, total: float) -> Optional[Track]:
    """Background music track, or None for a voiceover-only video."""
    has_source = bool(req.selected_music_tracks) or req.selected_music_track is not None or bool(req.custom_music_files)
    if not (req.use_custom_music and has_source):
        logger.info("No background music selected - using voiceover only")
        return None

    volume = DEFAULT_MUSIC_VOLUME if req.music_volume is None else req.music_volume
    if req.selected_music_tracks:
        clips = _playlist_clips(req, total, volume)
        if clips is None:
            return None
    elif req.selected_music_track is not None:
        clips = _single_track_clips(req, total, volume)
    else:
        clips = _custom_file_clips(req, total, volume)
    return Track(clips=clips)
