from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .models import CreateVideoReq

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_DURATION = 300.0  # 5 minutes when the voiceover length is unknown

AudioProbe = Callable[[str], Optional[float]]


@dataclass(frozen=True)
class DurationPlan:
    total: float
    per_item: float = 0.0
    segmented: bool = False


def resolve_durations(req: CreateVideoReq, probe: Optional[AudioProbe] = None) -> DurationPlan:
    """Compute the single time axis every track is laid out against.

    Segmented mode sums the explicit per-item timings. Otherwise the voiceover
    length (given, probed, or the 300s default) is split evenly over the media.
    """
    timings = req.segment_timings or []
    if timings:
        total = sum(t.duration for t in timings)
        logger.info("Segmented timing: %d segments, %.2fs total", len(timings), total)
        return DurationPlan(total=total, per_item=0.0, segmented=True)

    duration = req.audio_duration
    audio_url = req.voiceover_url()
    if not duration and probe is not None and audio_url:
        duration = probe(audio_url)
    total = duration or DEFAULT_TOTAL_DURATION

    count = len(req.media())
    per_item = total / count if count > 0 else 0.0
    logger.info("Uniform timing: %.1fs over %d items (%.2fs each)", total, count, per_item)
    return DurationPlan(total=total, per_item=per_item, segmented=False)
