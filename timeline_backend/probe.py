from __future__ import annotations
import logging
from typing import Optional

from moviepy.audio.io.AudioFileClip import AudioFileClip

logger = logging.getLogger(__name__)


def probe_audio_duration(url: str) -> Optional[float]:
    """Duration in seconds of a local or remote audio file, or None."""
    clip = None
    try:
        clip = AudioFileClip(url)
        duration = float(clip.duration or 0.0)
    except Exception as e:
        logger.warning("Could not probe audio duration for %s: %s", url, e)
        return None
    finally:
        if clip is not None:
            clip.close()
    return duration if duration > 0 else None
