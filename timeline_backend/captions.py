from __future__ import annotations
import logging
from typing import Optional

from .models import CreateVideoReq, CaptionAsset, CaptionFont, Clip, Track
from .srt import process_subtitles_url

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Montserrat ExtraBold"
FALLBACK_RENDERER_FONT = "Montserrat"
DEFAULT_FONT_SIZE = 24
DEFAULT_FONT_COLOR = "#ffffff"
DEFAULT_FONT_WEIGHT = "700"
DEFAULT_STROKE_WIDTH = 2
DEFAULT_TEXT_TRANSFORM = "uppercase"

# UI font names -> families the renderer knows
FONT_FAMILY_MAP = {
    "Arapey Regular": "serif",
    "Clear Sans": "sans-serif",
    "Didact Gothic": "Didact Gothic",
    "Montserrat ExtraBold": "Montserrat",
    "Montserrat SemiBold": "Montserrat",
    "OpenSans Bold": "Open Sans",
    "Permanent Marker": "Permanent Marker",
    "Roboto": "Roboto",
    "Sue Ellen Francisco": "cursive",
    "UniNeue": "sans-serif",
    "WorkSans Light": "Work Sans",
}


def renderer_font_family(name: str) -> str:
    return FONT_FAMILY_MAP.get(name, FALLBACK_RENDERER_FONT)


def build_caption_track(req: CreateVideoReq, total: float) -> Optional[Track]:
    if not req.subtitles_url:
        return None
    src = process_subtitles_url(req.subtitles_url, req.text_transform or DEFAULT_TEXT_TRANSFORM)
    font = CaptionFont(
        family=renderer_font_family(req.font_family or DEFAULT_FONT_FAMILY),
        size=req.font_size or DEFAULT_FONT_SIZE,
        color=req.font_color or DEFAULT_FONT_COLOR,
        weight=req.font_weight or DEFAULT_FONT_WEIGHT,
        stroke_width=req.stroke_width or DEFAULT_STROKE_WIDTH,
    )
    logger.info("Captions from %s (font %s, color %s)", src, font.family, font.color)
    return Track(clips=[Clip(asset=CaptionAsset(src=src, font=font), start=0, length=total)])
