from __future__ import annotations
import logging
import re

logger = logging.getLogger(__name__)

_INDEX_LINE = re.compile(r"^\d+$")


def apply_text_transform(srt_text: str, mode: str) -> str:
    """Uppercase the caption text of an SRT document.

    Index lines, ``-->`` timestamp lines and blank lines are kept as they are.
    Any mode other than ``uppercase`` leaves the text untouched.
    """
    if mode != "uppercase":
        return srt_text
    out = []
    for line in srt_text.split("\n"):
        s = line.strip()
        if not s or _INDEX_LINE.match(s) or "-->" in s:
            out.append(line)
        else:
            out.append(s.upper())
    return "\n".join(out)


def process_subtitles_url(subtitles_url: str, mode: str) -> str:
    # The caption asset gets the original file; the transform is not applied to it.
    logger.info("Using original subtitles URL (text transform %r not applied): %s", mode, subtitles_url)
    return subtitles_url
