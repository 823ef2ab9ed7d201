from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv, find_dotenv

# Local .env values never override the real environment
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Settings:
    shotstack_api_key: str = ""
    shotstack_endpoint: str = ""
    shotstack_callback_url: Optional[str] = None
    data_dir: str = "data"
    debug_dir: str = "debug"
    debug_payloads: bool = True


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def get_settings() -> Settings:
    cwd = os.getcwd()
    return Settings(
        shotstack_api_key=os.getenv("SHOTSTACK_API_KEY", ""),
        shotstack_endpoint=os.getenv("SHOTSTACK_ENDPOINT", ""),
        shotstack_callback_url=os.getenv("SHOTSTACK_CALLBACK_URL") or None,
        data_dir=os.path.abspath(os.getenv("VIDEO_DATA_DIR") or os.path.join(cwd, "data")),
        debug_dir=os.path.abspath(os.getenv("VIDEO_DEBUG_DIR") or os.path.join(cwd, "debug")),
        debug_payloads=_flag("VIDEO_DEBUG_PAYLOADS", True),
    )
