from __future__ import annotations
import os
import json
import time
from typing import List, Optional

from .config import get_settings
from .models import VideoRecord


def records_dir() -> str:
    d = os.path.join(get_settings().data_dir, "videos")
    os.makedirs(d, exist_ok=True)
    return d


def record_path(vid: str) -> str:
    return os.path.join(records_dir(), f"{vid}.json")


def save_record(rec: VideoRecord) -> None:
    rec.updated_at = time.time()
    with open(record_path(rec.id), "w", encoding="utf-8") as f:
        json.dump(rec.model_dump(), f, ensure_ascii=False, indent=2)


def load_record(vid: str) -> Optional[VideoRecord]:
    p = record_path(vid)
    if not os.path.exists(p):
        return None
    with open(p, "r", encoding="utf-8") as f:
        data = json.load(f)
    return VideoRecord.model_validate(data)


def list_records() -> List[VideoRecord]:
    out = []
    for name in os.listdir(records_dir()):
        if not name.endswith(".json"):
            continue
        rec = load_record(name[: -len(".json")])
        if rec:
            out.append(rec)
    out.sort(key=lambda r: r.created_at, reverse=True)
    return out


def delete_record(vid: str) -> bool:
    p = record_path(vid)
    if not os.path.exists(p):
        return False
    os.remove(p)
    return True
