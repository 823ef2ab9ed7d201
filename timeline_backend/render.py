from __future__ import annotations
import json
import logging
import os
import time
from typing import Any, Dict, Optional

import requests

from .config import Settings
from .models import RenderOutput, RenderPayload, Timeline

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """The external renderer refused the job or could not be reached."""

    def __init__(self, message: str, status_code: int = 502, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


def build_payload(timeline: Timeline, callback_url: Optional[str] = None) -> RenderPayload:
    return RenderPayload(timeline=timeline, output=RenderOutput(), callback=callback_url)


def payload_to_dict(payload: RenderPayload) -> Dict[str, Any]:
    return payload.model_dump(by_alias=True, exclude_none=True)


def write_debug_payload(payload: RenderPayload, metadata: Dict[str, Any], debug_dir: str, video_id: str) -> Optional[str]:
    """Dump the submitted payload for diagnostics. Failures are logged, never raised."""
    name = f"shotstack-payload-{video_id}-{int(time.time() * 1000)}.json"
    path = os.path.join(debug_dir, name)
    try:
        os.makedirs(debug_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"metadata": metadata, "payload": payload_to_dict(payload)}, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.warning("Could not write payload to file: %s", e)
        return None
    logger.info("Render payload saved to: %s", path)
    return path


def _endpoint(settings: Settings) -> str:
    if not settings.shotstack_endpoint:
        raise RenderError("Shotstack endpoint is not configured", status_code=500)
    return settings.shotstack_endpoint.rstrip("/")


def _error_details(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return json.dumps(data)


def submit_render(payload: RenderPayload, settings: Settings, timeout: float = 30.0) -> str:
    """POST the timeline to the renderer and return its render id."""
    url = f"{_endpoint(settings)}/render"
    try:
        resp = requests.post(
            url,
            json=payload_to_dict(payload),
            headers={"Content-Type": "application/json", "x-api-key": settings.shotstack_api_key},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise RenderError("Failed to reach Shotstack API", status_code=502, details=str(e)) from e
    if not resp.ok:
        details = _error_details(resp)
        logger.error("Shotstack API error (%s): %s", resp.status_code, details)
        raise RenderError("Failed to create video with Shotstack API", status_code=resp.status_code, details=details)
    render_id = resp.json()["response"]["id"]
    logger.info("Shotstack accepted render %s", render_id)
    return render_id


def fetch_render_status(render_id: str, settings: Settings, timeout: float = 30.0) -> Dict[str, Any]:
    """Current renderer-side state of a job: ``status``, ``url`` and ``error`` keys."""
    url = f"{_endpoint(settings)}/render/{render_id}"
    try:
        resp = requests.get(url, headers={"x-api-key": settings.shotstack_api_key}, timeout=timeout)
    except requests.RequestException as e:
        raise RenderError("Failed to reach Shotstack API", status_code=502, details=str(e)) from e
    if not resp.ok:
        raise RenderError("Failed to fetch render status", status_code=resp.status_code, details=_error_details(resp))
    return resp.json().get("response") or {}
