from __future__ import annotations
import logging
import time
import uuid
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .durations import resolve_durations
from .models import CheckStatusReq, CreateVideoReq, VideoRecord
from .probe import probe_audio_duration
from .render import RenderError, build_payload, fetch_render_status, submit_render, write_debug_payload
from .storage import delete_record, list_records, load_record, save_record
from .timeline import build_timeline

logger = logging.getLogger(__name__)

app = FastAPI(title="Timeline Backend", default_response_class=JSONResponse)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validate(req: CreateVideoReq) -> None:
    media = req.media()
    if not media:
        raise HTTPException(400, "Image URLs are required.")
    if not req.audio_url:
        raise HTTPException(400, "Audio URL is required.")
    if req.segment_timings is not None:
        if not req.segment_timings:
            raise HTTPException(400, "Segment timings must be a non-empty array when provided.")
        if len(req.segment_timings) < len(media):
            raise HTTPException(400, "Segment timings must cover every media item.")


def _error(status: int, error: str, details: str | None = None) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(body, status_code=status)


@app.get("/health")
def health():
    return {"ok": True, "time": time.time()}


@app.post("/create-video", status_code=202)
def api_create_video(req: CreateVideoReq):
    _validate(req)
    settings = get_settings()
    video_id = str(uuid.uuid4())
    media = req.media()
    logger.info("Starting video creation %s", video_id)
    try:
        plan = resolve_durations(req, probe=probe_audio_duration)
        timeline = build_timeline(req, plan)
        payload = build_payload(timeline, settings.shotstack_callback_url)
        kind = "Segmented" if plan.segmented else "Traditional"

        if settings.debug_payloads:
            write_debug_payload(payload, {
                "videoId": video_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "videoType": kind,
                "totalDuration": plan.total,
                "imageCount": len(media),
                "hasAudio": bool(req.audio_url),
                "hasSubtitles": bool(req.subtitles_url),
                "hasMusic": req.use_custom_music,
                "selectedMusicTrack": req.selected_music_track.title if req.selected_music_track else "None",
                "customMusicFiles": len(req.custom_music_files or []),
                "dustOverlay": req.dust_overlay,
            }, settings.debug_dir, video_id)

        try:
            render_id = submit_render(payload, settings)
        except RenderError as e:
            return _error(e.status_code, e.message, e.details)

        metadata = None
        if plan.segmented:
            metadata = {
                "type": "segmented",
                "segment_timings": [t.model_dump(by_alias=True, exclude_none=True) for t in req.segment_timings],
                "total_duration": plan.total,
                "scenes_count": len(media),
            }
        now = time.time()
        save_record(VideoRecord(
            id=video_id,
            shotstack_id=render_id,
            image_urls=[m.url for m in media],
            audio_url=req.audio_url,
            subtitles_url=req.subtitles_url,
            thumbnail_url=req.thumbnail_url or media[0].url,
            metadata=metadata,
            created_at=now,
            updated_at=now,
        ))
    except Exception as e:
        logger.exception("Error in /create-video")
        return _error(500, "Failed to process video creation request", str(e) or "Unknown error")

    logger.info("%s video %s submitted as render %s", kind, video_id, render_id)
    return {
        "message": f"{kind} video creation job started successfully",
        "video_id": video_id,
        "shotstack_id": render_id,
    }


@app.post("/check-video-status")
def api_check_video_status(req: CheckStatusReq):
    rec = load_record(req.video_id)
    if not rec:
        raise HTTPException(404, "Video not found")
    if rec.status != "processing":
        return {"video": rec.model_dump(), "statusChanged": False, "shotstackStatus": None}

    try:
        state = fetch_render_status(rec.shotstack_id, get_settings())
    except RenderError as e:
        return _error(e.status_code, e.message, e.details)

    remote = state.get("status")
    changed = False
    if remote == "done":
        rec.status = "completed"
        rec.final_video_url = state.get("url")
        changed = True
    elif remote == "failed":
        rec.status = "failed"
        rec.error_message = state.get("error") or "Render failed"
        changed = True
    if changed:
        save_record(rec)
        logger.info("Video %s: processing -> %s", rec.id, rec.status)
    return {"video": rec.model_dump(), "statusChanged": changed, "shotstackStatus": remote}


@app.get("/videos")
def api_list_videos():
    return {"videos": [r.model_dump() for r in list_records()]}


@app.get("/videos/{vid}")
def api_get_video(vid: str):
    rec = load_record(vid)
    if not rec:
        raise HTTPException(404, "Video not found")
    return rec.model_dump()


@app.delete("/videos/{vid}")
def api_delete_video(vid: str):
    if not delete_record(vid):
        raise HTTPException(404, "Video not found")
    return {"success": True, "message": "Video deleted successfully", "videoId": vid}


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    uvicorn.run("timeline_backend.app:app", host="0.0.0.0", port=8000, reload=False)
