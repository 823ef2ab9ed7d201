"""
Timeline backend: turns a video-creation request into a track/clip timeline
and hands it to an external rendering service.

  from timeline_backend.durations import resolve_durations
  from timeline_backend.timeline import build_timeline
  timeline = build_timeline(req, resolve_durations(req))
"""

__version__ = "0.1.0"
