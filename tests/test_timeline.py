import pytest

from timeline_backend.durations import resolve_durations
from timeline_backend.models import CreateVideoReq
from timeline_backend.render import build_payload, payload_to_dict
from timeline_backend.timeline import build_media_track, build_timeline, build_voiceover_track

FOUR = [
    {"url": "i0", "type": "image"},
    {"url": "v1", "type": "video"},
    {"url": "a2", "type": "animation"},
    {"url": "i3", "type": "image"},
]


def _contiguous(clips):
    return all(a.start + a.length == b.start for a, b in zip(clips, clips[1:]))


def test_end_to_end_minimal(make_req):
    req = make_req()
    timeline = build_timeline(req, resolve_durations(req))
    assert len(timeline.tracks) == 2
    media, voice = timeline.tracks
    assert [(c.start, c.length) for c in media.clips] == [(0, 5), (5, 5)]
    assert len(voice.clips) == 1
    assert voice.clips[0].length == 10
    assert voice.clips[0].asset.volume == 0.8


def test_segmented_media_track(make_req):
    req = make_req(mediaItems=FOUR, segmentTimings=[{"duration": d} for d in (1.5, 2.25, 3, 0.75)])
    plan = resolve_durations(req)
    clips = build_media_track(req, plan).clips
    assert [c.start for c in clips] == [0, 1.5, 3.75, 6.75]
    assert sum(c.length for c in clips) == pytest.approx(plan.total)
    assert _contiguous(clips)


def test_uniform_media_track_covers_total(make_req):
    req = make_req(mediaItems=FOUR * 3, audioDuration=37.3)
    plan = resolve_durations(req)
    clips = build_media_track(req, plan).clips
    assert len(clips) == 12
    assert sum(c.length for c in clips) == pytest.approx(37.3)
    assert _contiguous(clips)


def test_animation_maps_to_image_and_fit_cover(make_req):
    req = make_req(mediaItems=FOUR, audioDuration=8)
    clips = build_media_track(req, resolve_durations(req)).clips
    assert [c.asset.type for c in clips] == ["image", "video", "image", "image"]
    assert all(c.fit == "cover" for c in clips)


def test_zoom_alternates_on_zoomable_items(make_req):
    req = make_req(mediaItems=FOUR, audioDuration=8, zoomEffect=True)
    clips = build_media_track(req, resolve_durations(req)).clips
    assert [c.effect for c in clips] == ["zoomIn", None, "zoomIn", "zoomOut"]


def test_zoom_by_index_for_images(make_req):
    items = [{"url": str(i), "type": "image"} for i in range(5)]
    req = make_req(mediaItems=items, zoomEffect=True)
    clips = build_media_track(req, resolve_durations(req)).clips
    assert [c.effect for c in clips] == ["zoomIn", "zoomOut", "zoomIn", "zoomOut", "zoomIn"]


def test_no_zoom_means_no_effect_key(make_req):
    req = make_req(mediaItems=FOUR)
    timeline = build_timeline(req, resolve_durations(req))
    wire = payload_to_dict(build_payload(timeline))
    assert all("effect" not in c for c in wire["timeline"]["tracks"][0]["clips"])


def test_legacy_ordered_content_fields():
    req = CreateVideoReq.model_validate({
        "imageUrls": ["x"],
        "orderedContentUrls": ["a", "b", "c"],
        "orderedContentTypes": ["image", "video"],
        "audioUrl": "voice.mp3",
        "audioDuration": 9,
    })
    clips = build_media_track(req, resolve_durations(req)).clips
    assert [(c.asset.src, c.asset.type) for c in clips] == [("a", "image"), ("b", "video"), ("c", "image")]


def test_voiceover_falls_back_to_compressed(make_req):
    req = make_req(audioUrl=None, compressedAudioUrl="small.mp3", voiceoverVolume=0.5)
    clip = build_voiceover_track(req, 10).clips[0]
    assert clip.asset.src == "small.mp3"
    assert clip.asset.volume == 0.5


def test_voiceover_volume_zero_is_kept(make_req):
    assert build_voiceover_track(make_req(voiceoverVolume=0), 10).clips[0].asset.volume == 0


def test_no_audio_no_voiceover_track(make_req):
    req = make_req(audioUrl=None)
    assert build_voiceover_track(req, 10) is None
    timeline = build_timeline(req, resolve_durations(req))
    assert len(timeline.tracks) == 1


def test_full_track_order(make_req):
    req = make_req(
        dustOverlay=True, fireOverlay=True, snowOverlay=True, screenDisplacementOverlay=True,
        subtitlesUrl="subs.srt",
        useCustomMusic=True,
        customMusicFiles=[{"url": "m.mp3", "name": "m", "duration": 4}],
    )
    tracks = build_timeline(req, resolve_durations(req)).tracks
    first_types = [t.clips[0].asset.type for t in tracks]
    assert first_types == ["video", "video", "video", "video", "caption", "image", "audio", "audio"]
    assert [t.clips[0].opacity for t in tracks[:4]] == [0.15, 0.2, 0.25, 0.3]
    assert tracks[6].clips[0].asset.src == "https://cdn.example/voice.mp3"
    assert tracks[7].clips[0].asset.src == "m.mp3"


def test_invalid_playlist_leaves_other_tracks_alone(make_req):
    base = build_timeline(make_req(), resolve_durations(make_req()))
    req = make_req(useCustomMusic=True, selectedMusicTracks=[{"title": "", "preview_url": ""}])
    timeline = build_timeline(req, resolve_durations(req))
    assert timeline == base
