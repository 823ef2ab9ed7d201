import pytest

from timeline_backend.models import CreateVideoReq


@pytest.fixture
def make_req():
    def _make(**kw):
        data = {
            "mediaItems": [{"url": "a", "type": "image"}, {"url": "b", "type": "image"}],
            "audioUrl": "https://cdn.example/voice.mp3",
            "audioDuration": 10,
        }
        data.update(kw)
        return CreateVideoReq.model_validate(data)
    return _make


@pytest.fixture
def data_env(tmp_path, monkeypatch):
    monkeypatch.setenv("VIDEO_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("VIDEO_DEBUG_DIR", str(tmp_path / "debug"))
    monkeypatch.setenv("SHOTSTACK_ENDPOINT", "https://render.example/v1")
    monkeypatch.setenv("SHOTSTACK_API_KEY", "test-key")
    monkeypatch.delenv("SHOTSTACK_CALLBACK_URL", raising=False)
    monkeypatch.delenv("VIDEO_DEBUG_PAYLOADS", raising=False)
    return tmp_path
