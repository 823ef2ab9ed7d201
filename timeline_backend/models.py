from __future__ import annotations
from typing import Annotated, List, Optional, Literal, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


MediaType = Literal["image", "video", "animation"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- request side -------------------------------------------------------


class MediaItem(BaseModel):
    url: str
    type: MediaType = "image"


class SegmentTiming(CamelModel):
    duration: float
    start_time: Optional[float] = None


class MusicTrack(BaseModel):
    # music search results arrive with snake_case keys
    id: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    duration: Optional[float] = None
    preview_url: Optional[str] = None
    download_url: Optional[str] = None
    license_type: Optional[str] = None
    order: Optional[int] = None


class CustomMusicFile(BaseModel):
    id: Optional[str] = None
    name: str = ""
    url: str
    duration: Optional[float] = None


class CreateVideoReq(CamelModel):
    # Visual content
    media_items: List[MediaItem] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)
    ordered_content_urls: Optional[List[str]] = None
    ordered_content_types: Optional[List[Optional[MediaType]]] = None
    thumbnail_url: Optional[str] = None
    # Voiceover
    audio_url: Optional[str] = None
    compressed_audio_url: Optional[str] = None
    audio_duration: Optional[float] = None
    segment_timings: Optional[List[SegmentTiming]] = None
    # Subtitle styling
    subtitles_url: Optional[str] = None
    font_family: Optional[str] = None
    font_size: Optional[int] = None
    font_color: Optional[str] = None
    font_weight: Optional[str] = None
    stroke_width: Optional[float] = None
    text_transform: Optional[str] = None
    # Overlays
    dust_overlay: bool = False
    snow_overlay: bool = False
    screen_displacement_overlay: bool = False
    fire_overlay: bool = False
    # Background music
    use_custom_music: bool = False
    selected_music_tracks: Optional[List[MusicTrack]] = None
    selected_music_track: Optional[MusicTrack] = None
    custom_music_files: Optional[List[CustomMusicFile]] = None
    # Volumes (0..1)
    voiceover_volume: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    music_volume: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    zoom_effect: bool = False

    def media(self) -> List[MediaItem]:
        """Ordered visual content, whichever request shape supplied it."""
        if self.media_items:
            return list(self.media_items)
        urls = self.ordered_content_urls or self.image_urls
        types = self.ordered_content_types or []
        out = []
        for i, url in enumerate(urls):
            kind = types[i] if i < len(types) else None
            out.append(MediaItem(url=url, type=kind or "image"))
        return out

    def voiceover_url(self) -> Optional[str]:
        return self.audio_url or self.compressed_audio_url


# ---- timeline side ------------------------------------------------------


class ImageAsset(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["image"] = "image"
    src: str


class VideoAsset(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["video"] = "video"
    src: str
    volume: Optional[float] = None


class AudioAsset(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["audio"] = "audio"
    src: str
    volume: float


class CaptionFont(CamelModel):
    model_config = ConfigDict(frozen=True)
    family: str
    size: int
    color: str
    weight: str
    stroke: str = "#000000"
    stroke_width: float = 2


class CaptionBackground(BaseModel):
    model_config = ConfigDict(frozen=True)
    color: str = "#ffffff"
    opacity: float = 0
    padding: int = 12


class CaptionMargin(BaseModel):
    model_config = ConfigDict(frozen=True)
    top: float = 0.75
    left: float = 0
    right: float = 0


class CaptionAsset(BaseModel):
    model_config = ConfigDict(frozen=True)
    type: Literal["caption"] = "caption"
    src: str
    font: CaptionFont
    background: CaptionBackground = Field(default_factory=CaptionBackground)
    margin: CaptionMargin = Field(default_factory=CaptionMargin)


Asset = Annotated[
    Union[ImageAsset, VideoAsset, AudioAsset, CaptionAsset],
    Field(discriminator="type"),
]

ClipEffect = Literal["zoomIn", "zoomOut"]


class Clip(BaseModel):
    model_config = ConfigDict(frozen=True)
    asset: Asset
    start: float
    length: float
    fit: Optional[str] = None
    opacity: Optional[float] = None
    effect: Optional[ClipEffect] = None


class Track(BaseModel):
    model_config = ConfigDict(frozen=True)
    clips: List[Clip] = Field(default_factory=list)


class Timeline(BaseModel):
    model_config = ConfigDict(frozen=True)
    tracks: List[Track] = Field(default_factory=list)


class OutputSize(BaseModel):
    width: int = 1280
    height: int = 720


class RenderOutput(BaseModel):
    format: str = "mp4"
    size: OutputSize = Field(default_factory=OutputSize)


class RenderPayload(BaseModel):
    timeline: Timeline
    output: RenderOutput = Field(default_factory=RenderOutput)
    callback: Optional[str] = None


# ---- persistence / API --------------------------------------------------


VideoStatus = Literal["processing", "completed", "failed"]


class VideoRecord(BaseModel):
    id: str
    status: VideoStatus = "processing"
    shotstack_id: str
    image_urls: List[str] = Field(default_factory=list)
    audio_url: Optional[str] = None
    subtitles_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    final_video_url: Optional[str] = None
    error_message: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: float
    updated_at: float


class CheckStatusReq(CamelModel):
    video_id: str
