from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StreamMetadata(BaseModel):
    """One elementary stream (video, audio, subtitle, data, ...)."""

    model_config = ConfigDict(frozen=True)

    width: int | None = None
    height: int | None = None
    bit_rate: float | None = None
    profile: str | int | None = None
    bits_per_raw_sample: int | str | None = None
    bits_per_sample: int | str | None = None
    r_frame_rate: str | None = None
    avg_frame_rate: str | None = None
    numeric_avg_frame_rate: float = 0.0
    codec: str | None = None
    codec_long_name: str | None = None
    codec_type: str | None = None
    time_base: str | None = None
    codec_tag: str | None = None
    codec_tag_string: str | None = None
    duration: float | None = None
    start_time: float | None = None
    number_of_frames: float | None = None


class VideoMetadata(BaseModel):
    """Container-level metadata plus every stream, in ffprobe order."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    streams: list[StreamMetadata] = Field(default_factory=list)
    number_of_streams: int = 0
    format_name: str | None = None
    format_long_name: str | None = None
    duration: float | None = None
    size: float | None = None
    bit_rate: float | None = None
    start_time: float | None = None
    tags: dict[str, str] | None = None
    encoder: str | None = None
    creation_time: str | None = None


class DefaultVideoMetadata(BaseModel):
    """Flat record: file-level fields overlaid with the main video stream's fields.

    Where a name exists on both sides (``duration``, ``bit_rate``,
    ``start_time``) the stream's value is kept.
    """

    model_config = ConfigDict(frozen=True)

    # file level
    file_path: str
    number_of_streams: int
    format_name: str | None = None
    format_long_name: str | None = None
    encoder: str | None = None
    creation_time: str | None = None
    size: float | None = None

    # stream level
    width: int | None = None
    height: int | None = None
    bit_rate: float | None = None
    profile: str | int | None = None
    bits_per_raw_sample: int | str | None = None
    bits_per_sample: int | str | None = None
    r_frame_rate: str | None = None
    avg_frame_rate: str | None = None
    numeric_avg_frame_rate: float = 0.0
    codec: str | None = None
    codec_long_name: str | None = None
    codec_type: str | None = None
    time_base: str | None = None
    codec_tag: str | None = None
    codec_tag_string: str | None = None
    duration: float | None = None
    start_time: float | None = None
    number_of_frames: float | None = None
