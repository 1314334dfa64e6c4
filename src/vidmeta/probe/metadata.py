from __future__ import annotations

import logging
import os
from functools import cmp_to_key
from typing import Any

from vidmeta.probe.ffprobe import ffprobe
from vidmeta.probe.parsing import parse_frame_rate, string_to_number
from vidmeta.shared.models import DefaultVideoMetadata, StreamMetadata, VideoMetadata

logger = logging.getLogger("vidmeta.metadata")


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def normalize_stream(stream: dict[str, Any]) -> StreamMetadata:
    return StreamMetadata(
        width=stream.get("width"),
        height=stream.get("height"),
        bit_rate=string_to_number(stream.get("bit_rate")),
        profile=stream.get("profile"),
        bits_per_raw_sample=stream.get("bits_per_raw_sample"),
        bits_per_sample=stream.get("bits_per_sample"),
        r_frame_rate=stream.get("r_frame_rate"),
        avg_frame_rate=stream.get("avg_frame_rate"),
        numeric_avg_frame_rate=parse_frame_rate(_first_present(stream.get("avg_frame_rate"), "0/1")),
        codec=stream.get("codec_name"),
        codec_long_name=stream.get("codec_long_name"),
        codec_type=stream.get("codec_type"),
        time_base=stream.get("time_base"),
        codec_tag=stream.get("codec_tag"),
        codec_tag_string=stream.get("codec_tag_string"),
        duration=string_to_number(stream.get("duration")),
        start_time=string_to_number(stream.get("start_time")),
        number_of_frames=string_to_number(stream.get("nb_frames")),
    )


def normalize_probe_result(video_path: str | os.PathLike[str], raw: dict[str, Any]) -> VideoMetadata:
    """Reshape ffprobe's ``-show_format -show_streams`` JSON into ``VideoMetadata``."""
    streams = list(raw.get("streams") or [])
    fmt = raw.get("format") or {}
    tags = fmt.get("tags")
    tag_bag = tags if isinstance(tags, dict) else {}

    return VideoMetadata(
        file_path=os.fspath(video_path),
        streams=[normalize_stream(s) for s in streams],
        number_of_streams=len(streams),
        format_name=fmt.get("format_name"),
        format_long_name=fmt.get("format_long_name"),
        duration=string_to_number(fmt.get("duration")),
        size=string_to_number(fmt.get("size")),
        bit_rate=string_to_number(fmt.get("bit_rate")),
        start_time=string_to_number(fmt.get("start_time")),
        tags=tags if isinstance(tags, dict) else None,
        encoder=_first_present(fmt.get("encoder"), tag_bag.get("encoder")),
        creation_time=_first_present(fmt.get("creation_time"), tag_bag.get("creation_time")),
    )


async def read_video_metadata(
    video_path: str | os.PathLike[str], *, ffprobe_bin: str = "ffprobe", loglevel: str = "error"
) -> VideoMetadata:
    raw = await ffprobe(video_path, ffprobe_bin=ffprobe_bin, loglevel=loglevel)
    return normalize_probe_result(video_path, raw)


def _by_frame_rate_desc(a: StreamMetadata, b: StreamMetadata) -> float:
    # Zero or missing rate on either side compares equal; the stable sort
    # then keeps those streams in their original order.
    if a.numeric_avg_frame_rate and b.numeric_avg_frame_rate:
        return b.numeric_avg_frame_rate - a.numeric_avg_frame_rate
    return 0


def select_main_video_metadata(metadata: VideoMetadata) -> DefaultVideoMetadata | None:
    """Flatten ``metadata`` around its main video stream.

    Returns ``None`` when the file has no video stream at all.
    """
    video_streams = [s for s in metadata.streams if s.codec_type == "video"]
    if not video_streams:
        logger.debug("no_video_stream", extra={"path": metadata.file_path})
        return None

    main_stream = sorted(video_streams, key=cmp_to_key(_by_frame_rate_desc))[0]
    logger.debug(
        "main_stream_selected",
        extra={
            "path": metadata.file_path,
            "codec": main_stream.codec,
            "avg_frame_rate": main_stream.avg_frame_rate,
            "candidates": len(video_streams),
        },
    )

    merged = {
        **metadata.model_dump(exclude={"streams", "tags"}),
        **main_stream.model_dump(),
    }
    return DefaultVideoMetadata(**merged)


async def read_main_video_metadata(
    video_path: str | os.PathLike[str], *, ffprobe_bin: str = "ffprobe", loglevel: str = "error"
) -> DefaultVideoMetadata | None:
    metadata = await read_video_metadata(video_path, ffprobe_bin=ffprobe_bin, loglevel=loglevel)
    return select_main_video_metadata(metadata)
