from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from vidmeta.probe.ffprobe import MediaProbeError
from vidmeta.probe.metadata import read_main_video_metadata, read_video_metadata
from vidmeta.shared.config import Settings
from vidmeta.shared.logging import configure_logging
from vidmeta.shared.models import DefaultVideoMetadata, VideoMetadata

logger = logging.getLogger("vidmeta.cli")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vidmeta-probe", description="Print normalized ffprobe metadata as JSON.")
    parser.add_argument("path", help="media file to probe")
    parser.add_argument(
        "--main",
        action="store_true",
        help="flatten around the main video stream (prints null when there is none)",
    )
    return parser.parse_args(argv)


async def _probe(path: str, *, main_only: bool, settings: Settings) -> VideoMetadata | DefaultVideoMetadata | None:
    if main_only:
        return await read_main_video_metadata(
            path, ffprobe_bin=settings.ffprobe_bin, loglevel=settings.ffprobe_loglevel
        )
    return await read_video_metadata(path, ffprobe_bin=settings.ffprobe_bin, loglevel=settings.ffprobe_loglevel)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = Settings()
    configure_logging(settings.log_level)

    try:
        result = asyncio.run(_probe(args.path, main_only=args.main, settings=settings))
    except MediaProbeError as e:
        logger.error("probe_cli_failed", extra={"path": args.path, "error": str(e)})
        return 1

    payload = None if result is None else result.model_dump(mode="json")
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
