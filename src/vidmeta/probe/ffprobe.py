from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from typing import Any, cast

from vidmeta.shared.metrics import probe_duration, probe_total

logger = logging.getLogger("vidmeta.probe")


class MediaProbeError(RuntimeError):
    def __init__(self, message: str, *, returncode: int | None = None, stderr: str | None = None):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def build_ffprobe_cmd(
    video_path: str | os.PathLike[str], *, ffprobe_bin: str = "ffprobe", loglevel: str = "error"
) -> list[str]:
    return [
        ffprobe_bin,
        "-v",
        loglevel,
        "-print_format",
        "json",
        "-show_format",
        "-show_streams",
        os.fspath(video_path),
    ]


async def ffprobe(
    video_path: str | os.PathLike[str], *, ffprobe_bin: str = "ffprobe", loglevel: str = "error"
) -> dict[str, Any]:
    """Run ffprobe once on ``video_path`` and return its decoded JSON output.

    Every failure (binary missing, non-zero exit, unparseable output) surfaces
    as ``MediaProbeError`` with the original exception chained.
    """
    cmd = build_ffprobe_cmd(video_path, ffprobe_bin=ffprobe_bin, loglevel=loglevel)
    logger.debug("probe_started", extra={"path": os.fspath(video_path), "cmd": cmd})

    start = time.monotonic()
    try:
        data = await _run(cmd)
    except MediaProbeError as e:
        probe_total.labels(outcome="failed").inc()
        logger.warning(
            "probe_failed",
            extra={"path": os.fspath(video_path), "error": str(e), "returncode": e.returncode},
        )
        raise
    finally:
        probe_duration.observe(time.monotonic() - start)

    probe_total.labels(outcome="succeeded").inc()
    return data


async def _run(cmd: list[str]) -> dict[str, Any]:
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise MediaProbeError(f"ffprobe_not_executable: {cmd[0]}") from e

    try:
        stdout, stderr = await proc.communicate()
    except BaseException:
        # cancelled or timed out by the caller; do not leave ffprobe running
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise

    err_text = stderr.decode("utf-8", errors="replace").strip()
    if proc.returncode != 0:
        raise MediaProbeError(err_text or "ffprobe_failed", returncode=proc.returncode, stderr=err_text)
    try:
        data = json.loads(stdout)
    except ValueError as e:
        raise MediaProbeError("ffprobe_invalid_json", returncode=proc.returncode, stderr=err_text) from e
    if not isinstance(data, dict):
        raise MediaProbeError("ffprobe_unexpected_json", returncode=proc.returncode, stderr=err_text)
    return cast(dict[str, Any], data)
