from __future__ import annotations

import asyncio
import json
from typing import Any

import pytest


class FakeProcess:
    def __init__(self, stdout: bytes, stderr: bytes, returncode: int, hang: bool = False):
        self._stdout = stdout
        self._stderr = stderr
        self._exit_code = returncode
        self.hang = hang
        self.returncode: int | None = None
        self.killed = False

    async def communicate(self) -> tuple[bytes, bytes]:
        if self.hang:
            await asyncio.Event().wait()
        self.returncode = self._exit_code
        return self._stdout, self._stderr

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> int:
        assert self.returncode is not None
        return self.returncode


class FakeExec:
    """Stands in for ``asyncio.create_subprocess_exec`` and records each call."""

    def __init__(
        self,
        *,
        stdout: bytes = b"",
        stderr: bytes = b"",
        returncode: int = 0,
        hang: bool = False,
        exc: Exception | None = None,
    ):
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode
        self.hang = hang
        self.exc = exc
        self.calls: list[tuple[str, ...]] = []
        self.processes: list[FakeProcess] = []

    async def __call__(self, *cmd: str, **_: Any) -> FakeProcess:
        self.calls.append(cmd)
        if self.exc is not None:
            raise self.exc
        proc = FakeProcess(self.stdout, self.stderr, self.returncode, hang=self.hang)
        self.processes.append(proc)
        return proc


@pytest.fixture
def fake_exec(monkeypatch: pytest.MonkeyPatch):
    def install(**kwargs: Any) -> FakeExec:
        fake = FakeExec(**kwargs)
        monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
        return fake

    return install


@pytest.fixture
def ffprobe_output() -> dict[str, Any]:
    """Trimmed ``ffprobe -print_format json -show_format -show_streams`` output of a phone clip."""
    return {
        "streams": [
            {
                "index": 0,
                "codec_name": "h264",
                "codec_long_name": "H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10",
                "profile": "High",
                "codec_type": "video",
                "codec_tag_string": "avc1",
                "codec_tag": "0x31637661",
                "width": 1920,
                "height": 1080,
                "r_frame_rate": "30000/1001",
                "avg_frame_rate": "30000/1001",
                "time_base": "1/30000",
                "start_time": "0.000000",
                "duration": "10.010000",
                "bit_rate": "8000000",
                "bits_per_raw_sample": "8",
                "nb_frames": "300",
            },
            {
                "index": 1,
                "codec_name": "aac",
                "codec_long_name": "AAC (Advanced Audio Coding)",
                "profile": "LC",
                "codec_type": "audio",
                "codec_tag_string": "mp4a",
                "codec_tag": "0x6134706d",
                "bits_per_sample": 0,
                "r_frame_rate": "0/0",
                "avg_frame_rate": "0/0",
                "time_base": "1/48000",
                "start_time": "0.000000",
                "duration": "10.005333",
                "bit_rate": "128000",
                "nb_frames": "470",
            },
        ],
        "format": {
            "filename": "/videos/clip.mp4",
            "nb_streams": 2,
            "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
            "format_long_name": "QuickTime / MOV",
            "start_time": "0.000000",
            "duration": "10.010000",
            "size": "10180000",
            "bit_rate": "8136000",
            "tags": {
                "major_brand": "isom",
                "encoder": "Lavf58.29.100",
                "creation_time": "2024-10-04T16:24:11.000000Z",
            },
        },
    }


@pytest.fixture
def ffprobe_stdout(ffprobe_output: dict[str, Any]) -> bytes:
    return json.dumps(ffprobe_output).encode("utf-8")
