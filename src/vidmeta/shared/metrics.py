from __future__ import annotations

from prometheus_client import Counter, Histogram

probe_total = Counter(
    "vidmeta_probe_total",
    "ffprobe invocations by outcome",
    labelnames=("outcome",),
)
probe_duration = Histogram(
    "vidmeta_probe_duration_seconds",
    "ffprobe invocation duration (seconds)",
    buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)
