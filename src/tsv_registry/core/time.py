import time
from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


@dataclass(slots=True)
class Stopwatch:
    """
    UTC start stamp for reports plus a monotonic timer for durations.
    """

    started_at_utc: str = field(default_factory=utc_now_iso)
    t0_ms: int = field(default_factory=monotonic_ms)

    def elapsed_ms(self) -> int:
        return monotonic_ms() - self.t0_ms
