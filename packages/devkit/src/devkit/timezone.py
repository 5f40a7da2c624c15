from __future__ import annotations

from datetime import datetime
import os
import time
from zoneinfo import ZoneInfo

WIB_ZONE = ZoneInfo("Asia/Jakarta")

_configured = False


def configure_wib_timezone() -> None:
    global _configured
    if _configured:
        return
    os.environ["TZ"] = "Asia/Jakarta"
    if hasattr(time, "tzset"):
        time.tzset()
    _configured = True


def now_wib() -> datetime:
    return datetime.now(WIB_ZONE)


def epoch_millis(moment: datetime | None = None) -> int:
    """Milliseconds since the Unix epoch, the resolution site ids are minted at."""
    return int((moment or now_wib()).timestamp() * 1000)
