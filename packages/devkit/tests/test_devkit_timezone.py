from datetime import datetime, timezone

from devkit.timezone import WIB_ZONE, epoch_millis, now_wib


def test_now_wib_is_jakarta_time() -> None:
    assert now_wib().tzinfo == WIB_ZONE
    assert now_wib().utcoffset().total_seconds() == 7 * 3600


def test_epoch_millis_of_known_moment() -> None:
    moment = datetime(2026, 1, 1, tzinfo=timezone.utc)
    assert epoch_millis(moment) == 1767225600000
