"""Trading-hours gate evaluated in a fixed UTC offset."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone


@dataclass(frozen=True, slots=True)
class MarketHours:
    """Open window expressed as minutes since local midnight.

    Defaults: 10:00 (inclusive) to 19:00 (exclusive) at UTC+5:30, i.e. the
    last open minute is 18:59 IST.
    """

    open_minute: int = 10 * 60
    close_minute: int = 19 * 60
    utc_offset_minutes: int = 330

    @property
    def tz(self) -> timezone:
        return timezone(timedelta(minutes=self.utc_offset_minutes))

    def local_time(self, now: datetime | None = None) -> datetime:
        """Convert `now` (naive values are taken as UTC) to the market's offset."""
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz)

    def is_open(self, now: datetime | None = None) -> bool:
        local = self.local_time(now)
        minutes = local.hour * 60 + local.minute
        return self.open_minute <= minutes < self.close_minute


DEFAULT_MARKET_HOURS = MarketHours()


def is_market_open(now: datetime | None = None, hours: MarketHours = DEFAULT_MARKET_HOURS) -> bool:
    """True when broadcasting is permitted at `now`."""
    return hours.is_open(now)
