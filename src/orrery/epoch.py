"""
orrery.epoch — Absolute Instants
=================================

An ``Epoch`` is a continuous instant stored as days elapsed since J2000.0
(2000-01-01T12:00:00).  The time scale is treated as TDB ≈ UTC, which is
well inside the accuracy of the bundled ephemeris.

Epochs add and subtract ``datetime.timedelta`` durations; the difference of
two epochs is a ``timedelta``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .utils import J2000_JD, DAILY_SECONDS, julian_date

_J2000_UTC = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@dataclass(frozen=True, order=True)
class Epoch:
    """Absolute instant with continuous resolution."""
    days: float     # days since J2000.0

    # ── Constructors ──

    @classmethod
    def from_jd(cls, jd: float) -> "Epoch":
        return cls(float(jd) - J2000_JD)

    @classmethod
    def from_gregorian_utc(cls, year: int, month: int, day: int,
                           hour: int = 0, minute: int = 0,
                           second: float = 0.0) -> "Epoch":
        """Build an epoch from a Gregorian UTC calendar date."""
        return cls.from_jd(julian_date(year, month, day, hour, minute, second))

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Epoch":
        """Build an epoch from a datetime.  Naive datetimes are taken as UTC."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls((dt - _J2000_UTC).total_seconds() / DAILY_SECONDS)

    @classmethod
    def from_iso(cls, text: str) -> "Epoch":
        """Parse an ISO-8601 timestamp, accepting a trailing ``Z``."""
        text = text.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return cls.from_datetime(datetime.fromisoformat(text))

    # ── Views ──

    @property
    def jd(self) -> float:
        """Julian Date."""
        return J2000_JD + self.days

    def to_datetime(self) -> datetime:
        """Timezone-aware UTC datetime (microsecond resolution)."""
        return _J2000_UTC + timedelta(days=self.days)

    def isoformat(self) -> str:
        return self.to_datetime().isoformat().replace("+00:00", "Z")

    def __str__(self) -> str:
        return self.isoformat()

    # ── Arithmetic ──

    def shifted(self, days: float) -> "Epoch":
        """Epoch offset by a (fractional) number of days."""
        return Epoch(self.days + days)

    def __add__(self, other):
        if isinstance(other, timedelta):
            return Epoch(self.days + other.total_seconds() / DAILY_SECONDS)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Epoch):
            return timedelta(days=self.days - other.days)
        if isinstance(other, timedelta):
            return Epoch(self.days - other.total_seconds() / DAILY_SECONDS)
        return NotImplemented


DEFAULT_EPOCH = Epoch.from_gregorian_utc(2024, 7, 4, 12, 0, 0)
