"""
orrery.astropy_ephemeris — Astropy-backed Ephemeris Source
===========================================================

Same interface as ``AnalyticEphemeris`` but positions come from
``astropy.coordinates.get_body_barycentric``, either the ERFA built-in
theory (``"builtin"``, no download) or a JPL DE kernel (``"de432s"``,
``"de440"``, ... fetched and cached by astropy on first use).

The ephemeris is chosen once at construction and never switched per query.
Positions are barycentric ICRS, which agrees with J2000 equatorial to well
below the display resolution.

Requires the ``astropy`` extra (``pip install orrery[astropy]``).
"""

import logging

import numpy as np
from numpy.typing import NDArray
from astropy import units as u
from astropy.coordinates import get_body_barycentric
from astropy.time import Time

from .epoch import Epoch
from .ephemeris import EphemerisSource
from .utils import J2000_JD

logger = logging.getLogger(__name__)

# NAIF id → astropy body name
ASTROPY_BODY_NAMES = {
    10: "sun",
    1: "mercury",
    2: "venus",
    3: "earth-moon-barycenter",
    399: "earth",
    301: "moon",
    4: "mars",
    5: "jupiter",
    6: "saturn",
    7: "uranus",
    8: "neptune",
}

# Validity span per ephemeris name [Gregorian years]
EPHEMERIS_SPANS = {
    "builtin": (1000, 3000),
    "de432s": (1950, 2050),
    "de430": (1550, 2650),
    "de440s": (1849, 2150),
    "de440": (1550, 2650),
}


class AstropyEphemeris(EphemerisSource):
    """Ephemeris source delegating to astropy.

    Parameters
    ----------
    ephemeris : str — astropy ephemeris name or path/URL of a JPL kernel
    coverage : (Epoch, Epoch) or None — validity span; required for
        ephemerides not listed in ``EPHEMERIS_SPANS``
    """

    supported_ids = frozenset(ASTROPY_BODY_NAMES)

    def __init__(self, ephemeris: str = "builtin", coverage: tuple | None = None):
        if coverage is None:
            if ephemeris not in EPHEMERIS_SPANS:
                raise ValueError(f"No known coverage for ephemeris {ephemeris!r}; "
                                 f"pass coverage=(start, end)")
            first, last = EPHEMERIS_SPANS[ephemeris]
            coverage = (Epoch.from_gregorian_utc(first, 1, 1),
                        Epoch.from_gregorian_utc(last, 1, 1))
        self.ephemeris = ephemeris
        self._coverage = tuple(coverage)
        logger.debug("Using astropy ephemeris %r covering %s – %s",
                     ephemeris, *self._coverage)

    @property
    def coverage(self) -> tuple:
        return self._coverage

    def _position(self, naif_id: int, days: float) -> NDArray:
        time = Time(J2000_JD, days, format="jd", scale="tdb")
        rep = get_body_barycentric(ASTROPY_BODY_NAMES[naif_id], time,
                                   ephemeris=self.ephemeris)
        return np.asarray(rep.xyz.to_value(u.km), dtype=np.float64)
