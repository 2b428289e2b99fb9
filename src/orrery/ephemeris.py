"""
orrery.ephemeris — Ephemeris Source Interface
==============================================

An ephemeris source answers one question: the state of a target body
relative to the centre of a frame at an epoch.  Bodies are addressed by
NAIF-style *ephemeris paths*, the chain of ids from the root of the
ephemeris tree down to the body::

    Sun      (10,)          Mars      (4,)   ← barycentre
    Mercury  (1,)           Jupiter   (5,)   ← barycentre
    Venus    (2,)           Saturn    (6,)   ← barycentre
    Earth    (3, 399)       Uranus    (7,)   ← barycentre
    Moon     (3, 301)       Neptune   (8,)   ← barycentre

The natural frame of a body is centred on its path, oriented to the J2000
equator.

Corrections
-----------
``NONE``
    Geometric position at the epoch.
``LIGHT_TIME``
    Target evaluated at the retarded epoch t − τ, τ = |r|/c, found by
    fixed-point iteration.
``ABERRATION``
    Light time plus stellar aberration: the apparent direction is tilted by
    the observer's heliocentric velocity / c (first order, range kept).

Subclasses supply ``_position(naif_id, days)``, the position of a single
id in a common inertial J2000 equatorial frame (heliocentric or
barycentric).  Everything else lives here.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

import numpy as np
from numpy.typing import NDArray

from .bodies import BodyId
from .epoch import Epoch
from .errors import EphemerisCoverageError, UnknownBodyError
from .moon import moon_geocentric_equatorial
from .planets import ELEMENTS, heliocentric_equatorial
from .utils import C_KM_S, DAILY_SECONDS, EARTH_MOON_MASS_RATIO, normalize

logger = logging.getLogger(__name__)

EPHEMERIS_PATHS = {
    BodyId.SUN: (10,),
    BodyId.MERCURY: (1,),
    BodyId.VENUS: (2,),
    BodyId.EARTH: (3, 399),
    BodyId.MOON: (3, 301),
    BodyId.MARS: (4,),
    BodyId.JUPITER: (5,),
    BodyId.SATURN: (6,),
    BodyId.URANUS: (7,),
    BodyId.NEPTUNE: (8,),
}

LIGHT_TIME_ITERATIONS = 3
VELOCITY_STEP_S = 60.0


class Correction(Enum):
    NONE = "none"
    LIGHT_TIME = "lt"
    ABERRATION = "lt+s"


DEFAULT_CORRECTION = Correction.ABERRATION


@dataclass(frozen=True)
class Frame:
    """Inertial frame centred on an ephemeris path."""
    center: tuple
    orientation: str = "J2000"

    @property
    def name(self) -> str:
        return f"{self.orientation}@{'/'.join(str(i) for i in self.center)}"


@dataclass(frozen=True, eq=False)
class StateVector:
    """Target state relative to a frame centre."""
    position: NDArray       # [km]
    velocity: NDArray       # [km/s]
    epoch: Epoch
    frame: Frame


# ════════════════════════════════════════════════════════════════════════════
#  Abstract Source
# ════════════════════════════════════════════════════════════════════════════

class EphemerisSource(ABC):
    """Read-only ephemeris service shared by every query."""

    #: NAIF ids this source can place; subclasses override
    supported_ids: frozenset = frozenset()

    @property
    @abstractmethod
    def coverage(self) -> tuple:
        """(first, last) Epoch the source is valid for."""

    @abstractmethod
    def _position(self, naif_id: int, days: float) -> NDArray:
        """Position of one id in the source's inertial J2000 equatorial frame [km]."""

    # ── Lookup ──

    def ephemeris_path(self, body_id: BodyId) -> tuple:
        try:
            path = EPHEMERIS_PATHS[body_id]
        except KeyError:
            raise UnknownBodyError(body_id, "ephemeris") from None
        self._check_key(path)
        return path

    def reference_frame(self, body_id: BodyId) -> Frame:
        return Frame(center=self.ephemeris_path(body_id))

    def covers(self, epoch: Epoch) -> bool:
        start, end = self.coverage
        return start <= epoch <= end

    def _check_key(self, key) -> int:
        key = tuple(key)
        if not key or key[-1] not in self.supported_ids:
            raise UnknownBodyError(key, "ephemeris")
        return key[-1]

    # ── State ──

    def state(self, key, epoch: Epoch, frame: Frame,
              correction: Correction = DEFAULT_CORRECTION) -> StateVector:
        """State of ``key`` relative to ``frame.center`` at ``epoch``.

        Parameters
        ----------
        key : tuple[int, ...] — ephemeris path of the target
        epoch : Epoch — observation epoch
        frame : Frame — frame whose centre is the observer
        correction : Correction — light-time / aberration mode

        Returns
        -------
        StateVector — position [km] and geometric velocity [km/s]

        Raises
        ------
        UnknownBodyError — unrecognised target or frame centre
        EphemerisCoverageError — epoch outside ``coverage``
        """
        target = self._check_key(key)
        observer = self._check_key(frame.center)
        if not self.covers(epoch):
            raise EphemerisCoverageError(epoch, self.coverage)

        t = epoch.days
        r_obs = self._position(observer, t)
        r_rel = self._position(target, t) - r_obs

        if correction is not Correction.NONE and target != observer:
            for _ in range(LIGHT_TIME_ITERATIONS):
                tau = np.linalg.norm(r_rel) / C_KM_S
                r_rel = self._position(target, t - tau / DAILY_SECONDS) - r_obs

        if correction is Correction.ABERRATION:
            r_rel = _stellar_aberration(r_rel, self._velocity(observer, t))

        v_rel = self._velocity(target, t) - self._velocity(observer, t)
        return StateVector(position=r_rel, velocity=v_rel, epoch=epoch, frame=frame)

    def _velocity(self, naif_id: int, days: float) -> NDArray:
        """Central-difference velocity [km/s]."""
        h = VELOCITY_STEP_S / DAILY_SECONDS
        return (self._position(naif_id, days + h)
                - self._position(naif_id, days - h)) / (2.0 * VELOCITY_STEP_S)


def _stellar_aberration(r_rel: NDArray, v_obs: NDArray) -> NDArray:
    """Tilt the apparent direction by v_obs / c, keeping the range."""
    rng = np.linalg.norm(r_rel)
    if rng == 0.0:
        return r_rel
    u = normalize(r_rel)
    beta = v_obs / C_KM_S
    return rng * normalize(u + beta - np.dot(u, beta) * u)


# ════════════════════════════════════════════════════════════════════════════
#  Analytic Source
# ════════════════════════════════════════════════════════════════════════════

class AnalyticEphemeris(EphemerisSource):
    """Heliocentric analytic ephemeris: JPL approximate elements + Meeus Moon.

    The Sun sits at the origin.  Earth is recovered from the Earth–Moon
    barycentre (NAIF 3) and the geocentric Moon.
    """

    supported_ids = frozenset({10, 3, 399, 301} | set(ELEMENTS))

    _COVERAGE = (Epoch.from_gregorian_utc(1800, 1, 1),
                 Epoch.from_gregorian_utc(2050, 12, 31, 23, 59, 59))

    @property
    def coverage(self) -> tuple:
        return self._COVERAGE

    def _position(self, naif_id: int, days: float) -> NDArray:
        if naif_id == 10:
            return np.zeros(3)
        if naif_id in (399, 301):
            emb = heliocentric_equatorial(3, days)
            moon = moon_geocentric_equatorial(days)
            earth = emb - moon / (1.0 + EARTH_MOON_MASS_RATIO)
            return earth if naif_id == 399 else earth + moon
        return heliocentric_equatorial(naif_id, days)


@lru_cache(maxsize=None)
def default_ephemeris() -> AnalyticEphemeris:
    """Process-wide analytic ephemeris, created on first use."""
    source = AnalyticEphemeris()
    start, end = source.coverage
    logger.debug("Loaded analytic ephemeris covering %s – %s", start, end)
    return source
