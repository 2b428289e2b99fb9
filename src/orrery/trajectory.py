"""
orrery.trajectory — Time-Sampled Orbit Paths
=============================================

``TrajectorySampler.sample`` discretises a body's path over ``[start, end)``
into exactly ``steps`` chronological points::

    step = (end − start) / steps
    t_i  = start + i·step,   i = 0 … steps−1

Sampling Strategy
-----------------
**Sun** — the universal origin; its trajectory is empty.

**Planet** — sampled heliocentrically, then re-based on the reference body
held fixed at ``start``::

    p_i = r(target ← Sun, t_i) − r(reference ← Sun, start)

**Moon / Asteroid** — sampled directly in the reference frame::

    p_i = r(target ← reference, t_i)

When ``end`` is omitted it defaults to one orbital period of the target.
Any ephemeris failure aborts the whole trajectory; a partial polyline is
never returned.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from .bodies import BodyId, BodyType, SolarSystem, orbital_period
from .epoch import Epoch
from .errors import InvalidSampleCountError
from .frames import ecliptic_to_equatorial, equatorial_to_ecliptic
from .resolver import Plane, PositionResolver
from .utils import TRAJ_POINTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Trajectory:
    """Chronological display-scaled points for one body."""
    target: BodyId
    reference: BodyId
    epochs: tuple           # tuple[Epoch, ...]
    points: NDArray         # (N,3)
    plane: Plane = Plane.EQUATORIAL

    @classmethod
    def empty(cls, target: BodyId, reference: BodyId,
              plane: Plane = Plane.EQUATORIAL) -> "Trajectory":
        return cls(target, reference, (), np.zeros((0, 3)), plane)

    def __len__(self) -> int:
        return len(self.epochs)

    def __iter__(self) -> Iterator[tuple[Epoch, NDArray]]:
        return iter(zip(self.epochs, self.points))

    def to_ecliptic(self, body=None) -> "Trajectory":
        """Rotate every point into the ecliptic frame (default: reference tilt)."""
        if self.plane is Plane.ECLIPTIC or not len(self):
            return Trajectory(self.target, self.reference, self.epochs,
                              self.points, Plane.ECLIPTIC)
        body = self.reference if body is None else body
        return Trajectory(self.target, self.reference, self.epochs,
                          equatorial_to_ecliptic(self.points, body), Plane.ECLIPTIC)

    def to_equatorial(self, body=None) -> "Trajectory":
        if self.plane is Plane.EQUATORIAL or not len(self):
            return Trajectory(self.target, self.reference, self.epochs,
                              self.points, Plane.EQUATORIAL)
        body = self.reference if body is None else body
        return Trajectory(self.target, self.reference, self.epochs,
                          ecliptic_to_equatorial(self.points, body), Plane.EQUATORIAL)


def sample_epochs(start: Epoch, end: Epoch, steps: int) -> tuple:
    """``steps`` equally spaced epochs on ``[start, end)``.

    Raises
    ------
    InvalidSampleCountError — ``steps <= 0`` or ``end < start``
    """
    if steps <= 0:
        raise InvalidSampleCountError(f"steps must be positive, got {steps}")
    if end < start:
        raise InvalidSampleCountError(
            f"Negative time range: end {end} precedes start {start}")
    step_days = (end.days - start.days) / steps
    return tuple(start.shifted(i * step_days) for i in range(steps))


class TrajectorySampler:
    """Drives a ``PositionResolver`` across a time range.

    Parameters
    ----------
    resolver : PositionResolver
    registry : SolarSystem — supplies body types
    """

    def __init__(self, resolver: PositionResolver, registry: SolarSystem):
        self.resolver = resolver
        self.registry = registry

    def sample(self, target: BodyId, reference: BodyId, start: Epoch,
               end: Optional[Epoch] = None, steps: int = TRAJ_POINTS,
               registry: Optional[SolarSystem] = None) -> Trajectory:
        """Sample the path of ``target`` relative to ``reference``.

        Parameters
        ----------
        target, reference : BodyId
        start : Epoch — first sample
        end : Epoch or None — exclusive end (default: start + orbital period)
        steps : int — number of samples (> 0)
        registry : SolarSystem or None — overrides the sampler's registry

        Returns
        -------
        Trajectory — ``steps`` points in the equatorial frame of ``reference``
            (empty for the Sun)
        """
        if registry is None:
            registry = self.registry
        if steps <= 0:
            raise InvalidSampleCountError(f"steps must be positive, got {steps}")
        if end is not None and end < start:
            raise InvalidSampleCountError(
                f"Negative time range: end {end} precedes start {start}")
        if target is BodyId.SUN:
            return Trajectory.empty(target, reference)

        body = registry.get(target)
        if end is None:
            end = start + (body.orbital_period or orbital_period(target))
        epochs = sample_epochs(start, end, steps)
        position_of = self.resolver.position_of

        if body.type is BodyType.PLANET:
            origin = position_of(reference, BodyId.SUN, start).xyz
            points = [position_of(target, BodyId.SUN, t).xyz - origin
                      for t in epochs]
        else:
            points = [position_of(target, reference, t).xyz for t in epochs]

        logger.debug("Sampled %d points for %s relative to %s",
                     steps, target.value, reference.value)
        return Trajectory(target, reference, epochs, np.array(points))

    def sample_many(self, targets: Iterable[BodyId], reference: BodyId,
                    start: Epoch, end: Optional[Epoch] = None,
                    steps: int = TRAJ_POINTS,
                    max_workers: Optional[int] = None) -> list[tuple[BodyId, Trajectory]]:
        """Sample several bodies in parallel threads; output follows input order."""
        targets = list(targets)
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [pool.submit(self.sample, t, reference, start, end, steps)
                       for t in targets]
            return [(t, f.result()) for t, f in zip(targets, futures)]
