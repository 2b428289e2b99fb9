"""
orrery.scene — Display-Ready Positions and Orbit Paths
=======================================================

The renderer hands over a selected body and (optionally) an epoch and
gets back, for every body visible under that selection:

- ``visible_positions``    → [(BodyId, Position)]
- ``visible_trajectories`` → [(BodyId, Trajectory)]

Both are display-scaled and referred to the *ecliptic* of the selected
body.  The order is that of ``SolarSystem.get_visible_bodies``.

Tilt Source
-----------
By default the equatorial → ecliptic rotation uses the selected body's own
axial tilt.  ``DisplayConfig(tilt_source="earth")`` uses Earth's obliquity
for every selection instead, matching the orientation of the J2000
ephemeris frame.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .bodies import BodyId, SolarSystem
from .epoch import DEFAULT_EPOCH, Epoch
from .ephemeris import EphemerisSource
from .resolver import Position, PositionResolver
from .trajectory import Trajectory, TrajectorySampler
from .utils import SOLAR_SYSTEM_SCALE, TRAJ_POINTS, TRAJ_TOTAL_DAYS

TILT_SOURCES = ("reference", "earth")


@dataclass(frozen=True)
class DisplayConfig:
    """Display-side knobs.  ``trajectory_span=None`` means one orbital period."""
    scale: float = SOLAR_SYSTEM_SCALE
    trajectory_span: Optional[timedelta] = timedelta(days=TRAJ_TOTAL_DAYS)
    trajectory_points: int = TRAJ_POINTS
    tilt_source: str = "reference"
    max_workers: Optional[int] = None

    def __post_init__(self):
        if self.tilt_source not in TILT_SOURCES:
            raise ValueError(f"tilt_source must be one of {TILT_SOURCES}, "
                             f"got {self.tilt_source!r}")


class Scene:
    """Bundles registry, resolver and sampler behind the renderer-facing API.

    Parameters
    ----------
    registry : SolarSystem
    ephemeris : EphemerisSource — loaded once and shared
    config : DisplayConfig or None
    """

    def __init__(self, registry: SolarSystem, ephemeris: EphemerisSource,
                 config: Optional[DisplayConfig] = None):
        self.registry = registry
        self.config = config or DisplayConfig()
        self.resolver = PositionResolver(ephemeris, scale=self.config.scale)
        self.sampler = TrajectorySampler(self.resolver, registry)

    def tilt_body(self, selected: BodyId):
        if self.config.tilt_source == "earth":
            return self.registry.get(BodyId.EARTH)
        return self.registry.get(selected)

    def visible_positions(self, selected: BodyId,
                          epoch: Optional[Epoch] = None) -> list[tuple[BodyId, Position]]:
        """Ecliptic positions of the visible set relative to ``selected``."""
        if epoch is None:
            epoch = DEFAULT_EPOCH
        tilt_body = self.tilt_body(selected)
        return [
            (body.id, self.resolver.position_of(body.id, selected, epoch)
             .to_ecliptic(tilt_body))
            for body in self.registry.get_visible_bodies(selected)
        ]

    def visible_trajectories(self, selected: BodyId,
                             epoch: Optional[Epoch] = None) -> list[tuple[BodyId, Trajectory]]:
        """Ecliptic orbit paths of the visible set relative to ``selected``."""
        if epoch is None:
            epoch = DEFAULT_EPOCH
        span = self.config.trajectory_span
        end = epoch + span if span is not None else None
        tilt_body = self.tilt_body(selected)
        ids = [body.id for body in self.registry.get_visible_bodies(selected)]
        sampled = self.sampler.sample_many(
            ids, selected, epoch, end, self.config.trajectory_points,
            max_workers=self.config.max_workers)
        return [(body_id, traj.to_ecliptic(tilt_body)) for body_id, traj in sampled]
