"""
orrery.resolver — Body Positions Relative to a Reference Body
==============================================================

``PositionResolver.position_of(target, reference, epoch)`` answers "where
is the target, seen from the reference body, at this epoch":

1. Look up the target's ephemeris path and the reference's natural frame.
2. Query the aberration-corrected state and swap the 2nd and 3rd axes into
   the display convention.
3. Scale km → display units.

The result is referred to the reference body's *equatorial* frame; apply
``Position.to_ecliptic`` (or ``orrery.frames``) for the ecliptic view.
Ephemeris failures propagate unchanged.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from .bodies import BodyId
from .epoch import Epoch
from .ephemeris import DEFAULT_CORRECTION, EphemerisSource
from .frames import ecliptic_to_equatorial, equatorial_to_ecliptic, to_display_axes
from .utils import SOLAR_SYSTEM_SCALE


class Plane(Enum):
    EQUATORIAL = "equatorial"
    ECLIPTIC = "ecliptic"


@dataclass(frozen=True, eq=False)
class Position:
    """Display-scaled position vector in a stated frame."""
    xyz: NDArray
    reference: BodyId
    plane: Plane = Plane.EQUATORIAL

    @property
    def magnitude(self) -> float:
        return float(np.linalg.norm(self.xyz))

    def to_ecliptic(self, body=None) -> "Position":
        """Rotate into the ecliptic frame (tilt of ``body``, default reference)."""
        if self.plane is Plane.ECLIPTIC:
            return self
        body = self.reference if body is None else body
        return Position(equatorial_to_ecliptic(self.xyz, body), self.reference,
                        Plane.ECLIPTIC)

    def to_equatorial(self, body=None) -> "Position":
        if self.plane is Plane.EQUATORIAL:
            return self
        body = self.reference if body is None else body
        return Position(ecliptic_to_equatorial(self.xyz, body), self.reference,
                        Plane.EQUATORIAL)

    def __sub__(self, other: "Position") -> "Position":
        if not isinstance(other, Position):
            return NotImplemented
        if other.reference is not self.reference:
            raise ValueError("Cannot subtract positions with different reference bodies")
        if other.plane is not self.plane:
            raise ValueError("Cannot subtract positions in different planes")
        return Position(self.xyz - other.xyz, self.reference, self.plane)

    def __repr__(self) -> str:
        x, y, z = self.xyz
        return (f"Position([{x:.6g}, {y:.6g}, {z:.6g}], "
                f"reference={self.reference.value}, plane={self.plane.value})")


class PositionResolver:
    """Combines an ephemeris source with the display conventions.

    Parameters
    ----------
    ephemeris : EphemerisSource — shared read-only ephemeris
    scale : float — display units per km
    """

    def __init__(self, ephemeris: EphemerisSource,
                 scale: float = SOLAR_SYSTEM_SCALE):
        if not scale > 0:
            raise ValueError(f"Display scale must be positive, got {scale}")
        self.ephemeris = ephemeris
        self.scale = scale

    def position_of(self, target: BodyId, reference: BodyId,
                    epoch: Epoch) -> Position:
        """Position of ``target`` relative to ``reference`` at ``epoch``.

        Returns
        -------
        Position — display-scaled, equatorial frame of ``reference``

        Raises
        ------
        UnknownBodyError, EphemerisCoverageError — from the ephemeris
        """
        key = self.ephemeris.ephemeris_path(target)
        frame = self.ephemeris.reference_frame(reference)
        state = self.ephemeris.state(key, epoch, frame, DEFAULT_CORRECTION)
        xyz = to_display_axes(state.position) * self.scale
        return Position(xyz, reference, Plane.EQUATORIAL)

    def positions_of(self, targets: Iterable[BodyId], reference: BodyId,
                     epoch: Epoch) -> list[tuple[BodyId, Position]]:
        """Batch ``position_of`` in input order."""
        return [(t, self.position_of(t, reference, epoch)) for t in targets]
