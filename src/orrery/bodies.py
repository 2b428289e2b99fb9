"""
orrery.bodies — Body Catalog & Hierarchy Registry
==================================================

The solar system is a closed set of ten bodies keyed by ``BodyId``.  Each
``CelestialBody`` record stores its own id and the id of its parent; the
hierarchy is an id-keyed mapping, never a web of object references.

Hierarchy Rules
---------------
::

    Star      — no parent
    Planet    — parent is a Star
    Asteroid  — parent (if any) is a Star
    Moon      — parent is a Planet or Asteroid, at most 2 hops from its Star

The rules and the absence of cycles are checked once, when the registry is
built.  A registry is read-only afterwards; a new catalog means a new
registry.

Visibility Rule
---------------
``get_visible_bodies`` answers "which bodies are drawn when this one is
selected"::

    Star      →  [self]
    Planet    →  [self, parent star, every child in registry order]
    Moon      →  [self, parent planet, grandparent star]
    Asteroid  →  [self]
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from .errors import InvalidHierarchyError, UnknownBodyError


# ════════════════════════════════════════════════════════════════════════════
#  Identity & Types
# ════════════════════════════════════════════════════════════════════════════

class BodyId(Enum):
    SUN = "sun"
    MERCURY = "mercury"
    VENUS = "venus"
    EARTH = "earth"
    MOON = "moon"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"

    @property
    def label(self) -> str:
        """Human-readable name.  Display only; never parsed back to an id."""
        return self.value.capitalize()

    @classmethod
    def parse(cls, token: str) -> "BodyId":
        """Resolve a lower-case id token (as used on the command line)."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise UnknownBodyError(token, "body ids") from None


class BodyType(Enum):
    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    ASTEROID = "asteroid"


# Parent types allowed for each body type (None = must be parentless)
_ALLOWED_PARENTS = {
    BodyType.STAR: None,
    BodyType.PLANET: {BodyType.STAR},
    BodyType.ASTEROID: {BodyType.STAR},
    BodyType.MOON: {BodyType.PLANET, BodyType.ASTEROID},
}

_MAX_MOON_DEPTH = 2


@dataclass(frozen=True)
class CelestialBody:
    """Immutable catalog record for one body."""
    id: BodyId
    type: BodyType
    radius_km: float
    parent: Optional[BodyId] = None
    axial_tilt_deg: float = 0.0
    orbital_period_days: Optional[float] = None

    def __post_init__(self):
        if not self.radius_km > 0:
            raise ValueError(f"{self.id.label}: radius must be positive, "
                             f"got {self.radius_km}")
        if not 0.0 <= self.axial_tilt_deg < 180.0:
            raise ValueError(f"{self.id.label}: axial tilt must lie in "
                             f"[0, 180) deg, got {self.axial_tilt_deg}")
        if self.orbital_period_days is not None and not self.orbital_period_days > 0:
            raise ValueError(f"{self.id.label}: orbital period must be "
                             f"positive, got {self.orbital_period_days}")

    @property
    def name(self) -> str:
        return self.id.label

    @property
    def orbital_period(self) -> Optional[timedelta]:
        if self.orbital_period_days is None:
            return None
        return timedelta(days=self.orbital_period_days)

    def display_radius(self, scale: float) -> float:
        """Radius in display units."""
        return self.radius_km * scale


# ════════════════════════════════════════════════════════════════════════════
#  Static Catalog
# ════════════════════════════════════════════════════════════════════════════
#
#  Radii: mean radius [km].  Tilt: obliquity to orbit [deg].
#  Period: sidereal orbital period [days].

CATALOG = (
    CelestialBody(BodyId.SUN, BodyType.STAR, 696_340.0,
                  axial_tilt_deg=7.25),
    CelestialBody(BodyId.MERCURY, BodyType.PLANET, 2_439.7, BodyId.SUN,
                  axial_tilt_deg=0.034, orbital_period_days=87.969),
    CelestialBody(BodyId.VENUS, BodyType.PLANET, 6_051.8, BodyId.SUN,
                  axial_tilt_deg=177.36, orbital_period_days=224.701),
    CelestialBody(BodyId.EARTH, BodyType.PLANET, 6_371.0, BodyId.SUN,
                  axial_tilt_deg=23.439281, orbital_period_days=365.256),
    CelestialBody(BodyId.MOON, BodyType.MOON, 1_737.1, BodyId.EARTH,
                  axial_tilt_deg=6.687, orbital_period_days=27.321661),
    CelestialBody(BodyId.MARS, BodyType.PLANET, 3_389.5, BodyId.SUN,
                  axial_tilt_deg=25.19, orbital_period_days=686.980),
    CelestialBody(BodyId.JUPITER, BodyType.PLANET, 69_911.0, BodyId.SUN,
                  axial_tilt_deg=3.13, orbital_period_days=4_332.589),
    CelestialBody(BodyId.SATURN, BodyType.PLANET, 58_232.0, BodyId.SUN,
                  axial_tilt_deg=26.73, orbital_period_days=10_759.22),
    CelestialBody(BodyId.URANUS, BodyType.PLANET, 25_362.0, BodyId.SUN,
                  axial_tilt_deg=97.77, orbital_period_days=30_685.4),
    CelestialBody(BodyId.NEPTUNE, BodyType.PLANET, 24_622.0, BodyId.SUN,
                  axial_tilt_deg=28.32, orbital_period_days=60_189.0),
)

_CATALOG_BY_ID = MappingProxyType({body.id: body for body in CATALOG})


def catalog_body(body_id: BodyId) -> CelestialBody:
    """Look up a body in the static catalog."""
    try:
        return _CATALOG_BY_ID[body_id]
    except KeyError:
        raise UnknownBodyError(body_id, "catalog") from None


def orbital_period(body_id: BodyId) -> timedelta:
    """Static sidereal orbital period of a catalog body."""
    period = catalog_body(body_id).orbital_period
    if period is None:
        raise ValueError(f"{body_id.label} has no orbital period")
    return period


# ════════════════════════════════════════════════════════════════════════════
#  Registry
# ════════════════════════════════════════════════════════════════════════════

class SolarSystem:
    """Read-only registry of bodies keyed by ``BodyId``.

    Parameters
    ----------
    bodies : iterable of CelestialBody — iteration order becomes registry order

    Raises
    ------
    InvalidHierarchyError — duplicate ids, dangling parents, cycles, or
        parent types that break the hierarchy rules
    """

    def __init__(self, bodies: Iterable[CelestialBody]):
        index = {}
        for body in bodies:
            if body.id in index:
                raise InvalidHierarchyError(f"Duplicate body id {body.id.value!r}")
            index[body.id] = body
        _validate_hierarchy(index)
        self._bodies = MappingProxyType(index)

    @classmethod
    def default(cls) -> "SolarSystem":
        """Registry built from the fixed ten-body catalog."""
        return cls(CATALOG)

    # ── Mapping-style access ──

    def get(self, body_id: BodyId) -> CelestialBody:
        try:
            return self._bodies[body_id]
        except KeyError:
            raise UnknownBodyError(body_id) from None

    __getitem__ = get

    def __contains__(self, body_id) -> bool:
        return body_id in self._bodies

    def __iter__(self) -> Iterator[CelestialBody]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)

    def ids(self) -> list[BodyId]:
        return list(self._bodies)

    # ── Hierarchy ──

    def children(self, body_id: BodyId) -> list[CelestialBody]:
        """Bodies whose parent is ``body_id``, in registry order."""
        self.get(body_id)
        return [b for b in self._bodies.values() if b.parent == body_id]

    def get_visible_bodies(self, body_id: BodyId) -> list[CelestialBody]:
        """Bodies shown when ``body_id`` is selected (see module docstring)."""
        body = self.get(body_id)
        visible = [body]

        if body.type is BodyType.PLANET:
            if body.parent is not None:
                visible.append(self.get(body.parent))
            visible.extend(self.children(body.id))

        elif body.type is BodyType.MOON:
            if body.parent is not None:
                parent = self.get(body.parent)
                visible.append(parent)
                if parent.parent is not None:
                    visible.append(self.get(parent.parent))

        return visible


def _validate_hierarchy(index: dict) -> None:
    """Check parent references, cycles and type rules over an id index."""
    for body in index.values():
        if body.parent is not None and body.parent not in index:
            raise InvalidHierarchyError(
                f"{body.id.label} references missing parent {body.parent.value!r}")

    # Cycle detection: follow each parent chain until it ends or repeats
    for body in index.values():
        seen = {body.id}
        current = body
        while current.parent is not None:
            if current.parent in seen:
                raise InvalidHierarchyError(
                    f"Parent cycle through {current.parent.label}")
            seen.add(current.parent)
            current = index[current.parent]

    for body in index.values():
        allowed = _ALLOWED_PARENTS[body.type]
        if body.parent is None:
            if body.type in (BodyType.PLANET, BodyType.MOON):
                raise InvalidHierarchyError(
                    f"{body.type.value} {body.id.label} needs a parent")
            continue
        parent = index[body.parent]
        if allowed is None:
            raise InvalidHierarchyError(
                f"{body.type.value} {body.id.label} cannot have a parent")
        if parent.type not in allowed:
            raise InvalidHierarchyError(
                f"{body.type.value} {body.id.label} cannot orbit "
                f"{parent.type.value} {parent.id.label}")
        if body.type is BodyType.MOON:
            depth = 0
            current = body
            while current.type is not BodyType.STAR:
                if current.parent is None or depth >= _MAX_MOON_DEPTH:
                    raise InvalidHierarchyError(
                        f"Moon {body.id.label} is not within "
                        f"{_MAX_MOON_DEPTH} hops of a star")
                current = index[current.parent]
                depth += 1
