"""
orrery.planets — Analytic Planetary Ephemeris
==============================================

Heliocentric planet positions from the JPL "Keplerian Elements for
Approximate Positions of the Major Planets" (E.M. Standish, Table 1).
Each element is linear in time::

    element(T) = element₀ + rate · T        (T in Julian centuries from J2000)

Valid 1800 AD – 2050 AD.  Accuracy is a few arcminutes for the inner
planets and better than ~1° for the outer ones; the Earth entry is the
Earth–Moon barycentre.

Pipeline
--------
1. Evaluate a, e, I, L, ϖ, Ω at T.
2. ω = ϖ − Ω,  M = L − ϖ  (wrapped to [−180°, 180°]).
3. Solve Kepler's equation  M = E − e·sin E  (Newton–Raphson).
4. Orbital-plane coordinates  x' = a(cos E − e),  y' = a√(1−e²)·sin E.
5. Rotate into the J2000 ecliptic, then into the J2000 equator.

Reference
---------
Standish, E.M. & Williams, J.G. *Keplerian Elements for Approximate
Positions of the Major Planets*, JPL Solar System Dynamics.
"""

import numpy as np
from numpy.typing import NDArray

from .utils import (
    AU_KM, OBLIQUITY_J2000_DEG, centuries_since_j2000, rotation_matrix_x,
)

# ── Element Table ───────────────────────────────────────────────────────────
# NAIF id → ((a, e, I, L, ϖ, Ω) at J2000, (rates per century))
# a [AU], e [-], angles [deg]
ELEMENTS = {
    1: ((0.38709927, 0.20563593, 7.00497902, 252.25032350, 77.45779628, 48.33076593),
        (0.00000037, 0.00001906, -0.00594749, 149472.67411175, 0.16047689, -0.12534081)),
    2: ((0.72333566, 0.00677672, 3.39467605, 181.97909950, 131.60246718, 76.67984255),
        (0.00000390, -0.00004107, -0.00078890, 58517.81538729, 0.00268329, -0.27769418)),
    3: ((1.00000261, 0.01671123, -0.00001531, 100.46457166, 102.93768193, 0.0),
        (0.00000562, -0.00004392, -0.01294668, 35999.37244981, 0.32327364, 0.0)),
    4: ((1.52371034, 0.09339410, 1.84969142, -4.55343205, -23.94362959, 49.55953891),
        (0.00001847, 0.00007882, -0.00813131, 19140.30268499, 0.44441088, -0.29257343)),
    5: ((5.20288700, 0.04838624, 1.30439695, 34.39644051, 14.72847983, 100.47390909),
        (-0.00011607, -0.00013253, -0.00183714, 3034.74612775, 0.21252668, 0.20469106)),
    6: ((9.53667594, 0.05386179, 2.48599187, 49.95424423, 92.59887831, 113.66242448),
        (-0.00125060, -0.00050991, 0.00193609, 1222.49362201, -0.41897216, -0.28867794)),
    7: ((19.18916464, 0.04725744, 0.77263783, 313.23810451, 170.95427630, 74.01692503),
        (-0.00196176, -0.00004397, -0.00242939, 428.48202785, 0.40805281, 0.04240589)),
    8: ((30.06992276, 0.00859048, 1.77004347, -55.12002969, 44.96476227, 131.78422574),
        (0.00026291, 0.00005105, 0.00035372, 218.45945325, -0.32241464, -0.00508664)),
}

# Ecliptic → equatorial at J2000
_ECL_TO_EQ = rotation_matrix_x(np.deg2rad(OBLIQUITY_J2000_DEG))


# ════════════════════════════════════════════════════════════════════════════
#  Kepler Equation
# ════════════════════════════════════════════════════════════════════════════

def solve_kepler(M: float, e: float, tol: float = 1e-12,
                 max_iter: int = 50) -> float:
    """Solve Kepler's equation  M = E − e sin(E)  via Newton–Raphson.

    Parameters
    ----------
    M : float — mean anomaly [rad]
    e : float — eccentricity (elliptic, e < 1)
    tol : float — convergence tolerance [rad]

    Returns
    -------
    E : float — eccentric anomaly [rad]
    """
    E = M + e * np.sin(M) if e < 0.8 else np.pi
    for _ in range(max_iter):
        dE = -(E - e * np.sin(E) - M) / (1.0 - e * np.cos(E))
        E += dE
        if abs(dE) < tol:
            break
    return E


# ════════════════════════════════════════════════════════════════════════════
#  Positions
# ════════════════════════════════════════════════════════════════════════════

def orbital_elements(naif_id: int, days: float) -> dict:
    """Osculating-like elements of a planet at ``days`` since J2000.

    Returns
    -------
    dict with keys: a [km], e, i, raan, argp, M [rad]
    """
    base, rate = ELEMENTS[naif_id]
    T = centuries_since_j2000(days)
    a, e, inc, L, varpi, node = (b + r * T for b, r in zip(base, rate))
    M = (L - varpi + 180.0) % 360.0 - 180.0
    return {
        "a": a * AU_KM,
        "e": e,
        "i": np.deg2rad(inc),
        "raan": np.deg2rad(node),
        "argp": np.deg2rad(varpi - node),
        "M": np.deg2rad(M),
    }


def heliocentric_ecliptic(naif_id: int, days: float) -> NDArray:
    """Heliocentric position in the J2000 ecliptic frame [km]."""
    el = orbital_elements(naif_id, days)
    a, e = el["a"], el["e"]
    E = solve_kepler(el["M"], e)

    xp = a * (np.cos(E) - e)
    yp = a * np.sqrt(1.0 - e**2) * np.sin(E)

    cos_w, sin_w = np.cos(el["argp"]), np.sin(el["argp"])
    cos_O, sin_O = np.cos(el["raan"]), np.sin(el["raan"])
    cos_i, sin_i = np.cos(el["i"]), np.sin(el["i"])

    x = (cos_w * cos_O - sin_w * sin_O * cos_i) * xp \
        + (-sin_w * cos_O - cos_w * sin_O * cos_i) * yp
    y = (cos_w * sin_O + sin_w * cos_O * cos_i) * xp \
        + (-sin_w * sin_O + cos_w * cos_O * cos_i) * yp
    z = (sin_w * sin_i) * xp + (cos_w * sin_i) * yp
    return np.array([x, y, z])


def heliocentric_equatorial(naif_id: int, days: float) -> NDArray:
    """Heliocentric position in the J2000 equatorial frame [km]."""
    return _ECL_TO_EQ @ heliocentric_ecliptic(naif_id, days)
