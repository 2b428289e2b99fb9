"""
orrery.errors — Failure Taxonomy
=================================

Registry construction errors are fatal and raised from the constructor.
Query errors propagate to the caller unchanged; nothing in the engine turns
them into default positions.
"""


class OrreryError(Exception):
    """Base class for every engine failure."""


class UnknownBodyError(OrreryError, LookupError):
    """A body id or ephemeris lookup key is not recognised."""

    def __init__(self, key, where: str = "registry"):
        self.key = key
        self.where = where
        super().__init__(f"Unknown body {key!r} in {where}")


class EphemerisCoverageError(OrreryError, ValueError):
    """The requested epoch lies outside the ephemeris time span."""

    def __init__(self, epoch, coverage):
        self.epoch = epoch
        self.coverage = coverage
        start, end = coverage
        super().__init__(
            f"Epoch {epoch} outside ephemeris coverage [{start}, {end}]")


class InvalidHierarchyError(OrreryError, ValueError):
    """The body catalog has a broken parent graph."""


class InvalidSampleCountError(OrreryError, ValueError):
    """Trajectory sampling was asked for no samples or a negative span."""
