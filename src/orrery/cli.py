"""
Command-line interface for solar-system positions and orbit paths.

Usage:
    orrery visible earth                                 # visible set + positions
    orrery position mars --reference earth               # single position
    orrery trajectory moon --reference earth --days 27.3 --steps 100
    orrery --epoch 2030-01-01T00:00:00Z visible jupiter --json
    orrery --ephemeris astropy position earth            # needs orrery[astropy]
    orrery --version
"""
import argparse
import json
import logging
import sys
from datetime import timedelta

from orrery import __version__
from orrery.bodies import BodyId, SolarSystem
from orrery.epoch import DEFAULT_EPOCH, Epoch
from orrery.ephemeris import default_ephemeris
from orrery.errors import OrreryError
from orrery.scene import DisplayConfig, Scene
from orrery.utils import SOLAR_SYSTEM_SCALE, TRAJ_POINTS

log = logging.getLogger("orrery.cli")


def _load_ephemeris(name: str):
    if name == "astropy":
        from orrery.astropy_ephemeris import AstropyEphemeris
        return AstropyEphemeris()
    return default_ephemeris()


def _vector(xyz) -> list[float]:
    return [float(c) for c in xyz]


def _run_visible(scene: Scene, args) -> dict:
    selected = BodyId.parse(args.body)
    return {
        "selected": selected.value,
        "epoch": str(args.epoch),
        "bodies": [
            {"id": body_id.value, "position": _vector(pos.xyz),
             "distance": pos.magnitude}
            for body_id, pos in scene.visible_positions(selected, args.epoch)
        ],
    }


def _run_position(scene: Scene, args) -> dict:
    target = BodyId.parse(args.target)
    reference = BodyId.parse(args.reference)
    pos = scene.resolver.position_of(target, reference, args.epoch).to_ecliptic(
        scene.tilt_body(reference))
    return {
        "target": target.value,
        "reference": reference.value,
        "epoch": str(args.epoch),
        "position": _vector(pos.xyz),
        "distance": pos.magnitude,
        "distance_km": pos.magnitude / scene.resolver.scale,
    }


def _run_trajectory(scene: Scene, args) -> dict:
    target = BodyId.parse(args.target)
    reference = BodyId.parse(args.reference)
    end = args.epoch + timedelta(days=args.days) if args.days is not None else None
    traj = scene.sampler.sample(target, reference, args.epoch, end,
                                args.steps).to_ecliptic(scene.tilt_body(reference))
    return {
        "target": target.value,
        "reference": reference.value,
        "points": [{"epoch": str(t), "position": _vector(p)} for t, p in traj],
    }


def _print_text(result: dict) -> None:
    if "bodies" in result:
        print(f"Visible from {result['selected']} at {result['epoch']}:")
        for row in result["bodies"]:
            x, y, z = row["position"]
            print(f"  {row['id']:<8s} [{x:14.4f} {y:14.4f} {z:14.4f}]  "
                  f"|r| = {row['distance']:.4f}")
    elif "points" in result:
        print(f"Trajectory of {result['target']} relative to {result['reference']} "
              f"({len(result['points'])} points):")
        for row in result["points"]:
            x, y, z = row["position"]
            print(f"  {row['epoch']}  [{x:14.4f} {y:14.4f} {z:14.4f}]")
    else:
        x, y, z = result["position"]
        print(f"{result['target']} relative to {result['reference']} "
              f"at {result['epoch']}:")
        print(f"  [{x:.4f} {y:.4f} {z:.4f}]  |r| = {result['distance']:.4f} "
              f"({result['distance_km']:.1f} km)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orrery",
        description="Solar-system body positions and orbit paths in display coordinates",
    )
    parser.add_argument(
        '--version', action='version', version=f"orrery {__version__}",
    )
    parser.add_argument(
        '--epoch', type=Epoch.from_iso, default=DEFAULT_EPOCH,
        help="ISO-8601 epoch (default: 2024-07-04T12:00:00Z)"
    )
    parser.add_argument(
        '--scale', type=float, default=SOLAR_SYSTEM_SCALE,
        help=f"Display units per km (default: {SOLAR_SYSTEM_SCALE})"
    )
    parser.add_argument(
        '--ephemeris', choices=['analytic', 'astropy'], default='analytic',
        help="Ephemeris source (default: analytic)"
    )
    parser.add_argument(
        '--tilt-source', choices=['reference', 'earth'], default='reference',
        help="Body whose axial tilt defines the ecliptic view"
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # --- visible ---
    visible_parser = subparsers.add_parser(
        "visible", help="Positions of the bodies visible when BODY is selected",
    )
    visible_parser.add_argument("body", help="Selected body id (e.g. earth)")

    # --- position ---
    position_parser = subparsers.add_parser(
        "position", help="Position of TARGET relative to a reference body",
    )
    position_parser.add_argument("target", help="Target body id")
    position_parser.add_argument('--reference', '-r', default="sun",
                                 help="Reference body id (default: sun)")

    # --- trajectory ---
    trajectory_parser = subparsers.add_parser(
        "trajectory", help="Sampled orbit path of TARGET",
    )
    trajectory_parser.add_argument("target", help="Target body id")
    trajectory_parser.add_argument('--reference', '-r', default="sun",
                                   help="Reference body id (default: sun)")
    trajectory_parser.add_argument('--steps', type=int, default=TRAJ_POINTS,
                                   help=f"Number of samples (default: {TRAJ_POINTS})")
    trajectory_parser.add_argument('--days', type=float, default=None,
                                   help="Span in days (default: one orbital period)")

    for sub in (visible_parser, position_parser, trajectory_parser):
        sub.add_argument('--json', action='store_true', help="Emit JSON")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.scale > 0:
        parser.error(f"--scale must be positive, got {args.scale}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers = {
        "visible": _run_visible,
        "position": _run_position,
        "trajectory": _run_trajectory,
    }
    if args.command not in handlers:
        parser.print_help()
        return 1

    try:
        ephemeris = _load_ephemeris(args.ephemeris)
    except ImportError:
        parser.error("--ephemeris astropy requires orrery[astropy]")

    try:
        scene = Scene(SolarSystem.default(), ephemeris,
                      DisplayConfig(scale=args.scale, tilt_source=args.tilt_source))
        result = handlers[args.command](scene, args)
    except OrreryError as exc:
        log.debug("Query failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result, indent=2))
    else:
        _print_text(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
