"""Command-line interface."""
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from micromagviz.logging_config import setup_logging
from micromagviz.model.sample_plane import SamplePlane

logger = logging.getLogger("micromagviz")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="micromagviz",
        description="Print the geometry of a sample plane for the given spherical parameters.",
    )
    parser.add_argument("--length-scale", type=float, default=1.0, help="Sizing reference (default: 1).")
    parser.add_argument("--theta", type=float, default=0.0, help="Polar angle in degrees.")
    parser.add_argument("--phi", type=float, default=0.0, help="Azimuthal angle in degrees.")
    parser.add_argument("--gamma", type=float, default=0.0, help="Orientation angle in degrees.")
    parser.add_argument("--r", type=float, default=None, help="Distance from the target.")
    parser.add_argument("--width", type=float, default=None, help="Plane width.")
    parser.add_argument("--height", type=float, default=None, help="Plane height.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def format_report(plane: SamplePlane) -> str:
    rows = [
        ("n", plane.n),
        ("t_theta", plane.t_theta),
        ("t_phi", plane.t_phi),
        ("pc", plane.pc),
        ("p1", plane.p1),
        ("p2", plane.p2),
        ("p3", plane.p3),
        ("p4", plane.p4),
    ]
    return "\n".join(f"{name:>8}: ({v.x: .6f}, {v.y: .6f}, {v.z: .6f})" for name, v in rows)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    plane = SamplePlane(
        args.length_scale,
        theta=args.theta,
        phi=args.phi,
        gamma=args.gamma,
        r=args.r,
        width=args.width,
        height=args.height,
    )
    print(format_report(plane))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
