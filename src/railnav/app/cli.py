# railnav/app/cli.py
import argparse
import sys

from railnav.app.build import build


def _lon_lat(s: str) -> tuple[float, float]:
    try:
        lon, lat = (float(x) for x in s.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected LON,LAT, got {s!r}") from None
    return lon, lat


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="railnav", description="Route between two facility nodes.")
    ap.add_argument("nodes", help="nodes FeatureCollection (GeoJSON)")
    ap.add_argument("edges", help="edges FeatureCollection (GeoJSON)")
    ap.add_argument("start", type=int, help="start node id")
    ap.add_argument("end", type=int, help="destination node id")
    ap.add_argument("--at", type=_lon_lat, metavar="LON,LAT", help="live position to snap")
    ap.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return ap.parse_args(argv)


def main(argv=None, out=None, err=None) -> int:
    args = parse_args(argv)
    out = out or sys.stdout
    err = err or sys.stderr
    # stdout carries instructions only; JSON logs go to err
    try:
        nav = build(
            {
                "graph": {"nodes_file": args.nodes, "edges_file": args.edges},
                "log": {"level": args.log_level, "debug": args.log_level == "DEBUG"},
            },
            log_stream=err,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"railnav: cannot load graph: {e}", file=err)
        return 2
    plan = nav.plan(args.start, args.end)
    for line in plan.instructions:
        print(line, file=out)
    if not plan.found:
        return 1
    if args.at is not None:
        snapped = nav.snap(args.at, plan.route)
        if snapped is not None:
            print(f"Snapped position: {snapped[0]:.7f},{snapped[1]:.7f}", file=out)
    return 0
