import argparse
import json
from dataclasses import asdict
from typing import Dict, List

from trilateration.contracts import Point, Reading, Position
from trilateration.solver import locate


def parse_points(s: str) -> Dict[str, Point]:
    # format: "kenobi:-500,-200 skywalker:100,-100 sato:500,100"
    out: Dict[str, Point] = {}
    for token in s.strip().split():
        name, coords = token.split(":", 1)
        x_str, y_str = coords.split(",", 1)
        out[name] = Point(x=float(x_str), y=float(y_str))
    return out


def parse_distances(s: str) -> Dict[str, float]:
    # format: "kenobi=927.75,skywalker=360,sato=360"
    # имя спутника — ключ показания, повтор означает две дистанции для одной точки
    out: Dict[str, float] = {}
    for pair in s.split(","):
        k, v = pair.split("=", 1)
        name = k.strip()
        if name in out:
            raise ValueError(f"duplicate distance for: {name}")
        out[name] = float(v)
    return out


def build_readings(points: Dict[str, Point], distances: Dict[str, float]) -> List[Reading]:
    if len(distances) != 3:
        raise ValueError(f"need exactly 3 distances, got {len(distances)}")
    missing = [k for k in distances if k not in points]
    if missing:
        raise ValueError(f"no position for: {', '.join(missing)}")
    return [Reading(point=points[k], distance=d) for k, d in distances.items()]


def result_to_dict(res) -> dict:
    if isinstance(res, Position):
        return {"ok": True, **res.to_dict()}
    return {"ok": False, "failure": type(res).__name__, "detail": str(res), **asdict(res)}


def main() -> None:
    ap = argparse.ArgumentParser(description="Locate a source from three reference points and distances")
    ap.add_argument("--points", default="kenobi:-500,-200 skywalker:100,-100 sato:500,100",
                    help="e.g. 'kenobi:-500,-200 skywalker:100,-100 sato:500,100'")
    ap.add_argument("--distances", required=True, help="e.g. 'kenobi=927.75,skywalker=360,sato=360'")
    ap.add_argument("--tol", type=float, default=10.0, help="max residual (default 10.0)")
    args = ap.parse_args()

    r1, r2, r3 = build_readings(parse_points(args.points), parse_distances(args.distances))
    print(json.dumps(result_to_dict(locate(r1, r2, r3, args.tol))))


if __name__ == "__main__":
    main()
