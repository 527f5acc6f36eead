from itertools import combinations
from typing import Optional, Tuple, Union

import numpy as np

from .contracts import (
    Point, Reading, Position,
    PairIncoherent, DegenerateConfiguration, ResidualTooLarge, SolveFailure,
)

DET_EPS = 1e-12

def _pair_feasible(a: Reading, b: Reading) -> bool:
    """
    False, если две окружности не могут пересечься:
    слишком далеко друг от друга, одна строго внутри другой,
    либо совпадают (бесконечно много решений).
    """
    ra, rb = np.float64(a.distance), np.float64(b.distance)
    d = np.hypot(np.float64(b.point.x) - a.point.x, np.float64(b.point.y) - a.point.y)
    if d > ra + rb:
        return False
    if d < abs(ra - rb):
        return False
    if d == 0 and ra == rb:
        return False
    return True

def _first_incoherent_pair(readings: Tuple[Reading, Reading, Reading]) -> Optional[Tuple[int, int]]:
    # пары (1,2), (1,3), (2,3)
    for i, j in combinations(range(3), 2):
        if not _pair_feasible(readings[i], readings[j]):
            return (i + 1, j + 1)
    return None

def solve(r1: Reading, r2: Reading, r3: Reading, tolerance: float) -> Union[Point, SolveFailure]:
    """
    Позиция (x, y) источника по трём точкам и расстояниям до них.
    Вычитаем уравнение окружности 1 из окружностей 2 и 3 — получаем
    линейную систему 2x2, решаем в явном виде и проверяем остатки
    относительно исходных расстояний. Всё в float64.
    """
    pair = _first_incoherent_pair((r1, r2, r3))
    if pair is not None:
        return PairIncoherent(pair=pair)

    x1, y1, d1 = np.float64(r1.point.x), np.float64(r1.point.y), np.float64(r1.distance)
    x2, y2, d2 = np.float64(r2.point.x), np.float64(r2.point.y), np.float64(r2.distance)
    x3, y3, d3 = np.float64(r3.point.x), np.float64(r3.point.y), np.float64(r3.distance)

    A = 2 * (x2 - x1)
    B = 2 * (y2 - y1)
    C = d1*d1 - d2*d2 - x1*x1 + x2*x2 - y1*y1 + y2*y2

    D = 2 * (x3 - x1)
    E = 2 * (y3 - y1)
    F = d1*d1 - d3*d3 - x1*x1 + x3*x3 - y1*y1 + y3*y3

    den = A*E - B*D
    if abs(den) < DET_EPS:
        return DegenerateConfiguration(determinant=float(den))

    x = (C*E - B*F) / den
    y = (A*F - C*D) / den

    residuals = (
        float(abs(np.hypot(x - x1, y - y1) - d1)),
        float(abs(np.hypot(x - x2, y - y2) - d2)),
        float(abs(np.hypot(x - x3, y - y3) - d3)),
    )
    # np.max пропускает NaN наружу; NaN не проходит проверку
    max_residual = float(np.max(residuals))
    if not max_residual <= tolerance:
        return ResidualTooLarge(max_residual=max_residual, tolerance=float(tolerance), residuals=residuals)

    return Point(x=float(x), y=float(y))

def locate(r1: Reading, r2: Reading, r3: Reading, tolerance: float) -> Union[Position, SolveFailure]:
    """Граница компонента: решение в float64, наружу — float32."""
    res = solve(r1, r2, r3, tolerance)
    if not isinstance(res, Point):
        return res
    return Position(x=np.float32(res.x), y=np.float32(res.y))
