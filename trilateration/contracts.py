import os
from dataclasses import dataclass, field
from typing import List, Tuple, Union

import numpy as np

@dataclass(frozen=True)
class Point:
    x: float
    y: float  # единицы расстояния, плоскость (x,y)

@dataclass(frozen=True)
class Reading:
    point: Point
    distance: float  # радиус окружности вокруг point, >= 0

@dataclass(frozen=True)
class Position:
    # результат на границе компонента: float32
    x: np.float32
    y: np.float32

    def to_dict(self) -> dict:
        return {"x": float(self.x), "y": float(self.y)}

# --- ошибки решателя (возвращаются как значения, не бросаются) ---

@dataclass(frozen=True)
class PairIncoherent:
    pair: Tuple[int, int]  # номера окружностей (1..3)

    def __str__(self) -> str:
        a, b = self.pair
        return f"circles {a} and {b} cannot intersect (incoherent pair)"

@dataclass(frozen=True)
class DegenerateConfiguration:
    determinant: float

    def __str__(self) -> str:
        return f"determinant {self.determinant:.3g} is ~0: reference points are collinear or degenerate"

@dataclass(frozen=True)
class ResidualTooLarge:
    max_residual: float
    tolerance: float
    residuals: Tuple[float, float, float]

    def __str__(self) -> str:
        r1, r2, r3 = self.residuals
        return (f"no coherent intersection: max residual = {self.max_residual:.6f} > "
                f"tol({self.tolerance:.6f}). residuals = [{r1:.6f}, {r2:.6f}, {r3:.6f}]")

SolveFailure = Union[PairIncoherent, DegenerateConfiguration, ResidualTooLarge]

@dataclass(frozen=True)
class NoMessageFound:
    length: int  # длина нормализованных последовательностей

    def __str__(self) -> str:
        return f"no word could be recovered from {self.length} position(s)"

# --- вызывающая сторона ---

@dataclass
class Satellite:
    name: str
    position: Point
    distance: float = 0.0
    message: List[str] = field(default_factory=list)

    def has_reading(self) -> bool:
        return self.distance > 0 and len(self.message) > 0

def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")

@dataclass
class LocatorConfig:
    tolerance: float = 10.0           # допустимый остаток, единицы расстояния
    fallback_to_origin: bool = False  # при провале решателя отдавать (0,0)

    @classmethod
    def from_env(cls) -> "LocatorConfig":
        cfg = cls()
        if "LOCATOR_TOLERANCE" in os.environ:
            cfg.tolerance = float(os.environ["LOCATOR_TOLERANCE"])
        if "LOCATOR_FALLBACK_TO_ORIGIN" in os.environ:
            cfg.fallback_to_origin = _env_flag(os.environ["LOCATOR_FALLBACK_TO_ORIGIN"])
        return cfg
