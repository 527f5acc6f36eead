"""
Слой вызова: сопоставляет показания спутников с их фиксированными
позициями, вызывает locate/merge и собирает ответ.
"""

import logging
import math
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .contracts import LocatorConfig, Position, Reading, Satellite
from .errors import InsufficientData, InvalidRequest, MessageUndecodable
from .message import merge
from .registry import SatelliteRegistry
from .solver import locate

log = logging.getLogger(__name__)

REQUIRED_SATELLITES = 3


@dataclass(frozen=True)
class Decoded:
    position: Position
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"position": self.position.to_dict(), "message": self.message}


def decode(satellites: Sequence[Satellite], cfg: LocatorConfig) -> Decoded:
    """Ровно три спутника -> позиция источника и восстановленное сообщение."""
    if len(satellites) != REQUIRED_SATELLITES:
        raise InsufficientData()
    r1, r2, r3 = (Reading(point=s.position, distance=s.distance) for s in satellites)

    pos = locate(r1, r2, r3, cfg.tolerance)
    if not isinstance(pos, Position):
        if not cfg.fallback_to_origin:
            log.info("Solver failed: %s", pos)
            raise InsufficientData(str(pos), failure=pos)
        log.warning("Solver failed (%s), falling back to origin", pos)
        pos = Position(x=np.float32(0.0), y=np.float32(0.0))

    a, b, c = (s.message for s in satellites)
    message = merge(a, b, c)
    if not isinstance(message, str):
        log.info("Merge failed: %s", message)
        raise MessageUndecodable(failure=message)

    return Decoded(position=pos, message=message)


def config_from_request(overrides: Optional[Dict[str, Any]]) -> LocatorConfig:
    """Блок "cfg" запроса поверх LocatorConfig.from_env()."""
    cfg = LocatorConfig.from_env()
    overrides = overrides or {}
    known = {f.name for f in fields(LocatorConfig)}
    for k in overrides:
        if k not in known:
            raise InvalidRequest(f"unknown config key: {k}")
    if "tolerance" in overrides:
        try:
            tol = float(overrides["tolerance"])
        except (TypeError, ValueError) as e:
            raise InvalidRequest(f"invalid tolerance: {overrides['tolerance']!r}") from e
        if not math.isfinite(tol) or tol < 0:
            raise InvalidRequest(f"invalid tolerance: {tol}")
        cfg.tolerance = tol
    if "fallback_to_origin" in overrides:
        if not isinstance(overrides["fallback_to_origin"], bool):
            raise InvalidRequest("fallback_to_origin must be true or false")
        cfg.fallback_to_origin = overrides["fallback_to_origin"]
    return cfg


def _check_distance(name: str, distance: float) -> float:
    # NaN/inf не проходят
    if not math.isfinite(distance) or distance < 0:
        raise InvalidRequest(f"invalid distance for {name}: {distance}")
    return distance


def _check_message(name: str, message: Any) -> List[str]:
    if message is None:
        return []
    if not isinstance(message, (list, tuple)):
        raise InvalidRequest(f"message for {name} must be a list of words")
    return [str(w) for w in message]


def _parse_entry(entry: Dict[str, Any]) -> tuple:
    try:
        name = str(entry["name"])
        distance = float(entry["distance"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidRequest(f"invalid satellite entry: {entry!r}") from e
    return name, _check_distance(name, distance), _check_message(name, entry.get("message"))


def top_secret(registry: SatelliteRegistry, satellites: List[Dict[str, Any]],
               cfg: LocatorConfig) -> Decoded:
    """
    Пакетный режим: все три показания приходят сразу.
    Позиция каждого спутника берётся из реестра, показания сохраняются.
    """
    if len(satellites) < REQUIRED_SATELLITES:
        raise InsufficientData()
    if len(satellites) > REQUIRED_SATELLITES:
        raise InvalidRequest(f"expected {REQUIRED_SATELLITES} satellites, got {len(satellites)}")

    parsed = [_parse_entry(entry) for entry in satellites]
    if len({name for name, _, _ in parsed}) != REQUIRED_SATELLITES:
        raise InvalidRequest("satellite names must be distinct")

    current: List[Satellite] = []
    for name, distance, message in parsed:
        sat = registry.get(name)
        sat.distance, sat.message = distance, message
        registry.upsert(sat)
        current.append(sat)
    return decode(current, cfg)


def top_secret_split(registry: SatelliteRegistry, name: str, distance: float,
                     message: Sequence[str]) -> Satellite:
    """Сохраняет показание одного спутника, позицию не трогаем."""
    try:
        distance = float(distance)
    except (TypeError, ValueError) as e:
        raise InvalidRequest(f"invalid distance for {name}: {distance!r}") from e
    distance = _check_distance(name, distance)
    message = _check_message(name, message)
    sat = registry.get(name)
    sat.distance, sat.message = distance, message
    registry.upsert(sat)
    log.info("Updated satellite %s", name)
    return sat


def get_top_secret_split(registry: SatelliteRegistry, cfg: LocatorConfig) -> Decoded:
    """Декодирование по сохранённым показаниям (первые три полных)."""
    ready = [s for s in registry.all() if s.has_reading()]
    if len(ready) < REQUIRED_SATELLITES:
        log.info("Only %d satellite(s) have readings", len(ready))
        raise InsufficientData()
    return decode(ready[:REQUIRED_SATELLITES], cfg)
