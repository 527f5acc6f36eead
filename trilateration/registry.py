import logging
import threading
from dataclasses import replace
from typing import Dict, List

from .contracts import Point, Satellite
from .errors import UnknownSatellite

log = logging.getLogger(__name__)

# известные фиксированные позиции спутников
KNOWN_POSITIONS: Dict[str, Point] = {
    "kenobi": Point(-500.0, -200.0),
    "skywalker": Point(100.0, -100.0),
    "sato": Point(500.0, 100.0),
}


class SatelliteRegistry:
    """
    Хранилище спутников по имени (в памяти).
    Последняя запись по ключу побеждает; наружу отдаются копии.
    """

    def __init__(self, positions: Dict[str, Point] = None):
        positions = KNOWN_POSITIONS if positions is None else positions
        self._lock = threading.Lock()
        self._satellites: Dict[str, Satellite] = {
            name: Satellite(name=name, position=pos) for name, pos in positions.items()
        }

    def get(self, name: str) -> Satellite:
        with self._lock:
            sat = self._satellites.get(name)
            if sat is None:
                raise UnknownSatellite(name)
            return replace(sat, message=list(sat.message))

    def upsert(self, satellite: Satellite) -> None:
        with self._lock:
            self._satellites[satellite.name] = replace(satellite, message=list(satellite.message))
        log.debug("Stored satellite %s: distance=%.3f, %d token(s)",
                  satellite.name, satellite.distance, len(satellite.message))

    def all(self) -> List[Satellite]:
        with self._lock:
            return [replace(s, message=list(s.message)) for s in self._satellites.values()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._satellites)
