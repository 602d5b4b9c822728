from __future__ import annotations

import threading
from collections.abc import Iterable

from driverfinder.core.exceptions import ConflictError, NotFoundError
from driverfinder.models.coordinate import Coordinate
from driverfinder.models.driver import Driver


class InMemoryDriverRepository:
    """Dict-backed driver store; iteration order is insertion order."""

    def __init__(self, drivers: Iterable[Driver] = ()) -> None:
        self._lock = threading.Lock()
        self._drivers: dict[int, Driver] = {}
        for driver in drivers:
            self.add(driver)

    def add(self, driver: Driver) -> Driver:
        with self._lock:
            if driver.id in self._drivers:
                raise ConflictError(f"driver {driver.id} already registered")
            self._drivers[driver.id] = driver
        return driver

    def remove(self, driver_id: int) -> None:
        with self._lock:
            if self._drivers.pop(driver_id, None) is None:
                raise NotFoundError(f"driver {driver_id} not found")

    def get(self, driver_id: int) -> Driver | None:
        with self._lock:
            return self._drivers.get(driver_id)

    def list_available(self) -> list[Driver]:
        with self._lock:
            return list(self._drivers.values())

    def update_location(self, driver_id: int, coordinate: Coordinate) -> Driver:
        driver = self.get(driver_id)
        if driver is None:
            raise NotFoundError(f"driver {driver_id} not found")
        driver.move_to(coordinate)
        return driver

    def __len__(self) -> int:
        with self._lock:
            return len(self._drivers)
