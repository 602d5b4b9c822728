"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from driverfinder.models.driver import Driver


class DriverReadRepository(Protocol):
    """Read-only source of located drivers for proximity queries."""

    def list_available(self) -> Sequence[Driver]: ...

    def get(self, driver_id: int) -> Driver | None: ...
