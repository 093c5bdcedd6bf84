from __future__ import annotations

from typing import Optional, Protocol

from .model import Shift


class ShiftPolicy(Protocol):
    def get_active(self) -> Optional[Shift]:
        """Return one active shift, or None when nothing is configured.

        Not employee-specific: the first active shift wins.
        """

        raise NotImplementedError
