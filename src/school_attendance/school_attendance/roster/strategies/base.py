from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ...students.model import NewStudent


class RosterLayout(ABC):
    """Strategy Pattern: how one spreadsheet layout maps to student records."""

    name: str = ""
    required_headers: tuple[str, ...] = ()
    optional_headers: tuple[str, ...] = ()

    @abstractmethod
    def build_record(self, values: Mapping[str, str]) -> Optional[NewStudent]:
        """Return a record, or ``None`` to drop a malformed row.

        ``values`` maps lower-cased header names to trimmed cell text.
        """
        raise NotImplementedError
