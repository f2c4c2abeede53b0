from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.exceptions import ValidationError
from .base import Transition
from .clear import Clear
from .set_in import SetIn
from .set_out import SetOut
from .set_return import SetReturn


@dataclass
class TransitionFactory:
    """Factory Pattern: map a transport command name to its update variant."""

    def for_command(
        self,
        command: str,
        *,
        place: Optional[str] = None,
        expected_return_at: Optional[datetime] = None,
    ) -> Transition:
        name = (command or "").strip().lower()
        if name == "out":
            return SetOut(place=place, expected_return_at=expected_return_at)
        if name == "return":
            return SetReturn()
        if name == "in":
            return SetIn()
        if name == "clear":
            return Clear()
        raise ValidationError(f"Unknown command: {command!r}")
