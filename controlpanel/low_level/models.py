#!/usr/bin/env python3
# models.py
# Data model for panel controls, status entries and activations.
# Author: Daniel Würmli

"""Data model for panel controls, status entries and activations."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ControlKind(Enum):
    """The two kinds of control a panel can hold."""

    BUTTON = "button"
    SLIDER = "slider"

    @classmethod
    def parse(cls, raw: Any) -> "ControlKind":
        if not isinstance(raw, str):
            raise ValueError(f"Control type must be a string, got {raw!r}")
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown control type: {raw!r}") from None


@dataclass(frozen=True)
class Control:
    """One configured UI element."""

    name: str
    kind: ControlKind
    icon: str = ""
    min: int = 0
    max: int = 0
    url: str = ""
    value: int = 0  # live value, filled in per render

    @property
    def range(self) -> Tuple[int, int]:
        return (self.min, self.max)

    @property
    def is_slider(self) -> bool:
        return self.kind is ControlKind.SLIDER

    @property
    def is_button(self) -> bool:
        return self.kind is ControlKind.BUTTON

    def with_value(self, value: int) -> "Control":
        return replace(self, value=int(value))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.kind.value,
            "icon": self.icon,
            "min": self.min,
            "max": self.max,
            "url": self.url,
            "value": self.value,
        }


@dataclass(frozen=True)
class Configuration:
    """A snapshot of the panel definition as read from disk."""

    controls: Tuple[Control, ...] = field(default_factory=tuple)
    status_url: Optional[str] = None

    def find(self, name: str) -> Optional[Control]:
        """Return the first control called ``name`` (first match wins on duplicates)."""
        return find_control(self.controls, name)

    def duplicate_names(self) -> List[str]:
        seen = set()
        dupes: List[str] = []
        for ctrl in self.controls:
            if ctrl.name in seen and ctrl.name not in dupes:
                dupes.append(ctrl.name)
            seen.add(ctrl.name)
        return dupes


def find_control(controls, name: str) -> Optional[Control]:
    for ctrl in controls:
        if ctrl.name == name:
            return ctrl
    return None


@dataclass(frozen=True)
class StatusEntry:
    id: str
    value: int


@dataclass(frozen=True)
class ActivationRequest:
    """Inbound activation. ``value`` is forwarded as-is and never parsed."""

    name: str
    value: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "ActivationRequest":
        """
        Validate a decoded JSON body.

        Missing or null fields decode to empty strings; anything else that is
        not a string raises ValueError.
        """
        if not isinstance(payload, dict):
            raise ValueError("Activation body must be a JSON object.")
        name = payload.get("name")
        value = payload.get("value")
        if name is None:
            name = ""
        if value is None:
            value = ""
        if not isinstance(name, str):
            raise ValueError(f"'name' must be a string, got {name!r}")
        if not isinstance(value, str):
            raise ValueError(f"'value' must be a string, got {value!r}")
        return cls(name=name, value=value)


@dataclass(frozen=True)
class ActivationResult:
    ok: bool = True
    status: str = "success"

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "status": self.status}


__all__ = [
    "ControlKind",
    "Control",
    "Configuration",
    "StatusEntry",
    "ActivationRequest",
    "ActivationResult",
    "find_control",
]
