"""Data models for the Sensibo Sky API"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

# Values accepted by most A/C models; the service has the final word.
MODES = ("cool", "hot", "dry", "fan")
FAN_LEVELS = ("low", "medium", "high", "auto")
UNITS = ("C", "F")
SWING_MODES = ("stopped", "rangeFull")


@dataclass(frozen=True)
class AcState:
    """
    A partial A/C state update.

    Fields left as None are not sent, so the pod keeps its current value
    for them.
    """
    on: Optional[bool] = None
    mode: Optional[str] = None
    fan: Optional[str] = None
    unit: Optional[str] = None
    temperature: Optional[Union[int, float]] = None
    swing: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}

    @property
    def is_empty(self) -> bool:
        return not self.to_payload()


@dataclass(frozen=True)
class SmartModeUpdate:
    """Climate React toggle"""
    enabled: Optional[bool] = None

    def to_payload(self) -> Dict[str, Any]:
        if self.enabled is None:
            return {}
        return {"enabled": self.enabled}
