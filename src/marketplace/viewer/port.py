"""AR viewer port (abstract interface).

The marketplace hands a launch request to an external AR application and
never waits for, or learns about, what happens next.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlencode

DEEP_LINK_SCHEME = "arfurniture"


class LaunchMode(Enum):
    START = "start"  # place a single product in the room
    REVIEW = "review"  # admin inspecting a submitted model
    MULTIPLE = "multiple"  # free arrangement of several products


@dataclass(frozen=True)
class LaunchRequest:
    """Opaque handoff to the viewer: what to load and in which mode."""

    mode: LaunchMode
    category: str | None = None
    prefab_key: str | None = None

    @property
    def url(self) -> str:
        base = f"{DEEP_LINK_SCHEME}://{self.mode.value}"
        if self.mode == LaunchMode.MULTIPLE:
            return base
        return f"{base}?{urlencode({'category': self.category, 'prefabKey': self.prefab_key})}"


class ARViewer(ABC):
    """Abstract AR viewer interface."""

    @abstractmethod
    def launch(self, request: LaunchRequest) -> None:
        """Hand the request to the viewer. Must not block on the viewer's result."""
        ...
