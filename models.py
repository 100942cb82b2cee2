from dataclasses import dataclass
from enum import Enum
from typing import Optional

from errors import AppError

@dataclass
class RawArtist:
    """An artist exactly as decoded from the search endpoint."""
    id: int
    title: str

@dataclass
class Artist:
    """A search result with its selection flag. Identity is the id."""
    id: int
    title: str
    selected: bool = False

class ViewMode(Enum):
    RESULTS = "results"
    SELECTED = "selected"

@dataclass
class ModeAffordances:
    """What the mode bar should show for the current view."""
    show_label: str
    show_enabled: bool
    reset_hidden: bool

@dataclass
class SearchOutcome:
    """Completion value of a single search call."""
    query: str
    error: Optional[AppError] = None
    superseded: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.superseded
