"""Data models for document-field extraction."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Label phrases recognised on each line, per field. Matching is
# case-insensitive and tolerant of extra whitespace between words.
DEFAULT_FIELD_LABELS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "first_name": ("FIRST NAME", "GIVEN NAME", "UNANG PANGALAN"),
        "middle_name": ("MIDDLE NAME", "M.I.", "GITNANG PANGALAN"),
        "last_name": ("LAST NAME", "SURNAME", "APELYIDO"),
        "full_name": ("NAME", "PANGALAN"),
    }
)

# Words that belong to the surname that follows them ("Dela Cruz", "San Jose").
DEFAULT_SURNAME_PARTICLES: tuple[str, ...] = (
    "da",
    "de",
    "del",
    "dela",
    "delas",
    "delos",
    "di",
    "la",
    "las",
    "los",
    "san",
    "sta.",
    "sta",
    "sto.",
    "sto",
    "santa",
    "santo",
    "van",
    "von",
)


@dataclass(frozen=True)
class ExtractionConfig:
    """What the extraction engine looks for."""

    jurisdiction: str = "Silay"
    field_labels: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: DEFAULT_FIELD_LABELS
    )
    surname_particles: tuple[str, ...] = DEFAULT_SURNAME_PARTICLES


@dataclass(frozen=True)
class ExtractionResult:
    """Fields recovered from the OCR text of one identity document."""

    belongs_to_jurisdiction: bool
    identifier: str
    first_name: str
    middle_name: str
    last_name: str
    status_message: str

    @property
    def has_identifier(self) -> bool:
        return bool(self.identifier)
