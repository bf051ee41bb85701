"""Heuristic field extraction from the OCR text of a PWD ID card.

OCR output from phone photos is noisy: labels come in English or Filipino,
capitalisation varies, and the value sometimes sits on the same line as its
label and sometimes not. The extractor makes a single forward pass over the
lines and keeps whatever it can recover; it never raises.
"""

import re
from collections.abc import Iterable, Mapping

from app.services.extraction.models import ExtractionConfig, ExtractionResult

IDENTIFIER_PATTERN = re.compile(r"\b\d{13}\b", re.ASCII)

# Label, optional ":" or "-" separator, then the rest of the line.
_LABEL_TEMPLATE = r"(?<!\w)(?:{labels})(?!\w)\s*[:\-]?\s*([^\s:\-].*)$"

DEFAULT_CONFIG = ExtractionConfig()

_NAME_FIELDS = ("first_name", "middle_name", "last_name")


def _alternation(phrases: Iterable[str]) -> str:
    """Regex alternation of label phrases, longest first, whitespace-tolerant."""
    return "|".join(
        r"\s+".join(re.escape(word) for word in phrase.split())
        for phrase in sorted(phrases, key=len, reverse=True)
    )


def _label_pattern(phrases: Iterable[str]) -> re.Pattern[str]:
    """Compile one case-insensitive pattern matching any of the label phrases."""
    return re.compile(_LABEL_TEMPLATE.format(labels=_alternation(phrases)), re.IGNORECASE)


class FieldExtractor:
    """Extracts jurisdiction, identifier and names from raw OCR text.

    Instances are immutable once built and safe to share between requests.
    """

    def __init__(self, config: ExtractionConfig = DEFAULT_CONFIG):
        self.config = config
        self._jurisdiction_folded = config.jurisdiction.casefold()
        self._particles = frozenset(p.casefold() for p in config.surname_particles)
        self._patterns = self._compile_patterns(config.field_labels)

        all_labels = _alternation(
            {phrase for phrases in config.field_labels.values() for phrase in phrases}
        )
        # "Apelyido / Surname: ..." rows repeat the label in a second language
        self._second_label = (
            re.compile(rf"^/\s*(?:{all_labels})(?!\w)\s*[:\-]?\s*", re.IGNORECASE)
            if all_labels
            else None
        )
        self._bare_label = re.compile(rf"(?:{all_labels})", re.IGNORECASE) if all_labels else None

    @staticmethod
    def _compile_patterns(field_labels: Mapping[str, tuple[str, ...]]) -> dict[str, re.Pattern[str]]:
        return {
            name: _label_pattern(phrases)
            for name, phrases in field_labels.items()
            if phrases
        }

    def extract(self, raw_text: str | None) -> ExtractionResult:
        """
        Extract document fields from OCR text.

        Args:
            raw_text: Text as returned by the OCR provider. ``None`` is
                treated as empty.

        Returns:
            ExtractionResult, with empty strings for anything not found
        """
        text = raw_text or ""

        belongs = self._jurisdiction_folded in text.casefold()
        identifier = self._find_identifier(text)
        names = self._find_names(text.splitlines())

        return ExtractionResult(
            belongs_to_jurisdiction=belongs,
            identifier=identifier,
            first_name=names["first_name"],
            middle_name=names["middle_name"],
            last_name=names["last_name"],
            status_message=self.status_message(belongs, identifier),
        )

    def status_message(self, belongs: bool, identifier: str) -> str:
        jurisdiction = self.config.jurisdiction
        if not belongs:
            return f"Not a {jurisdiction} document."
        if identifier:
            return f"Found {jurisdiction} identifier {identifier}."
        return f"{jurisdiction} document detected but no identifier found."

    @staticmethod
    def _find_identifier(text: str) -> str:
        match = IDENTIFIER_PATTERN.search(text)
        return match.group(0) if match else ""

    def _match_label(self, field_name: str, line: str) -> str | None:
        """Return the value following a label for ``field_name``, if the line has one."""
        pattern = self._patterns.get(field_name)
        if pattern is None:
            return None
        match = pattern.search(line)
        if match is None:
            return None
        return self._clean_value(match.group(1).strip())

    def _clean_value(self, value: str) -> str | None:
        """Drop a repeated second-language label; reject values that are only labels."""
        if self._second_label is not None:
            while prefix := self._second_label.match(value):
                value = value[prefix.end():].strip()
        if not value or value.startswith("/"):
            return None
        if self._bare_label is not None and self._bare_label.fullmatch(value):
            return None
        return value

    def _find_names(self, lines: list[str]) -> dict[str, str]:
        names = dict.fromkeys(_NAME_FIELDS, "")

        for line in lines:
            labelled = False
            for field_name in _NAME_FIELDS:
                value = self._match_label(field_name, line)
                if value is not None:
                    names[field_name] = value
                    labelled = True

            # Combined "NAME:" line, only while no first/last name is known yet.
            # "MIDDLE NAME: ..." lines are not combined-name lines.
            if labelled or names["first_name"] or names["last_name"]:
                continue
            combined = self._match_label("full_name", line)
            if combined is None:
                continue
            tokens = self._split_full_name(combined)
            if len(tokens) >= 2:
                names["first_name"] = tokens[0]
                names["last_name"] = tokens[-1]
            if len(tokens) == 3:
                names["middle_name"] = tokens[1]

        return names

    def _split_full_name(self, value: str) -> list[str]:
        """Split a full name into tokens, keeping surname particles with their surname.

        The first word is always the given name, even if it looks like a particle.
        """
        words = value.split()
        if not words:
            return []

        tokens = [words[0]]
        pending: list[str] = []
        for word in words[1:]:
            pending.append(word)
            if word.casefold() not in self._particles:
                tokens.append(" ".join(pending))
                pending = []
        # Trailing particles have no surname to attach to
        tokens.extend(pending)
        return tokens


_default_extractor = FieldExtractor()


def extract(raw_text: str | None, config: ExtractionConfig | None = None) -> ExtractionResult:
    """Extract document fields using ``config`` (or the built-in defaults)."""
    if config is None or config == DEFAULT_CONFIG:
        return _default_extractor.extract(raw_text)
    return FieldExtractor(config).extract(raw_text)
