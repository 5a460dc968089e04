"""Vocabulary word model."""

from dataclasses import dataclass, field


@dataclass
class Word:
    """A word from a vocabulary pack."""

    id: int
    text: str
    phonetic: str = ""
    translations: list[tuple[str, str]] = field(default_factory=list)
    frequency: int = 0

    @property
    def primary_meaning(self) -> str:
        """First translation formatted as ``pos. meaning``, or empty."""
        if not self.translations:
            return ""
        pos, meaning = self.translations[0]
        return f"{pos} {meaning}".strip()
