"""Reading passage model."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Topic(str, Enum):
    ECONOMY = "economy"
    TECHNOLOGY = "technology"
    EDUCATION = "education"
    ENVIRONMENT = "environment"
    SOCIAL = "social"
    CULTURE = "culture"


@dataclass
class ReadingPassage:
    """AI-generated reading passage built around a set of difficult words."""

    content: str
    target_words: list[str]
    target_word_ids: list[int] = field(default_factory=list)
    topic: Topic = Topic.CULTURE
    created_at: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        if isinstance(self.topic, str):
            self.topic = Topic(self.topic)

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    @property
    def word_positions(self) -> dict[str, list[int]]:
        """1-based line numbers on which each target word appears."""
        lines = self.content.splitlines()
        positions: dict[str, list[int]] = {}
        for word in self.target_words:
            needle = word.lower()
            positions[word] = [
                number for number, line in enumerate(lines, start=1) if needle in line.lower()
            ]
        return positions
