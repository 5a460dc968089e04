"""Card model for the study queue."""

from dataclasses import dataclass


@dataclass(eq=False)
class Card:
    """One scheduled exposure of a word.

    Many cards reference the same word, so cards are compared by identity
    (``slot_id``), never by value.
    """

    slot_id: int
    word_id: int
    text: str = ""
