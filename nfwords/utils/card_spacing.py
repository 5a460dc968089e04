"""Reordering of study cards so one word is not shown many times in a row."""

from collections.abc import Sequence

from nfwords.models import Card


def space_cards(cards: Sequence[Card], buffer_cap: int = 3) -> list[Card]:
    """Reorder cards so that no word runs longer than ``buffer_cap`` cards.

    Cards are scanned left to right. A card that would extend its word's
    trailing run past the cap is held back in a lookahead buffer and placed
    as soon as another word breaks the run, oldest held card first. Only
    when nothing but cards of the trailing word remain are they appended
    regardless of the cap.

    Args:
        cards: Cards in their scheduled order
        buffer_cap: Longest allowed run of one word

    Returns:
        A new list containing every input card exactly once

    Example:
        A A A A B B -> A A A B A B
    """
    if buffer_cap < 1:
        raise ValueError(f"buffer_cap must be at least 1, got {buffer_cap}")

    output: list[Card] = []
    held: list[Card] = []

    for card in cards:
        if _fits(output, card, buffer_cap):
            output.append(card)
        else:
            held.append(card)
        _release(output, held, buffer_cap)

    # Whatever is still held belongs to the trailing word.
    output.extend(held)
    return output


def verify_spacing(original: Sequence[Card], spaced: Sequence[Card]) -> bool:
    """Check that ``spaced`` holds exactly the cards of ``original``.

    Cards are compared by identity, so two cards of the same word are
    never mistaken for one another.
    """
    if len(original) != len(spaced):
        return False
    original_ids = {id(card) for card in original}
    spaced_ids = {id(card) for card in spaced}
    return original_ids == spaced_ids and len(spaced_ids) == len(spaced)


def longest_run(cards: Sequence[Card]) -> int:
    """Length of the longest run of consecutive cards for the same word."""
    longest = 0
    current = 0
    previous: int | None = None
    for card in cards:
        current = current + 1 if card.word_id == previous else 1
        previous = card.word_id
        longest = max(longest, current)
    return longest


def _trailing_run(output: list[Card], word_id: int) -> int:
    run = 0
    for card in reversed(output):
        if card.word_id != word_id:
            break
        run += 1
    return run


def _fits(output: list[Card], card: Card, buffer_cap: int) -> bool:
    return _trailing_run(output, card.word_id) < buffer_cap


def _release(output: list[Card], held: list[Card], buffer_cap: int) -> None:
    """Move held cards to the output while any of them fits."""
    placed = True
    while held and placed:
        placed = False
        for index, card in enumerate(held):
            if _fits(output, card, buffer_cap):
                output.append(held.pop(index))
                placed = True
                break
