"""Service for loading vocabulary pools from JSONL files."""

import json
import logging
from pathlib import Path

from nfwords.exceptions import WordPoolError
from nfwords.models import Word

logger = logging.getLogger(__name__)

# Used when no pack file is available so a session can still run.
DEFAULT_SAMPLE_WORDS = [
    ("abandon", "v.", "放弃"),
    ("abstract", "adj.", "抽象的"),
    ("accommodate", "v.", "容纳"),
    ("accumulate", "v.", "积累"),
    ("adequate", "adj.", "足够的"),
    ("advocate", "v.", "提倡"),
    ("allocate", "v.", "分配"),
    ("ambiguous", "adj.", "模棱两可的"),
    ("anticipate", "v.", "预期"),
    ("arbitrary", "adj.", "任意的"),
    ("assess", "v.", "评估"),
    ("coherent", "adj.", "连贯的"),
    ("compensate", "v.", "补偿"),
    ("comprehensive", "adj.", "全面的"),
    ("constrain", "v.", "限制"),
    ("contradict", "v.", "反驳"),
    ("deteriorate", "v.", "恶化"),
    ("diminish", "v.", "减少"),
    ("elaborate", "adj.", "详尽的"),
    ("empirical", "adj.", "经验主义的"),
    ("facilitate", "v.", "促进"),
    ("fluctuate", "v.", "波动"),
    ("hypothesis", "n.", "假设"),
    ("implement", "v.", "实施"),
    ("inevitable", "adj.", "不可避免的"),
    ("integrate", "v.", "整合"),
    ("mitigate", "v.", "减轻"),
    ("paradigm", "n.", "范例"),
    ("plausible", "adj.", "貌似合理的"),
    ("preliminary", "adj.", "初步的"),
]


class WordPoolService:
    """Provides the ordered word pool of a vocabulary pack.

    Pack files are JSON Lines with one word per line::

        {"wid": 1, "w": "abandon", "tr": [["v.", "放弃"]], "ph": "əˈbændən"}

    Blank lines are ignored. Word order in the file is pool order.
    """

    def __init__(self, pack_path: Path | None = None):
        """Initialize the word pool service.

        Args:
            pack_path: Path to a JSONL pack file, or None for the sample pool.
        """
        self._pack_path = pack_path
        self._words: list[Word] = []
        self._by_id: dict[int, Word] = {}
        self._loaded = False

    def load(self) -> None:
        """Load the pack file, or the sample pool if there is none.

        Raises:
            WordPoolError: If the pack file cannot be read or a line is invalid.
        """
        if self._pack_path is None:
            logger.info("No word pack configured, using the built-in sample words")
            self._set_words(self.default_words())
            return

        self._set_words(self._read_pack(self._pack_path))
        logger.info(f"Loaded {len(self._words)} words from {self._pack_path.name}")

    def is_available(self) -> bool:
        """Check if the service has been loaded."""
        return self._loaded

    @property
    def words(self) -> list[Word]:
        return list(self._words)

    @property
    def word_ids(self) -> list[int]:
        return [word.id for word in self._words]

    def get_word(self, word_id: int) -> Word | None:
        return self._by_id.get(word_id)

    def lookup_text(self, word_id: int) -> str | None:
        """Display text of a word; suitable as a classifier word lookup."""
        word = self._by_id.get(word_id)
        return word.text if word else None

    @staticmethod
    def default_words() -> list[Word]:
        return [
            Word(id=index, text=text, translations=[(pos, meaning)])
            for index, (text, pos, meaning) in enumerate(DEFAULT_SAMPLE_WORDS, start=1)
        ]

    def _set_words(self, words: list[Word]) -> None:
        self._words = words
        self._by_id = {word.id: word for word in words}
        self._loaded = True

    @staticmethod
    def _read_pack(path: Path) -> list[Word]:
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise WordPoolError(f"Cannot read word pack {path}: {e}") from e

        words = []
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                data = json.loads(line)
                words.append(
                    Word(
                        id=int(data["wid"]),
                        text=str(data["w"]),
                        phonetic=data.get("ph") or "",
                        translations=[
                            (str(pos), str(meaning)) for pos, meaning in data.get("tr", [])
                        ],
                        frequency=int(data.get("freq", 0)),
                    )
                )
            except (ValueError, KeyError, TypeError) as e:
                raise WordPoolError(f"Invalid word on line {line_number} of {path}: {e}") from e
        return words
