"""Client for generating reading passages with a DeepSeek-compatible API."""

import logging
from collections.abc import Callable
from datetime import date

import requests

from nfwords.config import NFWordsConfig
from nfwords.exceptions import PassageGenerationError, QuotaExceededError
from nfwords.models import ReadingPassage, Topic

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an English teacher writing reading material for vocabulary learners."
)

TOPIC_KEYWORDS: dict[Topic, tuple[str, ...]] = {
    Topic.ECONOMY: ("economy", "economic", "market", "finance", "trade"),
    Topic.TECHNOLOGY: ("technology", "digital", "computer", "internet", "innovation"),
    Topic.EDUCATION: ("education", "student", "school", "university", "learning"),
    Topic.ENVIRONMENT: ("environment", "climate", "pollution", "ecology", "energy"),
    Topic.SOCIAL: ("society", "social", "community", "culture", "population"),
}


def detect_topic(content: str) -> Topic:
    """Guess the passage topic from keywords, defaulting to culture."""
    lowered = content.lower()
    for topic, keywords in TOPIC_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return topic
    return Topic.CULTURE


def build_prompt(words: list[str]) -> str:
    """Prompt asking for a short academic passage using every word."""
    word_list = ", ".join(words)
    return (
        "Write an English reading passage of 300-400 words in an academic style. "
        f"The passage must naturally use each of the following words: {word_list}. "
        "Use a single coherent topic, do not add a title and do not explain the words."
    )


class PassageService:
    """Generates reading passages around a learner's difficult words.

    Requests are limited per calendar day: ``max_requests_per_day`` API calls
    and ``max_articles_per_day`` successful passages.
    """

    def __init__(self, config: NFWordsConfig, today: Callable[[], date] = date.today):
        self.config = config
        self._today = today
        self._quota_date: date | None = None
        self._requests_today = 0
        self._articles_today = 0

    def is_configured(self) -> bool:
        """Check if an API key is set."""
        return bool(self.config.deepseek_api_key)

    @property
    def remaining_articles(self) -> int:
        self._roll_quota()
        return max(self.config.max_articles_per_day - self._articles_today, 0)

    def generate_reading_passage(
        self, words: list[str], word_ids: list[int] | None = None
    ) -> ReadingPassage:
        """Request a passage that uses all of ``words``.

        Args:
            words: Target words to include
            word_ids: Ids of the target words, stored on the passage

        Returns:
            The generated passage

        Raises:
            QuotaExceededError: If today's request or article quota is used up
            PassageGenerationError: If the service is not configured, the
                request fails or the response cannot be decoded
        """
        if not words:
            raise PassageGenerationError("No target words given")
        if not self.is_configured():
            raise PassageGenerationError("DeepSeek API key is not configured")

        self._roll_quota()
        if self._requests_today >= self.config.max_requests_per_day:
            raise QuotaExceededError(
                f"Daily request limit of {self.config.max_requests_per_day} reached"
            )
        if self._articles_today >= self.config.max_articles_per_day:
            raise QuotaExceededError(
                f"Daily passage limit of {self.config.max_articles_per_day} reached"
            )

        self._requests_today += 1
        try:
            response = requests.post(
                self.config.deepseek_api_url,
                headers={
                    "Authorization": f"Bearer {self.config.deepseek_api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.config.deepseek_model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": build_prompt(words)},
                    ],
                    "temperature": 0.7,
                },
                timeout=self.config.deepseek_timeout,
            )
        except requests.exceptions.Timeout as e:
            raise PassageGenerationError("Reading passage request timed out") from e
        except requests.RequestException as e:
            raise PassageGenerationError(f"Reading passage request failed: {e}") from e

        if response.status_code != 200:
            raise PassageGenerationError(
                f"Reading passage API returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            content = response.json()["choices"][0]["message"]["content"].strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise PassageGenerationError("Could not decode reading passage response") from e

        self._articles_today += 1
        passage = ReadingPassage(
            content=content,
            target_words=list(words),
            target_word_ids=list(word_ids or []),
            topic=detect_topic(content),
        )
        logger.info(
            f"Generated {passage.topic.value} passage with {passage.word_count} words "
            f"for {len(words)} target words"
        )
        return passage

    def _roll_quota(self) -> None:
        today = self._today()
        if self._quota_date != today:
            self._quota_date = today
            self._requests_today = 0
            self._articles_today = 0
