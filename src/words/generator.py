"""LLM-backed word generation with caching and a curated fallback."""

from __future__ import annotations

import asyncio
import logging
import random
import re
import time
from typing import Callable, Literal, Protocol

import httpx

from .curated import get_balanced_words

logger = logging.getLogger(__name__)

WordOrigin = Literal["ai", "curated"]

MAX_WORD_LENGTH = 20

PROMPT_TEMPLATE = """Generate exactly {count} soccer/football terms ONLY for a Codenames word game.

Distribution:
- Players: at most 30%, mixing well-known, lesser-known and retired players
- Teams/Clubs: 20%
- Stadiums: 15%
- Positions/Roles: 15%
- Competitions: 10%
- Individual prizes: 10%

Requirements:
- Only authentic soccer/football terms, no other sports
- Each term is 1-3 words
- ALL CAPS
- No duplicates

Format as a comma-separated list only:"""


class WordSource(Protocol):
    """Anything that can supply board words before a game is created."""

    async def get_words(self, count: int = 25) -> tuple[list[str], WordOrigin]:
        ...


class CuratedWordSource:
    """Word source backed only by the curated bank."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    async def get_words(self, count: int = 25) -> tuple[list[str], WordOrigin]:
        return get_balanced_words(count, self.rng), "curated"


def parse_word_list(content: str, limit: int | None = None) -> list[str]:
    """
    Parse a comma-separated model response into clean upper-case words.

    Punctuation is stripped, blank and over-long entries dropped and
    duplicates removed, keeping first occurrence order.
    """
    words: list[str] = []
    for raw in content.split(","):
        word = re.sub(r"[^\w\s]", "", raw.strip().upper())
        word = " ".join(word.split())
        if not word or len(word) > MAX_WORD_LENGTH:
            continue
        if word not in words:
            words.append(word)
    if limit is not None:
        words = words[:limit]
    return words


class WordGenerator:
    """Generate themed words through an OpenAI-compatible chat endpoint.

    Results are cached for ``cache_ttl_seconds``; with no API key, or when the
    request fails, words come from the curated bank instead.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4o-mini",
        cache_ttl_seconds: float = 300.0,
        temperature: float = 0.7,
        max_retries: int = 3,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.cache_ttl_seconds = cache_ttl_seconds
        self.temperature = temperature
        self.max_retries = max_retries
        self.rng = rng or random.Random()
        self._clock = clock
        self._cache: list[str] = []
        self._last_generated: float | None = None

    def clear_cache(self) -> None:
        self._cache = []
        self._last_generated = None
        logger.info("Word cache cleared")

    def _cache_fresh(self, count: int) -> bool:
        if self._last_generated is None or len(self._cache) < count:
            return False
        return (self._clock() - self._last_generated) < self.cache_ttl_seconds

    async def generate(self, count: int = 50) -> list[str]:
        """Ask the model for ``count`` words. Raises RuntimeError on failure."""
        if not self.api_key:
            raise RuntimeError("No API key configured for word generation")

        last_error: Exception | None = None
        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        f"{self.base_url}/chat/completions",
                        headers={
                            "Authorization": f"Bearer {self.api_key}",
                            "Content-Type": "application/json",
                        },
                        json={
                            "model": self.model,
                            "messages": [
                                {"role": "user", "content": PROMPT_TEMPLATE.format(count=count)},
                            ],
                            "temperature": self.temperature,
                            "max_tokens": 1000,
                        },
                        timeout=60.0,
                    )

                if response.status_code >= 500 or response.status_code == 429:
                    last_error = RuntimeError(
                        f"Word API error ({response.status_code}): {response.text}"
                    )
                    if attempt < self.max_retries - 1:
                        wait_time = 2 ** attempt
                        logger.warning(
                            f"Word API error {response.status_code}, retrying in {wait_time}s "
                            f"(attempt {attempt + 1}/{self.max_retries})"
                        )
                        await asyncio.sleep(wait_time)
                        continue
                    raise last_error
                if response.status_code != 200:
                    raise RuntimeError(f"Word API error ({response.status_code}): {response.text}")

                data = response.json()
                break
            except httpx.TransportError as e:
                last_error = e
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(
                        f"Network error ({type(e).__name__}), retrying in {wait_time}s "
                        f"(attempt {attempt + 1}/{self.max_retries})"
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise RuntimeError(f"Network error after {self.max_retries} attempts: {e}") from e
        else:
            raise RuntimeError(f"Failed after {self.max_retries} attempts") from last_error

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise RuntimeError(f"Malformed response from word API: {data!r:.200}") from e
        if not content:
            raise RuntimeError("Empty response from word API")

        words = parse_word_list(content, limit=count)
        logger.info(f"Generated {len(words)} words with {self.model}")
        return words

    async def get_words(self, count: int = 25) -> tuple[list[str], WordOrigin]:
        """Return ``count`` distinct words and where they came from."""
        if self._cache_fresh(count):
            logger.info("Using cached generated words")
            return self.rng.sample(self._cache, count), "ai"

        if not self.api_key:
            logger.warning("No word API key configured, using curated words")
            return get_balanced_words(count, self.rng), "curated"

        try:
            generated = await self.generate(max(50, count * 2))
        except (RuntimeError, ValueError, httpx.HTTPError) as e:
            logger.warning(f"Word generation failed, using curated words: {e}")
            return get_balanced_words(count, self.rng), "curated"

        if len(generated) < count:
            logger.warning(
                f"Word API returned {len(generated)} usable words, need {count}; using curated words"
            )
            return get_balanced_words(count, self.rng), "curated"

        self._cache = generated
        self._last_generated = self._clock()
        return self.rng.sample(generated, count), "ai"
