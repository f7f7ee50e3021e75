"""Tests for the curated word bank and the word generator."""

from __future__ import annotations

import random
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from src.words import (
    WORD_BANK, CuratedWordSource, WordGenerator, get_all_words,
    get_balanced_words, get_random_words, get_words_by_category, parse_word_list,
    validate_word_list,
)
from src.words import generator as generator_module


# ============================================================================
# Curated bank
# ============================================================================

class TestCuratedWords:

    def test_balanced_words_are_distinct(self):
        words = get_balanced_words(25, random.Random(1))
        assert len(words) == 25
        assert len(set(words)) == 25

    def test_balanced_words_cover_every_category(self):
        words = set(get_balanced_words(25, random.Random(2)))
        for category_words in WORD_BANK.values():
            assert words & set(category_words)

    def test_seeded_sampling_is_reproducible(self):
        assert get_balanced_words(25, random.Random(5)) == get_balanced_words(25, random.Random(5))

    def test_large_request_tops_up_from_bank(self):
        count = len(WORD_BANK) * 14
        words = get_balanced_words(count, random.Random(3))
        assert len(words) == count
        assert len(set(words)) == count

    def test_random_words(self):
        words = get_random_words(25, random.Random(4))
        assert len(set(words)) == 25
        assert set(words) <= set(get_all_words())

    def test_words_by_category(self):
        assert get_words_by_category("stadiums") == WORD_BANK["stadiums"]
        assert get_words_by_category("cricket") == []

    def test_random_words_too_many(self):
        with pytest.raises(ValueError):
            get_random_words(len(get_all_words()) + 1)

    def test_validate_word_list(self):
        report = validate_word_list(["A", "B", "A", "C", "B"])
        assert report["total"] == 5
        assert report["unique"] == 3
        assert report["duplicates"] == 2
        assert report["duplicate_words"] == ["A", "B"]
        assert report["is_valid"] is False


# ============================================================================
# Parsing
# ============================================================================

class TestParseWordList:

    def test_cleans_and_dedupes(self):
        content = "messi, Ballon d'Or ,  ,WEMBLEY, messi, a very very long stadium name here"
        assert parse_word_list(content) == ["MESSI", "BALLON DOR", "WEMBLEY"]

    def test_limit(self):
        assert parse_word_list("A, B, C", limit=2) == ["A", "B"]


# ============================================================================
# Generator
# ============================================================================

def _response(status_code: int, content: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = content
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    return response


def _patch_client(monkeypatch: pytest.MonkeyPatch, *responses) -> AsyncMock:
    post = AsyncMock(side_effect=list(responses))
    client = MagicMock()
    client.post = post
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    monkeypatch.setattr(generator_module.httpx, "AsyncClient", MagicMock(return_value=client))
    monkeypatch.setattr(generator_module.asyncio, "sleep", AsyncMock())
    return post


GENERATED = ", ".join(f"TERM {i}" for i in range(60))


class TestWordGenerator:

    @pytest.mark.asyncio
    async def test_no_api_key_falls_back(self):
        generator = WordGenerator(api_key=None, rng=random.Random(1))
        words, origin = await generator.get_words(25)

        assert origin == "curated"
        assert len(set(words)) == 25

    @pytest.mark.asyncio
    async def test_generates_and_caches(self, monkeypatch):
        post = _patch_client(monkeypatch, _response(200, GENERATED))
        now = [1000.0]
        generator = WordGenerator(api_key="k", rng=random.Random(1), clock=lambda: now[0])

        words, origin = await generator.get_words(25)
        assert origin == "ai"
        assert len(set(words)) == 25
        assert all(w.startswith("TERM ") for w in words)

        now[0] += 60
        _, origin = await generator.get_words(25)
        assert origin == "ai"
        assert post.await_count == 1

        request = post.await_args
        assert request.kwargs["headers"]["Authorization"] == "Bearer k"
        assert request.kwargs["json"]["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_cache_expires(self, monkeypatch):
        post = _patch_client(monkeypatch, _response(200, GENERATED), _response(200, GENERATED))
        now = [0.0]
        generator = WordGenerator(api_key="k", cache_ttl_seconds=300, clock=lambda: now[0])

        await generator.get_words(25)
        now[0] += 301
        await generator.get_words(25)

        assert post.await_count == 2

    @pytest.mark.asyncio
    async def test_clear_cache(self, monkeypatch):
        post = _patch_client(monkeypatch, _response(200, GENERATED), _response(200, GENERATED))
        generator = WordGenerator(api_key="k")

        await generator.get_words(25)
        generator.clear_cache()
        await generator.get_words(25)

        assert post.await_count == 2

    @pytest.mark.asyncio
    async def test_retries_server_errors(self, monkeypatch):
        post = _patch_client(monkeypatch, _response(503, "busy"), _response(200, GENERATED))
        generator = WordGenerator(api_key="k")

        words, origin = await generator.get_words(25)

        assert origin == "ai"
        assert post.await_count == 2

    @pytest.mark.asyncio
    async def test_client_error_falls_back(self, monkeypatch):
        post = _patch_client(monkeypatch, _response(401, "bad key"))
        generator = WordGenerator(api_key="k")

        words, origin = await generator.get_words(25)

        assert origin == "curated"
        assert len(words) == 25
        assert post.await_count == 1

    @pytest.mark.asyncio
    async def test_network_errors_fall_back(self, monkeypatch):
        error = httpx.ConnectError("down")
        post = _patch_client(monkeypatch, error, error, error)
        generator = WordGenerator(api_key="k", max_retries=3)

        _, origin = await generator.get_words(25)

        assert origin == "curated"
        assert post.await_count == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        httpx.RemoteProtocolError("peer closed"),
        httpx.WriteError("broken pipe"),
    ])
    async def test_other_transport_errors_fall_back(self, monkeypatch, error):
        post = _patch_client(monkeypatch, error, error)
        generator = WordGenerator(api_key="k", max_retries=2)

        words, origin = await generator.get_words(25)

        assert origin == "curated"
        assert len(words) == 25
        assert post.await_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"choices": []},
        {"choices": [{"message": None}]},
        {"error": "overloaded"},
    ])
    async def test_malformed_response_falls_back(self, monkeypatch, payload):
        response = _response(200)
        response.json.return_value = payload
        _patch_client(monkeypatch, response)
        generator = WordGenerator(api_key="k")

        words, origin = await generator.get_words(25)

        assert origin == "curated"
        assert len(set(words)) == 25

    @pytest.mark.asyncio
    async def test_too_few_words_fall_back(self, monkeypatch):
        _patch_client(monkeypatch, _response(200, "ONE, TWO, THREE"))
        generator = WordGenerator(api_key="k")

        _, origin = await generator.get_words(25)

        assert origin == "curated"


class TestCuratedWordSource:

    @pytest.mark.asyncio
    async def test_get_words(self):
        words, origin = await CuratedWordSource(random.Random(1)).get_words(25)
        assert origin == "curated"
        assert len(set(words)) == 25
