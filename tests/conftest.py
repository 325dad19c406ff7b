import asyncio
from typing import Any

import pytest

from dto import DefinitionsResult, EnglishDefinition, JapaneseDefinitionResult
from lookup import LookupRequestError
from ranker import rank_sentences
from store import WordCollectionStore


class FakeStorage:
    """In-memory KeyValueStorage that records every write."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items = dict(items or {})
        self.writes: list[tuple[str, str]] = []

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.writes.append((key, value))
        self.items[key] = value


class FakeLookupClient:
    """
    Lookup client whose requests only resolve once `release(word)` is called.
    Seed with per-word English meanings, Japanese (definition, reading) pairs
    and raw corpus rows; words missing from a table fail with LookupRequestError.
    """

    def __init__(
        self,
        english: dict[str, list[str]] | None = None,
        japanese: dict[str, tuple[str, str]] | None = None,
        corpus: dict[str, list[dict[str, Any]]] | None = None,
        gated: bool = True,
    ):
        self.english = english or {}
        self.japanese = japanese or {}
        self.corpus = corpus or {}
        self.gated = gated
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[tuple[str, str]] = []

    def release(self, word: str) -> None:
        self._gate(word).set()

    def _gate(self, word: str) -> asyncio.Event:
        return self.gates.setdefault(word, asyncio.Event())

    async def _wait(self, service: str, word: str) -> None:
        self.calls.append((service, word))
        if self.gated:
            await self._gate(word).wait()

    async def fetch_english_definition(self, word: str) -> DefinitionsResult:
        await self._wait('jisho', word)
        if word not in self.english:
            raise LookupRequestError(f'jisho lookup failed for "{word}"')
        return DefinitionsResult(
            word=word,
            definitions=[EnglishDefinition(meaning=m) for m in self.english[word]],
        )

    async def fetch_japanese_definition(self, word: str) -> JapaneseDefinitionResult:
        await self._wait('goo', word)
        if word not in self.japanese:
            raise LookupRequestError(f'goo lookup failed for "{word}"')
        definition, reading = self.japanese[word]
        return JapaneseDefinitionResult(word=word, definition=definition, reading=reading)

    async def fetch_example_sentences(self, word: str):
        await self._wait('corpus', word)
        if word not in self.corpus:
            raise LookupRequestError(f'corpus lookup failed for "{word}"')
        return rank_sentences(self.corpus[word])


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def store(storage) -> WordCollectionStore:
    store = WordCollectionStore(storage)
    store.load()
    return store
