import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from dto import SentencesResult, format_definitions
from lookup import LookupClient, LookupRequestError

logger = logging.getLogger(__name__)


class LookupState(Enum):
    IDLE = 'idle'
    PENDING = 'pending'
    SETTLED = 'settled'


@dataclass
class LookupResult:
    word: str
    finished: bool = False


@dataclass
class EnglishDefinitionLookup(LookupResult):
    definition: str | None = None


@dataclass
class JapaneseDefinitionLookup(LookupResult):
    definition: str | None = None
    reading: str | None = None


@dataclass
class SentencesLookup(LookupResult):
    sentences: SentencesResult | None = None


T = TypeVar('T', bound=LookupResult)


class LookupSession(ABC, Generic[T]):
    """
    Tracks the lookup for the currently selected word of one lookup kind.

    Every `select` bumps a generation counter; a lookup only settles if its
    generation is still current when it resolves. Superseded requests are
    not aborted, their results are dropped.
    """

    kind: str

    def __init__(self, client: LookupClient):
        self.client = client
        self.word: str | None = None
        self.result: T | None = None
        self.task: asyncio.Task[None] | None = None
        self._generation = 0

    @property
    def state(self) -> LookupState:
        if self.result is None:
            return LookupState.IDLE
        if self.result.finished:
            return LookupState.SETTLED
        return LookupState.PENDING

    def select(self, word: str | None) -> asyncio.Task[None] | None:
        self._generation += 1
        self.word = word

        if word is None:
            self.result = None
            self.task = None
            return None

        self.result = self.pending(word)
        self.task = asyncio.create_task(self._settle(word, self._generation))
        return self.task

    async def _settle(self, word: str, generation: int) -> None:
        try:
            result = await self.fetch(word)
        except LookupRequestError as e:
            logger.warning('%s lookup for "%s" failed: %s', self.kind, word, e)
            result = self.failed(word)

        if generation != self._generation:
            logger.debug('Discarding stale %s result for "%s"', self.kind, word)
            return

        self.result = result

    @abstractmethod
    def pending(self, word: str) -> T:
        pass

    @abstractmethod
    def failed(self, word: str) -> T:
        pass

    @abstractmethod
    async def fetch(self, word: str) -> T:
        pass


class EnglishDefinitionSession(LookupSession[EnglishDefinitionLookup]):
    kind = 'English definition'

    def pending(self, word: str) -> EnglishDefinitionLookup:
        return EnglishDefinitionLookup(word=word)

    def failed(self, word: str) -> EnglishDefinitionLookup:
        return EnglishDefinitionLookup(word=word, definition=None, finished=True)

    async def fetch(self, word: str) -> EnglishDefinitionLookup:
        res = await self.client.fetch_english_definition(word)
        return EnglishDefinitionLookup(
            word=word, definition=format_definitions(res.definitions), finished=True
        )


class JapaneseDefinitionSession(LookupSession[JapaneseDefinitionLookup]):
    kind = 'Japanese definition'

    def pending(self, word: str) -> JapaneseDefinitionLookup:
        return JapaneseDefinitionLookup(word=word)

    def failed(self, word: str) -> JapaneseDefinitionLookup:
        return JapaneseDefinitionLookup(word=word, finished=True)

    async def fetch(self, word: str) -> JapaneseDefinitionLookup:
        res = await self.client.fetch_japanese_definition(word)
        return JapaneseDefinitionLookup(
            word=word, definition=res.definition, reading=res.reading, finished=True
        )


class SentencesSession(LookupSession[SentencesLookup]):
    kind = 'sentences'

    def pending(self, word: str) -> SentencesLookup:
        return SentencesLookup(word=word)

    def failed(self, word: str) -> SentencesLookup:
        return SentencesLookup(word=word, finished=True)

    async def fetch(self, word: str) -> SentencesLookup:
        res = await self.client.fetch_example_sentences(word)
        return SentencesLookup(word=word, sentences=res, finished=True)


class WordLookups:
    def __init__(self, client: LookupClient):
        self.english = EnglishDefinitionSession(client)
        self.japanese = JapaneseDefinitionSession(client)
        self.sentences = SentencesSession(client)

    @property
    def sessions(self) -> list[LookupSession]:
        return [self.english, self.japanese, self.sentences]

    def select(self, word: str | None) -> None:
        for session in self.sessions:
            session.select(word)

    async def wait(self) -> None:
        tasks = [s.task for s in self.sessions if s.task is not None]
        if tasks:
            await asyncio.gather(*tasks)
