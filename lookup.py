import asyncio
import logging
from typing import Any
from urllib.parse import quote

import requests

from dto import (
    DefinitionsResult,
    EnglishDefinition,
    JapaneseDefinitionResult,
    SentencesResult,
)
from ranker import rank_sentences

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_URL = 'http://localhost:5555'


class LookupRequestError(Exception):
    pass


def _text(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f'"{field}" should be a string, got {type(value).__name__}')
    return value


class LookupClient:
    def __init__(self, base_url: str = DEFAULT_LOOKUP_URL, timeout: float | None = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    async def fetch_english_definition(self, word: str) -> DefinitionsResult:
        body = await self._get('jisho', word)
        try:
            return DefinitionsResult(
                word=_text(body['word'], 'word'),
                definitions=[
                    EnglishDefinition(meaning=_text(d['meaning'], 'meaning'))
                    for d in body['definitions']
                ],
            )
        except (KeyError, TypeError) as e:
            raise LookupRequestError(f'Malformed dictionary response for "{word}"') from e

    async def fetch_japanese_definition(self, word: str) -> JapaneseDefinitionResult:
        body = await self._get('goo', word)
        try:
            return JapaneseDefinitionResult(
                word=_text(body['word'], 'word'),
                definition=_text(body['definition'], 'definition'),
                reading=_text(body['reading'], 'reading'),
            )
        except (KeyError, TypeError) as e:
            raise LookupRequestError(f'Malformed dictionary response for "{word}"') from e

    async def fetch_example_sentences(self, word: str) -> SentencesResult:
        body = await self._get('corpus', word)
        try:
            return rank_sentences(body['results'])
        except (KeyError, TypeError, AttributeError) as e:
            raise LookupRequestError(f'Malformed corpus response for "{word}"') from e

    async def _get(self, service: str, word: str) -> Any:
        url = f'{self.base_url}/{service}/{quote(word, safe="")}'
        logger.debug('GET %s', url)
        try:
            return await asyncio.to_thread(self._get_json, url)
        except (requests.RequestException, ValueError) as e:
            raise LookupRequestError(f'{service} lookup failed for "{word}": {e}') from e

    def _get_json(self, url: str) -> Any:
        # No shared Session: the three lookups run in parallel worker threads.
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
