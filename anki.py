import requests
from typing import Any, Generic, TypedDict, TypeVar

from dto import Word, sentence_with_focus_word, source_for_sentence

ANKI_CONNECT_URL = 'http://127.0.0.1:8765'
DEFAULT_DECK = '3. Japanese::3. Vocab'
DEFAULT_NOTE_MODEL = 'ankiminer_jp'
BASE_TAGS = frozenset({'ankiminer', 'japanese', 'mined', 'native'})


T = TypeVar('T')


class AnkiResponse(TypedDict, Generic[T]):
    result: T | None
    error: Any | None


def _invoke_anki(
    action: str, url: str = ANKI_CONNECT_URL, **params: Any | None
) -> AnkiResponse[Any]:
    return requests.post(
        url,
        json={
            'version': 6,
            'action': action,
            'params': {k: v for k, v in params.items() if v is not None},
        },
    ).json()


def get_version(url: str = ANKI_CONNECT_URL) -> AnkiResponse[str]:
    return _invoke_anki('version', url)


def get_decks(url: str = ANKI_CONNECT_URL) -> AnkiResponse[list[str]]:
    return _invoke_anki('deckNames', url)


def note_tags(word: Word) -> set[str]:
    tags = set(BASE_TAGS)
    if word.meta.sentence is not None and word.meta.sentence.series is not None:
        tags.add(word.meta.sentence.series)
    return tags


def build_word_note(
    word: Word, deck: str = DEFAULT_DECK, model: str = DEFAULT_NOTE_MODEL
) -> dict[str, Any]:
    return {
        'deckName': deck,
        'modelName': model,
        'fields': {
            'Expression': sentence_with_focus_word(word),
            'Focus': word.value,
            'Reading': word.meta.reading or '',
            'EnglishDefinition': word.meta.definition_english or '',
            'JapaneseDefinition': word.meta.definition_japanese or '',
            'VocabOnlyCard': '1' if word.meta.vocab_card else '',
            'Source': source_for_sentence(word.meta.sentence),
        },
        'options': {
            'allowDuplicate': False,
            'duplicateScope': 'deck',
            'duplicateScopeOptions': {
                'deckName': deck,
                'checkChildren': False,
                'checkAllModels': False,
            },
        },
        'tags': sorted(note_tags(word)),
    }


def add_word_note(
    word: Word,
    deck: str = DEFAULT_DECK,
    model: str = DEFAULT_NOTE_MODEL,
    url: str = ANKI_CONNECT_URL,
) -> AnkiResponse[int]:
    return _invoke_anki('addNote', url, note=build_word_note(word, deck, model))
