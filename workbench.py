import logging
from dataclasses import replace

from anki import AnkiResponse, add_word_note
from config import Settings
from dto import Word
from sessions import WordLookups
from store import WordCollectionStore

logger = logging.getLogger(__name__)


class UnknownWordError(KeyError):
    pass


class Workbench:
    def __init__(
        self, store: WordCollectionStore, lookups: WordLookups, settings: Settings
    ):
        self.store = store
        self.lookups = lookups
        self.settings = settings

    def _word(self, id: str) -> Word:
        word = self.store.words.get(id)
        if word is None:
            raise UnknownWordError(f'No word with id "{id}"')
        return word

    def select(self, id: str | None) -> None:
        self.store.set_selected_word_id(id)
        word = self.store.selected_word
        self.lookups.select(word.value if word is not None else None)

    async def enrich(
        self,
        id: str,
        sentence_index: int | None = None,
        vocab_card: bool | None = None,
    ) -> Word:
        word = self._word(id)
        if self.store.selected_word_id != id or self.lookups.english.word != word.value:
            self.select(id)
        await self.lookups.wait()

        english = self.lookups.english.result
        japanese = self.lookups.japanese.result
        sentences = self.lookups.sentences.result

        meta = word.meta
        if english is not None and english.definition is not None:
            meta = replace(meta, definition_english=english.definition)
        if japanese is not None:
            if japanese.definition is not None:
                meta = replace(meta, definition_japanese=japanese.definition)
            if japanese.reading is not None:
                meta = replace(meta, reading=japanese.reading)
        if sentence_index is not None:
            found = (
                sentences.sentences.results
                if sentences is not None and sentences.sentences is not None
                else []
            )
            if not 0 <= sentence_index < len(found):
                raise IndexError(
                    f'Sentence {sentence_index} out of range for "{word.value}", '
                    f'{len(found)} example sentences available'
                )
            meta = replace(meta, sentence=found[sentence_index])
        if vocab_card is not None:
            meta = replace(meta, vocab_card=vocab_card)

        enriched = replace(word, meta=meta)
        self.store.update_word(enriched, id)
        return enriched

    def export(self, id: str) -> AnkiResponse[int]:
        word = self._word(id)
        response = add_word_note(
            word,
            deck=self.settings.deck,
            model=self.settings.note_model,
            url=self.settings.anki_url,
        )

        if response['error'] is None:
            logger.info('Exported "%s" as note %s', word.value, response['result'])
            self.store.update_word(replace(word, done=True), id)

        return response
