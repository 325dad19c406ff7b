import json
import logging
import os
import uuid
from pathlib import Path
from typing import Protocol, Sequence

from dto import Collection, Word, WordCollection

logger = logging.getLogger(__name__)

COLLECTION_KEY = 'collection'


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class JsonFileStorage:
    """One file per slot under `directory`, replaced atomically on write."""

    def __init__(self, directory: Path):
        self.directory = directory

    def _path(self, key: str) -> Path:
        return self.directory / f'{key}.json'

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp_path = path.with_suffix('.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            f.write(value)
        os.replace(tmp_path, path)


class WordCollectionStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.collection = Collection()

    @property
    def words(self) -> WordCollection:
        return self.collection.words

    @property
    def selected_word_id(self) -> str | None:
        return self.collection.selected_id

    @property
    def selected_word(self) -> Word | None:
        if self.collection.selected_id is None:
            return None
        return self.collection.words.get(self.collection.selected_id)

    def load(self) -> None:
        cached = self.storage.get_item(COLLECTION_KEY)
        if cached is None:
            self.collection = Collection()
            return

        data = json.loads(cached)
        if not isinstance(data, dict):
            raise ValueError(
                f'Persisted collection should be a JSON object, got {type(data).__name__}'
            )

        collection = Collection.from_dict(data)
        if collection.selected_id is None:
            collection.selected_id = next(iter(collection.words), None)

        logger.info('Loaded %d words', len(collection.words))
        self.collection = collection

    def add_words(self, raw_values: Sequence[str]) -> list[str]:
        new_words = {str(uuid.uuid4()): Word(value=value) for value in raw_values}
        self._persist(
            Collection(
                words={**self.collection.words, **new_words},
                selected_id=self.collection.selected_id,
            )
        )
        return list(new_words)

    def update_word(self, word: Word, id: str) -> None:
        if id not in self.collection.words:
            logger.debug('Ignoring update for unknown word id %s', id)
            return

        self._persist(
            Collection(
                words={**self.collection.words, id: word},
                selected_id=self.collection.selected_id,
            )
        )

    def delete_word(self, id: str) -> None:
        words = {k: v for k, v in self.collection.words.items() if k != id}
        ids = list(words)
        default_selected_id = ids[-1] if ids else None

        self._persist(
            Collection(
                words=words,
                selected_id=(
                    default_selected_id
                    if self.collection.selected_id == id
                    else self.collection.selected_id
                ),
            )
        )

    def set_selected_word_id(self, id: str | None) -> None:
        # In memory only; the selection is written with the next mutation.
        self.collection = Collection(words=self.collection.words, selected_id=id)

    def _persist(self, collection: Collection) -> None:
        self.storage.set_item(
            COLLECTION_KEY, json.dumps(collection.to_dict(), ensure_ascii=False)
        )
        self.collection = collection
