from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass
class Sentence:
    line: str
    original: str
    series: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            'line': self.line,
            'original': self.original,
            'series': self.series,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Sentence':
        extra = {
            k: v for k, v in data.items() if k not in ('line', 'original', 'series')
        }
        line = data['line']
        return cls(
            line=line,
            original=data.get('original', line),
            series=data.get('series'),
            extra=extra,
        )


@dataclass
class SentencesResult:
    results: list[Sentence]


@dataclass
class WordMeta:
    sentence: Sentence | None = None
    reading: str | None = None
    definition_english: str | None = None
    definition_japanese: str | None = None
    vocab_card: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            'sentence': self.sentence.to_dict() if self.sentence else None,
            'reading': self.reading,
            'definitionEnglish': self.definition_english,
            'definitionJapanese': self.definition_japanese,
            'vocabCard': self.vocab_card,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'WordMeta':
        sentence = data.get('sentence')
        return cls(
            sentence=Sentence.from_dict(sentence) if sentence else None,
            reading=data.get('reading'),
            definition_english=data.get('definitionEnglish'),
            definition_japanese=data.get('definitionJapanese'),
            vocab_card=bool(data.get('vocabCard', False)),
        )


@dataclass
class Word:
    value: str
    done: bool = False
    meta: WordMeta = field(default_factory=WordMeta)

    def to_dict(self) -> dict[str, Any]:
        return {'value': self.value, 'done': self.done, 'meta': self.meta.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Word':
        return cls(
            value=data['value'],
            done=bool(data.get('done', False)),
            meta=WordMeta.from_dict(data.get('meta') or {}),
        )


WordCollection = dict[str, Word]


@dataclass
class Collection:
    words: WordCollection = field(default_factory=dict)
    selected_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'words': {id: word.to_dict() for id, word in self.words.items()},
            'selectedId': self.selected_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'Collection':
        return cls(
            words={id: Word.from_dict(w) for id, w in (data.get('words') or {}).items()},
            selected_id=data.get('selectedId'),
        )


@dataclass
class EnglishDefinition:
    meaning: str


@dataclass
class DefinitionsResult:
    word: str
    definitions: list[EnglishDefinition]


@dataclass
class JapaneseDefinitionResult:
    word: str
    definition: str
    reading: str


def format_definitions(definitions: Sequence[EnglishDefinition]) -> str | None:
    meanings = [d.meaning.strip() for d in definitions if d.meaning.strip()]
    if not meanings:
        return None
    return '; '.join(meanings)


def sentence_with_focus_word(word: Word) -> str:
    sentence = word.meta.sentence
    if sentence is None:
        return word.value
    return sentence.line.replace(word.value, f'<b>{word.value}</b>', 1)


def source_for_sentence(sentence: Sentence | None) -> str:
    if sentence is None or sentence.series is None:
        return ''
    return sentence.series
