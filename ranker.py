from typing import Any, Iterable

from dto import Sentence, SentencesResult


def rank_sentences(raw_sentences: Iterable[dict[str, Any]]) -> SentencesResult:
    """
    Trim corpus sentences and order them shortest first.

    `original` is fixed to the trimmed line here and never touched again, so
    user edits to `line` keep the corpus text for export. `sorted` is stable,
    so sentences of equal length keep their corpus order.
    """
    sentences = []
    for raw in raw_sentences:
        line = raw['line'].strip()
        extra = {
            k: v for k, v in raw.items() if k not in ('line', 'original', 'series')
        }
        sentences.append(
            Sentence(line=line, original=line, series=raw.get('series'), extra=extra)
        )

    return SentencesResult(results=sorted(sentences, key=lambda s: len(s.line)))
