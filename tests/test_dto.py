from dto import (
    Collection,
    EnglishDefinition,
    Sentence,
    Word,
    WordMeta,
    format_definitions,
    sentence_with_focus_word,
    source_for_sentence,
)


def test_format_definitions_joins_meanings():
    definitions = [
        EnglishDefinition(meaning='cat'),
        EnglishDefinition(meaning='  '),
        EnglishDefinition(meaning=' feline '),
    ]

    assert format_definitions(definitions) == 'cat; feline'


def test_format_definitions_empty_is_none():
    assert format_definitions([]) is None


def test_sentence_with_focus_word_highlights_first_occurrence():
    word = Word(
        value='猫',
        meta=WordMeta(sentence=Sentence(line='猫と猫が遊ぶ', original='猫と猫が遊ぶ')),
    )

    assert sentence_with_focus_word(word) == '<b>猫</b>と猫が遊ぶ'


def test_sentence_with_focus_word_without_sentence():
    assert sentence_with_focus_word(Word(value='猫')) == '猫'


def test_sentence_with_focus_word_missing_from_line():
    word = Word(
        value='ねこ',
        meta=WordMeta(sentence=Sentence(line='猫が寝た', original='猫が寝た')),
    )

    assert sentence_with_focus_word(word) == '猫が寝た'


def test_source_for_sentence():
    assert source_for_sentence(None) == ''
    assert source_for_sentence(Sentence(line='a', original='a')) == ''
    assert (
        source_for_sentence(Sentence(line='a', original='a', series='しろくまカフェ'))
        == 'しろくまカフェ'
    )


def test_collection_uses_persisted_key_names():
    collection = Collection(
        words={
            'id-1': Word(
                value='猫',
                meta=WordMeta(
                    sentence=Sentence(line='猫だ', original='猫だ。', series='s'),
                    reading='ねこ',
                    definition_english='cat',
                    vocab_card=True,
                ),
            )
        },
        selected_id='id-1',
    )

    assert collection.to_dict() == {
        'words': {
            'id-1': {
                'value': '猫',
                'done': False,
                'meta': {
                    'sentence': {'line': '猫だ', 'original': '猫だ。', 'series': 's'},
                    'reading': 'ねこ',
                    'definitionEnglish': 'cat',
                    'definitionJapanese': None,
                    'vocabCard': True,
                },
            }
        },
        'selectedId': 'id-1',
    }
    assert Collection.from_dict(collection.to_dict()) == collection


def test_word_from_dict_tolerates_missing_fields():
    assert Word.from_dict({'value': '猫'}) == Word(value='猫', done=False, meta=WordMeta())
    assert Collection.from_dict({}) == Collection()
