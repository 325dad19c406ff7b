from dto import Sentence
from ranker import rank_sentences


def test_rank_sentences_trims_and_sorts_by_length():
    result = rank_sentences(
        [
            {'line': '  猫が窓の外をじっと見ている。 '},
            {'line': '猫が寝た。\n'},
            {'line': '\t猫が好き'},
        ]
    )

    assert [s.line for s in result.results] == [
        '猫が好き',
        '猫が寝た。',
        '猫が窓の外をじっと見ている。',
    ]


def test_rank_sentences_sets_original_to_trimmed_line():
    result = rank_sentences([{'line': '  猫が寝た。  ', 'original': 'ignored'}])

    [sentence] = result.results
    assert sentence.original == '猫が寝た。'
    assert sentence.original == sentence.line


def test_rank_sentences_keeps_input_order_for_equal_lengths():
    raw = [
        {'line': 'ccc', 'series': 'first'},
        {'line': 'a'},
        {'line': ' bbb ', 'series': 'second'},
        {'line': 'ddd', 'series': 'third'},
        {'line': 'ee'},
    ]

    result = rank_sentences(raw)

    assert [s.line for s in result.results] == ['a', 'ee', 'ccc', 'bbb', 'ddd']
    assert [s.series for s in result.results if len(s.line) == 3] == [
        'first',
        'second',
        'third',
    ]


def test_rank_sentences_is_non_decreasing_by_length():
    lines = ['一二三四五', '一', ' 一二 ', '一二三', '一二', '一二三四', '一']

    result = rank_sentences([{'line': line} for line in lines])

    lengths = [len(s.line) for s in result.results]
    assert lengths == sorted(lengths)
    assert len(result.results) == len(lines)


def test_rank_sentences_keeps_corpus_fields():
    result = rank_sentences(
        [{'line': '猫が寝た。', 'series': 'しろくまカフェ', 'episode': 4, 'time': '00:01:02'}]
    )

    assert result.results == [
        Sentence(
            line='猫が寝た。',
            original='猫が寝た。',
            series='しろくまカフェ',
            extra={'episode': 4, 'time': '00:01:02'},
        )
    ]


def test_rank_sentences_empty():
    assert rank_sentences([]).results == []
