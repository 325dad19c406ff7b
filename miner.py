#!/usr/bin/env python3

import argparse
import asyncio
import os
import shlex
import subprocess
import sys
import tempfile
from io import TextIOWrapper

from anki import build_word_note, get_decks, get_version
from config import Settings, load_settings
from dto import Word
from log import setup_logging
from lookup import LookupClient
from sessions import WordLookups
from store import JsonFileStorage, WordCollectionStore
from workbench import Workbench


async def main(argv: list[str] | None = None):
    args = parse_args(argv)
    settings = load_settings()
    setup_logging(settings.log_level)

    store = WordCollectionStore(JsonFileStorage(settings.data_dir))
    store.load()
    lookups = WordLookups(
        LookupClient(settings.lookup_url, timeout=settings.lookup_timeout)
    )
    workbench = Workbench(store, lookups, settings)

    if args.command == 'add':
        add(store, args)
    elif args.command == 'list':
        list_words(store)
    elif args.command == 'show':
        await show(workbench, args.id)
    elif args.command == 'fill':
        word = await workbench.enrich(
            args.id, sentence_index=args.sentence, vocab_card=args.vocab
        )
        print_word(args.id, word)
    elif args.command == 'delete':
        if args.id not in store.words:
            raise Exception(f'No word with id "{args.id}"')
        store.delete_word(args.id)
        print(f'Deleted {args.id}')
    elif args.command == 'export':
        export(workbench, settings, args)


def add(store: WordCollectionStore, args: argparse.Namespace) -> None:
    if args.edit:
        values = prompt_user_for_words()
    else:
        input_file: TextIOWrapper = args.input_file
        values = read_words(input_file)

    if len(values) == 0:
        raise Exception('No words provided')

    ids = store.add_words(values)
    print(f'Added {len(ids)} words')
    for id, value in zip(ids, values):
        print(f'{id}  {value}')


def read_words(lines) -> list[str]:
    return [
        line.strip() for line in lines if not line.startswith('#') and line.strip()
    ]


def list_words(store: WordCollectionStore) -> None:
    if not store.words:
        print('No words yet, add some with "add"')
        return

    for id, word in store.words.items():
        marker = '*' if id == store.selected_word_id else ' '
        done = 'x' if word.done else ' '
        print(f'{marker} [{done}] {id}  {word.value}')


def print_word(id: str, word: Word) -> None:
    meta = word.meta
    print(f'{word.value} ({id})')
    print(f'  Reading: {meta.reading or "-"}')
    print(f'  English: {meta.definition_english or "-"}')
    print(f'  Japanese: {meta.definition_japanese or "-"}')
    print(f'  Sentence: {meta.sentence.line if meta.sentence else "-"}')
    print(f'  Vocab card: {"yes" if meta.vocab_card else "no"}')


async def show(workbench: Workbench, id: str) -> None:
    if id not in workbench.store.words:
        raise Exception(f'No word with id "{id}"')

    workbench.select(id)
    await workbench.lookups.wait()

    english = workbench.lookups.english.result
    japanese = workbench.lookups.japanese.result
    sentences = workbench.lookups.sentences.result

    print_word(id, workbench.store.words[id])
    print('Lookups:')
    print(f'  Reading: {(japanese and japanese.reading) or "-"}')
    print(f'  English: {(english and english.definition) or "-"}')
    print(f'  Japanese: {(japanese and japanese.definition) or "-"}')

    if sentences is None or sentences.sentences is None:
        print('  No example sentences available')
        return

    print(f'  {len(sentences.sentences.results)} example sentences:')
    for i, sentence in enumerate(sentences.sentences.results):
        series = f'  [{sentence.series}]' if sentence.series else ''
        print(f'  {i:>3}: {sentence.line}{series}')


def export(workbench: Workbench, settings: Settings, args: argparse.Namespace) -> None:
    if args.id not in workbench.store.words:
        raise Exception(f'No word with id "{args.id}"')

    word = workbench.store.words[args.id]

    if args.dry_run:
        print('Dry run: note')
        print(build_word_note(word, settings.deck, settings.note_model))
        return

    if get_version(settings.anki_url)['result'] is None:
        raise Exception('Anki is not running or AnkiConnect server is not accessible')

    if settings.deck not in (get_decks(settings.anki_url)['result'] or []):
        raise Exception(f'Deck "{settings.deck}" does not exist')

    note_result = workbench.export(args.id)

    if note_result['error'] is not None:
        if 'duplicate' in note_result['error']:
            print(f'Notice: skipping duplicate note for "{word.value}"')
        else:
            print(f'Error: failed to add note for "{word.value}": {note_result["error"]}')
        return

    print(f'Added note {note_result["result"]} for "{word.value}"')


def parse_args(argv: list[str] | None = None):
    parser = argparse.ArgumentParser()
    subparsers = parser.add_subparsers(dest='command', required=True)

    add_parser = subparsers.add_parser('add', help='add words to the collection')
    add_parser.add_argument(
        '--input-file', nargs='?', type=argparse.FileType('r'), default=sys.stdin
    )
    add_parser.add_argument('--edit', action='store_true')

    subparsers.add_parser('list', help='list collected words')

    show_parser = subparsers.add_parser('show', help='look up a word')
    show_parser.add_argument('id')

    fill_parser = subparsers.add_parser('fill', help='save lookups into a word')
    fill_parser.add_argument('id')
    fill_parser.add_argument('--sentence', type=int, default=None)
    fill_parser.add_argument(
        '--vocab', action=argparse.BooleanOptionalAction, default=None
    )

    delete_parser = subparsers.add_parser('delete', help='remove a word')
    delete_parser.add_argument('id')

    export_parser = subparsers.add_parser('export', help='send a word to Anki')
    export_parser.add_argument('id')
    export_parser.add_argument('--dry-run', action='store_true')

    return parser.parse_args(argv)


def prompt_user_for_words() -> list[str]:
    with tempfile.NamedTemporaryFile(delete=False, mode='w+') as temp_file:
        temp_filename = temp_file.name
        temp_file.write('# Enter one word per line\n')
        temp_file.write("# Lines starting with '#' are ignored\n\n")

    editor = os.getenv('EDITOR', 'vi')

    editor_cmd = shlex.split(editor)  # Split the editor command and arguments
    editor_cmd.append(temp_filename)

    subprocess.call(editor_cmd)

    with open(temp_filename, 'r') as temp_file:
        lines = temp_file.readlines()

    os.remove(temp_filename)

    return read_words(lines)


def run():
    asyncio.run(main())


if __name__ == '__main__':
    run()
