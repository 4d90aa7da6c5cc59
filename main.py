"""CLI entrypoint for the daily arrow-word puzzle."""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path
from typing import List, Optional

from arrowword.core.constants import NavAction
from arrowword.core.exceptions import AuthoringError, PuzzleError
from arrowword.core.models import Puzzle
from arrowword.engine.authoring import PuzzleEditor
from arrowword.engine.session import GameSession
from arrowword.engine.validator import PuzzleValidator
from arrowword.io.puzzle_client import ClientConfig, PuzzleClient
from arrowword.io.puzzle_json import dumps_puzzle, loads_puzzle
from arrowword.io.session_store import FileKeyValueStore, SessionStore
from arrowword.utils.logger import configure_logging, parse_level
from arrowword.utils.pretty import format_score, pretty_print_board


PLAY_HELP = """Commands:
  set <cell> <word>   type a word into a cell
  reveal [cell]       reveal one letter (of the focused cell by default)
  next | prev | left | right | up | down
  submit              check all answers
  reset               start over
  quit                save and exit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play and author daily arrow-word puzzles")
    parser.add_argument("--base-url", type=str, help="Host serving puzzles/<id>.json")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    index = sub.add_parser("index", help="List available puzzles, newest first")
    index.add_argument(
        "--manifest",
        action="store_true",
        help="Build the index from puzzles/list.json instead of puzzles/index.json",
    )

    show = sub.add_parser("show", help="Print a puzzle board")
    show.add_argument("puzzle", help="Puzzle id, or path to a puzzle JSON file")
    show.add_argument("--solutions", action="store_true", help="Show the answers")

    validate = sub.add_parser("validate", help="Check a puzzle JSON file")
    validate.add_argument("path", type=Path)

    trim = sub.add_parser("trim", help="Crop a puzzle to its used cells and re-export it")
    trim.add_argument("path", type=Path)
    trim.add_argument("--output", type=Path, help="Optional path to JSON output")

    play = sub.add_parser("play", help="Play a puzzle in the terminal")
    play.add_argument("puzzle", help="Puzzle id, or path to a puzzle JSON file")
    play.add_argument(
        "--store-dir",
        type=Path,
        default=Path("local_db/collections/sessions"),
        help="Directory holding saved sessions",
    )
    return parser


def load_puzzle(ref: str, client: PuzzleClient) -> Puzzle:
    path = Path(ref)
    if path.suffix == ".json" and path.exists():
        return loads_puzzle(path.read_text(encoding="utf-8"))
    return client.fetch_puzzle(ref)


def run_play(session: GameSession, store: SessionStore, lines) -> None:
    puzzle = session.puzzle
    if puzzle is None:
        raise PuzzleError("No puzzle loaded")
    session.restore(store.load(puzzle.id))
    pretty_print_board(puzzle, session.state, label=puzzle.title or puzzle.id)
    print(PLAY_HELP)

    for line in lines:
        words = shlex.split(line)
        if not words:
            continue
        command, args = words[0].lower(), words[1:]
        if command == "quit":
            break
        if args and args[0].isdigit() and int(args[0]) >= puzzle.grid.size:
            print(f"Cells are numbered 0-{puzzle.grid.size - 1}.")
            continue
        if command == "set" and len(args) >= 2 and args[0].isdigit():
            session.focus(int(args[0]))
            if not session.set_entry(int(args[0]), args[1]):
                print("Cell is not editable or the edit would erase revealed letters.")
        elif command == "reveal":
            if args and args[0].isdigit():
                session.focus(int(args[0]))
            session.reveal_letter()
        elif command.upper() in NavAction.__members__:
            session.move_focus(NavAction[command.upper()])
            print(f"Focus: {session.state.focused_cell}")
            continue
        elif command == "submit":
            result = session.submit()
            if result.all_correct:
                pretty_print_board(puzzle, session.state, label="Solved!")
                print(format_score(session.score()))
                store.save(session.to_record())
                return
        elif command == "reset":
            session.reset()
        else:
            print(PLAY_HELP)
            continue
        store.save(session.to_record())
        pretty_print_board(puzzle, session.state)

    store.save(session.to_record())


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = parse_level(args.log_level)
    configure_logging(level)

    config = ClientConfig(base_url=args.base_url) if args.base_url else ClientConfig()
    client = PuzzleClient(config)

    try:
        if args.command == "index":
            summaries = client.fetch_index_from_manifest() if args.manifest else client.fetch_index()
            for summary in summaries:
                print(f"{summary.date}  {summary.id:<12} {summary.title or ''} {summary.author or ''}".rstrip())

        elif args.command == "show":
            puzzle = load_puzzle(args.puzzle, client)
            pretty_print_board(puzzle, show_solutions=args.solutions, label=puzzle.title or puzzle.id)

        elif args.command == "validate":
            puzzle = loads_puzzle(args.path.read_text(encoding="utf-8"))
            result = PuzzleValidator().validate(puzzle)
            for message in result.messages:
                print(message)
            print("OK" if result.ok else "INVALID")
            return 0 if result.ok else 1

        elif args.command == "trim":
            editor = PuzzleEditor.from_puzzle(loads_puzzle(args.path.read_text(encoding="utf-8")))
            editor.trim()
            output_text = dumps_puzzle(editor.export())
            if args.output:
                args.output.write_text(output_text, encoding="utf-8")
            else:
                print(output_text)

        elif args.command == "play":
            session = GameSession()
            session.load(load_puzzle(args.puzzle, client))
            store = SessionStore(FileKeyValueStore(args.store_dir))
            run_play(session, store, sys.stdin)

    except AuthoringError as exc:
        for message in exc.messages:
            print(message, file=sys.stderr)
        print(exc, file=sys.stderr)
        return 1
    except PuzzleError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
