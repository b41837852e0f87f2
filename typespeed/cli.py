"""Command-line entry point for the typespeed terminal app."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from typespeed.config import MODES, merge_config
from typespeed.corpus import list_available
from typespeed.store import Store


def configure_logging(log_file: Path, verbose: bool = False) -> None:
    """Send logs to a file; the Textual screen owns the terminal."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        filename=str(log_file),
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="typespeed", description="Terminal typing-speed test.")
    p.add_argument("-m", "--mode", choices=MODES, help="End the test on a timer or after a word count")
    p.add_argument("-t", "--time", dest="time_limit", type=int, help="Time limit in seconds (time mode)")
    p.add_argument("-w", "--words", dest="word_count", type=int, help="Number of words (words mode)")
    p.add_argument("-l", "--language", help="Word list to draw from (see --list-languages)")
    p.add_argument("--theme", help="Colour theme")
    p.add_argument("--one-line", dest="one_line", action="store_true", default=None, help="Tape display")
    p.add_argument("--punctuation", action="store_true", default=None, help="Add capitals, periods and commas")
    p.add_argument("--numbers", action="store_true", default=None, help="Mix numbers into the words")
    p.add_argument("--no-backspace", dest="backspace", action="store_false", default=None,
                   help="Disable correcting mistakes")
    p.add_argument("--list-languages", action="store_true", help="Print the available word lists and exit")
    p.add_argument("--data-dir", type=Path, help="Where settings, scores and logs are kept")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    languages = list_available()
    if args.language and args.language not in languages:
        parser.error(f"unknown language {args.language!r} (choose from: {', '.join(languages)})")

    if args.list_languages:
        print("\n".join(languages))
        return 0

    store = Store(args.data_dir)
    configure_logging(store.data_dir / "typespeed.log", args.verbose)

    config = merge_config(store.load_settings(), languages=languages)
    overrides = {
        k: v for k, v in vars(args).items()
        if k in config.to_dict() and v is not None
    }
    if overrides:
        config = merge_config(overrides, base=config, languages=languages)
    store.save_settings(config)

    from typespeed.app import TypespeedApp

    TypespeedApp(config, store=store).run()
    return 0
