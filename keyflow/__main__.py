"""Module entrypoint for `python -m keyflow`."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .app import THEMES, TypingTUI
from .config import POLICIES, SEGMENTATIONS, config_from_dict, load_config, with_overrides
from .errors import ConfigError
from .words import load_wordlist

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(log_file: Path, debug: bool = False) -> None:
    """Log to a file; the terminal belongs to the TUI."""
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="keyflow", description="Terminal typing practice")
    parser.add_argument("--config", type=Path, default=None, help="JSON config file")
    parser.add_argument("--policy", choices=POLICIES, default=None)
    parser.add_argument("--segmentation", choices=SEGMENTATIONS, default=None)
    parser.add_argument("--wordlist", type=Path, default=None, help="newline-separated word list")
    parser.add_argument("--log-file", type=Path, default=Path("keyflow.log"))
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.debug)
    config = config_from_dict(load_config(args.config), themes=list(THEMES))
    config = with_overrides(
        config,
        policy=args.policy,
        segmentation=args.segmentation,
        wordlist=args.wordlist,
    )
    try:
        app = TypingTUI(load_wordlist(config.wordlist), config)
    except ConfigError as exc:
        logging.getLogger(__name__).error("Invalid configuration: %s", exc)
        print(f"keyflow: invalid configuration: {exc}", file=sys.stderr)
        return 2
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
