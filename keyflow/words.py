"""Word lists and their segmentation into prompts."""

from __future__ import annotations

import logging
import random
import textwrap
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from .config import SessionConfig

logger = logging.getLogger(__name__)

WORDLIST_PACKAGE = "keyflow.data"
WORDLIST_NAME = "wordlist.txt"


# ---------------------------
# Prompts
# ---------------------------

@dataclass(frozen=True)
class Prompt:
    """One unit of target text to type."""

    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text


class WordSource:
    """Ordered, immutable sequence of word tokens.

    Shuffling is the caller's job (see ``build_words``); segmentation here is
    deterministic and keeps the original order.
    """

    def __init__(self, words: Iterable[str]) -> None:
        self._words = tuple(str(w) for w in words)

    @property
    def words(self) -> tuple:
        return self._words

    def __len__(self) -> int:
        return len(self._words)

    def __bool__(self) -> bool:
        return bool(self._words)

    def joined(self) -> str:
        return " ".join(self._words)

    def chunk(self, size: int) -> List[Prompt]:
        """Groups of ``size`` words joined by single spaces; the last may be shorter."""
        if size < 1:
            raise ValueError(f"chunk size must be positive, got {size}")
        return [
            Prompt(" ".join(self._words[i:i + size]))
            for i in range(0, len(self._words), size)
        ]

    def wrap(self, width: int) -> List[Prompt]:
        """Greedily pack words into lines of at most ``width`` characters.

        Each line gets one trailing space so there is a typeable terminator
        between wrapped lines. Words longer than ``width`` are split.
        """
        if width < 1:
            raise ValueError(f"wrap width must be positive, got {width}")
        lines = textwrap.wrap(
            self.joined(),
            width=width,
            break_long_words=True,
            break_on_hyphens=False,
        )
        return [Prompt(line + " ") for line in lines]


# ---------------------------
# Loading
# ---------------------------

def parse_wordlist(raw: str) -> List[str]:
    # a trailing newline would otherwise leave an empty token at the end
    return [line.strip() for line in raw.splitlines() if line.strip()]


def load_wordlist(path: Optional[Path] = None) -> List[str]:
    """Read a newline-separated word list, the bundled one by default."""
    if path is not None:
        try:
            words = parse_wordlist(Path(path).read_text(encoding="utf-8"))
        except OSError as e:
            logger.warning("Could not read word list %s: %s; using bundled list", path, e)
        else:
            if words:
                return words
            logger.warning("Word list %s is empty; using bundled list", path)
    raw = resources.files(WORDLIST_PACKAGE).joinpath(WORDLIST_NAME).read_text(encoding="utf-8")
    return parse_wordlist(raw)


def build_words(
    config: "SessionConfig",
    rng: Optional[random.Random] = None,
    words: Optional[Sequence[str]] = None,
) -> List[str]:
    pool = list(words) if words is not None else load_wordlist(config.wordlist)
    if config.shuffle:
        (rng or random.Random()).shuffle(pool)
    logger.debug("Loaded %d words (shuffle=%s)", len(pool), config.shuffle)
    return pool
