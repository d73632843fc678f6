"""Word splitting and greedy line wrapping with optional hyphenation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Protocol, Tuple

try:  # pragma: no cover - optional dependency
    import pyphen
except ImportError:  # pragma: no cover - optional dependency
    pyphen = None  # type: ignore

from .exceptions import InvalidDataError
from .style import StyledStr, StyledString

if TYPE_CHECKING:  # pragma: no cover
    from .base import Context

logger = logging.getLogger(__name__)

HYPHEN_MARK = "-"


class Hyphenator(Protocol):
    def positions(self, word: str) -> List[int]:
        ...


def create_hyphenator(language: Optional[str]) -> Optional[Hyphenator]:
    """Returns a pyphen hyphenator for ``language``.

    Returns ``None`` when no language is given or pyphen is not installed.
    """
    if not language:
        return None
    if pyphen is None:
        logger.warning("pyphen is not installed, hyphenation for %s is disabled", language)
        return None
    try:
        return pyphen.Pyphen(lang=language)
    except KeyError as exc:
        raise InvalidDataError("Unknown hyphenation language", details=language) from exc


def words(runs: Iterable[StyledString], offset: int = 0) -> Iterator[StyledStr]:
    """Splits styled runs into words.

    A word ends after a space or at the end of its run; words never span two
    runs. ``offset`` is the number of characters to skip in the first run.
    """
    for run in runs:
        text = run.s
        start = min(offset, len(text))
        offset = 0
        if start == len(text):
            yield StyledStr(text, start, start, run.style)
            continue
        while start < len(text):
            space = text.find(" ", start)
            end = len(text) if space < 0 else space + 1
            yield StyledStr(text, start, end, run.style)
            start = end


def split_word(
    context: "Context", word: StyledStr, width: float
) -> Optional[Tuple[StyledStr, StyledStr]]:
    """Splits ``word`` at the hyphenation point with the longest head that fits
    into ``width`` together with a hyphen.

    The head carries the hyphen as mark. Returns ``None`` without a
    hyphenator or when no head fits.
    """
    hyphenator = context.hyphenator
    if hyphenator is None:
        return None

    font_cache = context.font_cache
    text = word.text
    core = text.rstrip(" ")
    mark_width = word.style.str_width(font_cache, HYPHEN_MARK)

    best = None
    for position in sorted(int(p) for p in hyphenator.positions(core)):
        if not 0 < position < len(core):
            continue
        if word.style.str_width(font_cache, text[:position]) + mark_width > width:
            break
        best = position

    if best is None:
        return None
    return word.slice(0, best).with_mark(HYPHEN_MARK), word.slice(best)


class Wrapper:
    """Greedily packs words into lines of at most ``width`` millimetres.

    Iterating yields one list of words per line. A word that does not fit
    into an empty line stops the iteration after the pending line, and
    :attr:`truncated` is set.
    """

    def __init__(self, words: Iterable[StyledStr], context: "Context", width: float):
        self._words = iter(words)
        self._context = context
        self.width = width
        self.x = 0.0
        self.truncated = False
        self._buffer: List[StyledStr] = []
        self._exhausted = False

    def __iter__(self) -> "Wrapper":
        return self

    def __next__(self) -> List[StyledStr]:
        font_cache = self._context.font_cache
        while not self._exhausted:
            word = next(self._words, None)
            if word is None:
                self._exhausted = True
                break

            word_width = word.width(font_cache)
            if self.x + word_width <= self.width:
                self._buffer.append(word)
                self.x += word_width
                continue

            parts = split_word(self._context, word, self.width - self.x)
            if parts is not None:
                head, word = parts
                self._buffer.append(head)
                word_width = word.width(font_cache)

            if word_width > self.width:
                logger.warning(
                    "Word %r is wider than the line (%.1f mm > %.1f mm), dropping the rest of the text",
                    word.text,
                    word_width,
                    self.width,
                )
                self.truncated = True
                self._exhausted = True
                break

            line, self._buffer = self._buffer, [word]
            self.x = word_width
            return line

        if not self._buffer:
            raise StopIteration
        line, self._buffer = self._buffer, []
        self.x = 0.0
        return line
