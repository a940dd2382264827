"""Tokenization shared by the corpus loader and the CLI.

Every document in a corpus must be tokenized with the same settings:
the engine compares tokens by exact equality, so a mixed pipeline would
split one word into several terms.
"""

from __future__ import annotations

import re

STOP_WORDS = frozenset(
    "a about after all also am an and any are as at be been before being but by "
    "can could did do does doing down for from further had has have having he "
    "her here hers herself him himself his how i if in into is it its itself "
    "just me more most my myself no nor not now of off on once only or other "
    "our ours out over own s same she should so some such t than that the their "
    "theirs them then there these they this those through to too under until up "
    "us very was we were what when where which while who whom why will with "
    "would you your yours".split()
)

# Letters and digits, keeping apostrophes inside a word ("don't", "emma's").
_WORD = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def tokenize(
    text: str,
    lowercase: bool = True,
    stop_words: frozenset[str] | set[str] | None = None,
) -> list[str]:
    """Lowercase → split on non-word characters → remove stop words."""
    if lowercase:
        text = text.lower()
    tokens = _WORD.findall(text.replace("’", "'"))
    if stop_words:
        tokens = [t for t in tokens if t not in stop_words]
    return tokens


def stop_word_set(enabled: bool = True, extra: list[str] | None = None) -> frozenset[str]:
    words = set(STOP_WORDS) if enabled else set()
    words.update(w.lower() for w in extra or [])
    return frozenset(words)
