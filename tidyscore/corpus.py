"""Corpus loader: reads text files into line tables, splits chapters,
tokenizes, and builds the doc_id -> tokens mapping the engine scores.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from tidyscore.errors import DuplicateDocument, UnreadableDocument
from tidyscore.text import stop_word_set, tokenize

logger = logging.getLogger(__name__)

CHAPTER_RE = re.compile(r"^chapter [\divxlc]", re.IGNORECASE)


@dataclass(frozen=True)
class Document:
    doc_id: str
    tokens: tuple[str, ...]


@dataclass(frozen=True)
class Line:
    doc_id: str
    linenumber: int
    chapter: int
    text: str


@dataclass(frozen=True)
class TokenRow:
    doc_id: str
    linenumber: int
    chapter: int
    token: str


# ── Line tables ─────────────────────────────────────────────────────


def read_lines(path: str | Path, doc_id: str | None = None) -> list[Line]:
    """One Line per physical line, annotated with a running chapter count."""
    path = Path(path)
    doc_id = doc_id or path.stem
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise UnreadableDocument(str(path), e.reason) from e

    lines: list[Line] = []
    chapter = 0
    for i, raw in enumerate(text.splitlines(), 1):
        if CHAPTER_RE.match(raw):
            chapter += 1
        lines.append(Line(doc_id, i, chapter, raw))
    return lines


def unnest_tokens(
    lines: Iterable[Line],
    lowercase: bool = True,
    stop_words: frozenset[str] | None = None,
) -> list[TokenRow]:
    """Restructure a line table into one-token-per-row."""
    return [
        TokenRow(line.doc_id, line.linenumber, line.chapter, token)
        for line in lines
        for token in tokenize(line.text, lowercase=lowercase, stop_words=stop_words)
    ]


def split_chapters(lines: list[Line]) -> list[list[Line]]:
    """Regroup a single text's lines so each chapter is its own document.

    Front matter before the first heading becomes chapter 0 and is
    dropped when it holds only blank lines.
    """
    groups: dict[int, list[Line]] = {}
    for line in lines:
        doc_id = f"{line.doc_id}#chapter-{line.chapter}"
        groups.setdefault(line.chapter, []).append(
            Line(doc_id, line.linenumber, line.chapter, line.text)
        )

    front = groups.get(0)
    if front is not None and not any(line.text.strip() for line in front):
        del groups[0]

    return [groups[k] for k in sorted(groups)]


# ── Corpus assembly ─────────────────────────────────────────────────


def build_corpus(documents: Iterable[Document]) -> dict[str, tuple[str, ...]]:
    corpus: dict[str, tuple[str, ...]] = {}
    for doc in documents:
        if doc.doc_id in corpus:
            raise DuplicateDocument(doc.doc_id)
        corpus[doc.doc_id] = tuple(doc.tokens)
    return corpus


def load_collection(collection_path: str) -> tuple[dict, dict[str, tuple[str, ...]]]:
    """Read a collection config and return (config, corpus).

    Files that tokenize to nothing are still part of the corpus, as
    zero-token documents.
    """
    config = json.loads(Path(collection_path).read_text())
    documents_dir = Path(config["documents_dir"])
    if not documents_dir.is_absolute():
        documents_dir = Path(collection_path).parent / documents_dir

    pattern = config.get("pattern", "*.txt")
    split = config.get("split", "file")
    tok_cfg = config.get("tokenizer", {})
    lowercase = tok_cfg.get("lowercase", True)
    stop_words = stop_word_set(
        tok_cfg.get("stop_words", True), tok_cfg.get("extra_stop_words")
    )

    files = sorted(documents_dir.rglob(pattern))
    logger.info("Loading %d file(s) from %s", len(files), documents_dir)

    documents: list[Document] = []
    for path in files:
        doc_id = path.relative_to(documents_dir).with_suffix("").as_posix()
        lines = read_lines(path, doc_id)
        groups = (split_chapters(lines) if split == "chapter" else None) or [lines]
        for group in groups:
            rows = unnest_tokens(group, lowercase=lowercase, stop_words=stop_words)
            tokens = tuple(row.token for row in rows)
            group_id = group[0].doc_id if group else doc_id
            if not tokens:
                logger.debug("Document %s has no tokens", group_id)
            documents.append(Document(group_id, tokens))

    return config, build_corpus(documents)
