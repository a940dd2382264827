"""TF-IDF engine: term counts, tf, df, idf and their product.

Pure functions over an immutable corpus (doc_id -> token sequence).
`score_corpus()` is the entry point; the lower-level functions are
exposed for callers that need a single statistic.

    tf     = n / total
    idf    = ln(N / df)
    tf_idf = tf * idf

N counts only documents that hold at least one token, so an empty
document never shifts the idf of terms in the others.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np

from tidyscore.errors import DivisionUndefined, EmptyCorpus, TermNotInCorpus

logger = logging.getLogger(__name__)

Corpus = Mapping[str, Sequence[str]]


@dataclass(frozen=True)
class TermCount:
    doc_id: str
    term: str
    n: int


@dataclass(frozen=True)
class Score:
    doc_id: str
    term: str
    n: int
    total: int
    tf: float
    idf: float
    tf_idf: float

    def to_dict(self) -> dict:
        return {
            "doc_id": self.doc_id,
            "term": self.term,
            "n": self.n,
            "total": self.total,
            "tf": self.tf,
            "idf": self.idf,
            "tf_idf": self.tf_idf,
        }


ScoreTable = dict[tuple[str, str], Score]


# ── Counting ────────────────────────────────────────────────────────


def count_terms(corpus: Corpus) -> list[TermCount]:
    """One TermCount per distinct (document, term) pair that occurs."""
    rows: list[TermCount] = []
    for doc_id, tokens in corpus.items():
        for term, n in Counter(tokens).items():
            rows.append(TermCount(doc_id, term, n))
    return rows


def total_tokens(tokens: Sequence[str]) -> int:
    return len(tokens)


def word_counts(corpus: Corpus, min_count: int = 1) -> list[tuple[str, int]]:
    """Corpus-wide counts, most common first (ties by term)."""
    counts: Counter[str] = Counter()
    for tokens in corpus.values():
        counts.update(tokens)
    rows = [(term, n) for term, n in counts.items() if n >= min_count]
    return sorted(rows, key=lambda x: (-x[1], x[0]))


# ── Term frequency ──────────────────────────────────────────────────


def term_frequency(n: int, total: int, doc_id: str | None = None) -> float:
    """tf = n / total.  Zero-token documents raise DivisionUndefined."""
    if total <= 0:
        raise DivisionUndefined(doc_id)
    return n / total


# ── Document frequency / idf ────────────────────────────────────────


def _scored_documents(corpus: Corpus) -> int:
    return sum(1 for tokens in corpus.values() if tokens)


def document_frequency(term: str, corpus: Corpus) -> int:
    """Number of documents containing `term` at least once."""
    return sum(1 for tokens in corpus.values() if term in tokens)


def document_frequencies(corpus: Corpus) -> Counter[str]:
    """df for every term in the corpus, built in one pass."""
    df: Counter[str] = Counter()
    for tokens in corpus.values():
        df.update(set(tokens))
    return df


def _idf(N: int, df: int) -> float:
    return math.log(N / df)


def inverse_document_frequency(term: str, corpus: Corpus) -> float:
    N = _scored_documents(corpus)
    if N == 0:
        raise EmptyCorpus()
    df = document_frequency(term, corpus)
    if df == 0:
        raise TermNotInCorpus(term)
    return _idf(N, df)


def tf_idf(n: int, total: int, term: str, corpus: Corpus) -> float:
    return term_frequency(n, total) * inverse_document_frequency(term, corpus)


# ── Whole-corpus scoring ────────────────────────────────────────────


def score_corpus(corpus: Corpus) -> ScoreTable:
    """Score every (document, term) pair with a nonzero count.

    Returns a dict keyed by (doc_id, term).  Raises EmptyCorpus when no
    document holds a token; nothing is returned on failure.
    """
    N = _scored_documents(corpus)
    if N == 0:
        raise EmptyCorpus()

    df_map = document_frequencies(corpus)
    idf_map = {term: _idf(N, df) for term, df in df_map.items()}

    table: ScoreTable = {}
    for doc_id, tokens in corpus.items():
        total = total_tokens(tokens)
        if total == 0:
            logger.debug("Skipping empty document %s", doc_id)
            continue
        for term, n in Counter(tokens).items():
            tf = term_frequency(n, total, doc_id)
            idf = idf_map[term]
            table[(doc_id, term)] = Score(doc_id, term, n, total, tf, idf, tf * idf)

    logger.info(
        "Scored %d term rows across %d documents (%d distinct terms)",
        len(table),
        N,
        len(df_map),
    )
    return table


# ── Ranking ─────────────────────────────────────────────────────────


def ranked(scores) -> list[Score]:
    """Descending tf_idf, ties broken by ascending term then doc id."""
    return sorted(scores, key=lambda s: (-s.tf_idf, s.term, s.doc_id))


def top_terms(table: ScoreTable, n: int = 15) -> dict[str, list[Score]]:
    """Top-n terms per document by tf_idf, documents in table order."""
    if n < 1:
        raise ValueError(f"n must be a positive integer, got {n}")
    by_doc: dict[str, list[Score]] = {}
    for score in table.values():
        by_doc.setdefault(score.doc_id, []).append(score)
    return {doc_id: ranked(rows)[:n] for doc_id, rows in by_doc.items()}


# ── Matrix export ───────────────────────────────────────────────────


def document_term_matrix(
    table: ScoreTable,
    value: str = "tf_idf",
) -> tuple[np.ndarray, list[str], list[str]]:
    """Dense (documents x vocabulary) array of one Score field.

    Returns (matrix, doc_ids, vocab).  Absent pairs are 0.
    """
    if value not in ("n", "tf", "idf", "tf_idf"):
        raise ValueError(f"unknown score field '{value}'")

    doc_ids = list(dict.fromkeys(doc_id for doc_id, _ in table))
    vocab = sorted({term for _, term in table})
    row_of = {doc_id: i for i, doc_id in enumerate(doc_ids)}
    col_of = {term: j for j, term in enumerate(vocab)}

    matrix = np.zeros((len(doc_ids), len(vocab)), dtype=np.float64)
    for (doc_id, term), score in table.items():
        matrix[row_of[doc_id], col_of[term]] = getattr(score, value)
    return matrix, doc_ids, vocab


def save_matrix(
    matrix: np.ndarray,
    doc_ids: list[str],
    vocab: list[str],
    path: str,
) -> None:
    np.savez(path, matrix=matrix, doc_ids=np.array(doc_ids), vocab=np.array(vocab))


def load_matrix(path: str) -> tuple[np.ndarray, list[str], list[str]]:
    data = np.load(path, allow_pickle=False)
    return data["matrix"], data["doc_ids"].tolist(), data["vocab"].tolist()
