"""Error types raised by the scoring engine and corpus builders.

All of them are plain synchronous failures: the caller has to fix the
corpus and try again, nothing here is retried.
"""

from __future__ import annotations


class TidyScoreError(ValueError):
    """Base class for every error tidyscore raises on bad input."""


class EmptyCorpus(TidyScoreError):
    def __init__(self) -> None:
        super().__init__("corpus has no documents with tokens; idf is undefined")


class DivisionUndefined(TidyScoreError):
    def __init__(self, doc_id: str | None = None) -> None:
        self.doc_id = doc_id
        where = f" '{doc_id}'" if doc_id is not None else ""
        super().__init__(f"document{where} has zero tokens; tf is undefined")


class TermNotInCorpus(TidyScoreError):
    def __init__(self, term: str) -> None:
        self.term = term
        super().__init__(f"term '{term}' does not occur in any document")


class DuplicateDocument(TidyScoreError):
    def __init__(self, doc_id: str) -> None:
        self.doc_id = doc_id
        super().__init__(f"document id '{doc_id}' appears more than once")


class UnreadableDocument(TidyScoreError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"cannot read '{path}' as UTF-8 text: {reason}")
