from __future__ import annotations

import json

import pytest

EMMA = """EMMA

CHAPTER I

Emma Woodhouse, handsome, clever, and rich, with a comfortable home
and happy disposition, seemed to unite some of the best blessings.

CHAPTER II

Mr. Weston was a native of Highbury, and Emma was glad of it.
"""

PERSUASION = """Chapter 1

Sir Walter Elliot, of Kellynch Hall, in Somersetshire, was a man who
never took up any book but the Baronetage; Anne was his daughter.
"""


@pytest.fixture
def toy_corpus() -> dict[str, tuple[str, ...]]:
    return {"doc1": ("a", "a", "b"), "doc2": ("a", "c")}


@pytest.fixture
def collection(tmp_path):
    """A two-book collection on disk; returns the collection JSON path."""
    texts = tmp_path / "texts"
    texts.mkdir()
    (texts / "emma.txt").write_text(EMMA, encoding="utf-8")
    (texts / "persuasion.txt").write_text(PERSUASION, encoding="utf-8")

    path = tmp_path / "collection.json"
    path.write_text(
        json.dumps(
            {
                "name": "austen",
                "documents_dir": "texts",
                "pattern": "*.txt",
                "split": "file",
                "tokenizer": {"lowercase": True, "stop_words": True},
                "report": {"top_n": 3, "min_count": 1},
            }
        )
    )
    return path
