from __future__ import annotations

import json

import pytest

from tidyscore.corpus import (
    Document,
    Line,
    build_corpus,
    load_collection,
    read_lines,
    split_chapters,
    unnest_tokens,
)
from tidyscore.errors import DuplicateDocument, UnreadableDocument


def test_read_lines_numbers_lines_and_chapters(tmp_path):
    path = tmp_path / "emma.txt"
    path.write_text("EMMA\n\nCHAPTER I\nfirst\nChapter ii\nsecond\nchapters ahead\n")

    lines = read_lines(path)
    assert [line.linenumber for line in lines] == [1, 2, 3, 4, 5, 6, 7]
    assert [line.chapter for line in lines] == [0, 0, 1, 1, 2, 2, 2]
    assert all(line.doc_id == "emma" for line in lines)


def test_unnest_tokens_one_row_per_token():
    lines = [Line("poem", 1, 0, "Because I could not stop for Death"), Line("poem", 2, 0, "")]
    rows = unnest_tokens(lines)
    assert [r.token for r in rows] == ["because", "i", "could", "not", "stop", "for", "death"]
    assert all(r.linenumber == 1 for r in rows)


def test_split_chapters_drops_blank_front_matter():
    lines = [
        Line("book", 1, 0, ""),
        Line("book", 2, 1, "Chapter 1"),
        Line("book", 3, 1, "one"),
        Line("book", 4, 2, "Chapter 2"),
    ]
    groups = split_chapters(lines)
    assert [g[0].doc_id for g in groups] == ["book#chapter-1", "book#chapter-2"]
    assert [line.text for line in groups[0]] == ["Chapter 1", "one"]


def test_split_chapters_keeps_front_matter_with_text():
    lines = [Line("book", 1, 0, "EMMA"), Line("book", 2, 1, "Chapter 1")]
    assert [g[0].doc_id for g in split_chapters(lines)] == ["book#chapter-0", "book#chapter-1"]


def test_build_corpus_rejects_duplicate_ids():
    docs = [Document("a", ("x",)), Document("a", ("y",))]
    with pytest.raises(DuplicateDocument):
        build_corpus(docs)


def test_build_corpus_keeps_order():
    corpus = build_corpus([Document("b", ("x",)), Document("a", ())])
    assert list(corpus) == ["b", "a"]
    assert corpus["a"] == ()


def test_load_collection(collection):
    config, corpus = load_collection(str(collection))
    assert config["name"] == "austen"
    assert list(corpus) == ["emma", "persuasion"]
    assert corpus["emma"].count("emma") == 3
    assert "the" not in corpus["emma"]
    assert "chapter" in corpus["persuasion"]


def test_load_collection_split_by_chapter(collection):
    config = json.loads(collection.read_text())
    config["split"] = "chapter"
    collection.write_text(json.dumps(config))

    _, corpus = load_collection(str(collection))
    assert list(corpus) == [
        "emma#chapter-0",
        "emma#chapter-1",
        "emma#chapter-2",
        "persuasion#chapter-1",
    ]
    assert corpus["emma#chapter-0"] == ("emma",)


def test_load_collection_keeps_empty_file(collection):
    (collection.parent / "texts" / "blank.txt").write_text("the and of\n")
    _, corpus = load_collection(str(collection))
    assert corpus["blank"] == ()


def test_load_collection_split_by_chapter_keeps_empty_file(collection):
    config = json.loads(collection.read_text())
    config["split"] = "chapter"
    collection.write_text(json.dumps(config))
    (collection.parent / "texts" / "blank.txt").write_text("")

    _, corpus = load_collection(str(collection))
    assert corpus["blank"] == ()


def test_read_lines_rejects_non_utf8(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_bytes(b"caf\xe9 latte\n")
    with pytest.raises(UnreadableDocument, match="bad.txt"):
        read_lines(path)
