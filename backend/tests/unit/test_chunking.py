"""Unit tests for the text chunkers."""

import pytest

from ragstore.config import KnowledgeBaseConfig
from ragstore.domain.chunking import RecursiveChunker, SentenceChunker, build_chunker
from ragstore.domain.exceptions import ConfigurationError, EmptySourceError


def test_sentence_chunker_splits_and_trims():
    chunks = SentenceChunker().chunk("The sky is blue. Grass is green.")
    assert chunks == ["The sky is blue", "Grass is green"]


def test_sentence_chunker_treats_runs_of_punctuation_as_one_boundary():
    chunks = SentenceChunker().chunk("Really?! Yes... absolutely!")
    assert chunks == ["Really", "Yes", "absolutely"]


def test_sentence_chunker_keeps_text_without_terminator():
    assert SentenceChunker().chunk("no punctuation here") == ["no punctuation here"]


def test_sentence_chunker_drops_empty_fragments():
    chunks = SentenceChunker().chunk("First.  . Second. ")
    assert chunks == ["First", "Second"]
    assert all(chunk.strip() for chunk in chunks)


@pytest.mark.parametrize("text", ["", "   ", "...", " ?! . "])
def test_sentence_chunker_rejects_text_without_content(text):
    with pytest.raises(EmptySourceError):
        SentenceChunker().chunk(text)


def test_sentence_chunker_is_deterministic():
    text = "One. Two! Three? Four."
    assert SentenceChunker().chunk(text) == SentenceChunker().chunk(text)


def test_recursive_chunker_returns_short_text_whole():
    chunker = RecursiveChunker(chunk_size=100, chunk_overlap=10)
    assert chunker.chunk("  short text  ") == ["short text"]


def test_recursive_chunker_respects_chunk_size():
    paragraph = " ".join(f"word{i}" for i in range(200))
    chunker = RecursiveChunker(chunk_size=120, chunk_overlap=20)

    chunks = chunker.chunk(paragraph)

    assert len(chunks) > 1
    assert all(len(chunk) <= 120 for chunk in chunks)
    assert chunks[0].startswith("word0")
    assert chunks[-1].endswith("word199")


def test_recursive_chunker_prefers_paragraph_breaks():
    text = ("a" * 40) + "\n\n" + ("b" * 40)
    chunks = RecursiveChunker(chunk_size=50, chunk_overlap=0).chunk(text)
    assert chunks == ["a" * 40, "b" * 40]


def test_recursive_chunker_hard_cuts_unbroken_text():
    chunks = RecursiveChunker(chunk_size=10, chunk_overlap=2).chunk("x" * 25)
    assert all(len(chunk) <= 10 for chunk in chunks)
    assert chunks[0] == "x" * 10


def test_recursive_chunker_rejects_overlap_not_smaller_than_size():
    with pytest.raises(ConfigurationError):
        RecursiveChunker(chunk_size=10, chunk_overlap=10)


def test_build_chunker_follows_config():
    assert isinstance(build_chunker(KnowledgeBaseConfig()), SentenceChunker)
    recursive = build_chunker(KnowledgeBaseConfig(chunking_strategy="recursive"))
    assert isinstance(recursive, RecursiveChunker)
