
import io

import pytest

from arpafilter import (
    Vocabulary, load_vocabulary, read_vocabularies, RESERVED_WORDS,
    SENTENCE_BEGIN, SENTENCE_END, UNKNOWN_WORD,
)


def test_build_vocabulary():
    vocab = Vocabulary.build(io.BytesIO(b"a b a c"))
    assert len(vocab) == 3
    assert set(vocab) == {b"a", b"b", b"c"}
    assert vocab.contains(b"a")
    assert not vocab.contains(b"d")
    assert b"b" in vocab
    assert b"d" not in vocab


def test_build_any_line_structure():
    vocab = Vocabulary.build(io.BytesIO(b"one two\n\n  three\tfour\r\none\n"))
    assert set(vocab) == {b"one", b"two", b"three", b"four"}
    assert len(Vocabulary.build(io.BytesIO(b""))) == 0


def test_build_from_text():
    vocab = Vocabulary.build(io.StringIO("hestur köttur\nhestur\n"))
    assert set(vocab) == {b"hestur", "köttur".encode("utf-8")}


def test_exact_membership():
    vocab = Vocabulary.build(io.BytesIO(b"Word word"))
    assert b"Word" in vocab
    assert b"WORD" not in vocab
    assert b"word " not in vocab
    # The builder adds nothing by itself
    assert SENTENCE_BEGIN not in vocab


def test_seeded():
    vocab = Vocabulary.build(io.BytesIO(b"a b"))
    seeded = vocab.seeded()
    assert set(seeded) == {b"a", b"b"} | RESERVED_WORDS
    assert SENTENCE_BEGIN in seeded
    assert SENTENCE_END in seeded
    assert UNKNOWN_WORD in seeded
    # The original is unchanged
    assert len(vocab) == 2


def test_read_error():
    stream = io.TextIOWrapper(io.BytesIO(b"good\n\xff\xfebad\n"), encoding="utf-8")
    with pytest.raises(OSError):
        Vocabulary.build(stream)


def test_load_vocabulary(tmp_path):
    path = tmp_path / "vocab.txt"
    path.write_bytes(b"x y\nz\n")
    assert set(load_vocabulary(path)) == {b"x", b"y", b"z"} | RESERVED_WORDS
    assert set(load_vocabulary(path, seed=False)) == {b"x", b"y", b"z"}
    with pytest.raises(OSError):
        load_vocabulary(tmp_path / "missing.txt")


def test_read_vocabularies():
    vocabs = read_vocabularies(io.BytesIO(b"a b\n\nc a\n"))
    assert len(vocabs) == 3
    assert set(vocabs[0]) == {b"a", b"b"} | RESERVED_WORDS
    assert set(vocabs[1]) == set(RESERVED_WORDS)
    assert set(vocabs[2]) == {b"a", b"c"} | RESERVED_WORDS
    vocabs = read_vocabularies(io.BytesIO(b"a b\nc\n"), seed=False)
    assert [len(v) for v in vocabs] == [2, 1]
