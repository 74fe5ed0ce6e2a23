
import io
from random import randint

import pytest

from arpafilter import (
    ArpaReader, FormatError, TruncatedInputError,
    encode_counts, size_needed_for_counts, write_counts,
    read_counts, read_ngram_header, read_end, section_marker,
)


def test_encode_counts():
    assert encode_counts([2, 1]) == b"\n\\data\\\nngram 1=2\nngram 2=1\n\n"
    assert encode_counts([]) == b"\n\\data\\\n\n"
    assert size_needed_for_counts([2, 1]) == len(encode_counts([2, 1]))
    assert section_marker(3) == b"\\3-grams:"
    with pytest.raises(ValueError):
        encode_counts([1, -1])
    f = io.BytesIO()
    f.write(b"xyz")
    write_counts(f, [7])
    assert f.getvalue() == b"xyz\n\\data\\\nngram 1=7\n\n"


def test_counts_round_trip():
    """ Decoding an encoded header gives back the same counts """
    ledgers = [[], [0], [1, 2, 3], [10**12, 0, 5]]
    for _ in range(50):
        ledgers.append([randint(0, 10**9) for _ in range(randint(0, 6))])
    for counts in ledgers:
        assert read_counts(io.BytesIO(encode_counts(counts))) == counts


def test_read_counts_leaves_stream_at_body():
    f = io.BytesIO(b"\n\\data\\\nngram 1=3\n\n\\1-grams:\n")
    assert read_counts(f) == [3]
    assert f.readline() == b"\\1-grams:\n"


def test_read_counts_crlf():
    assert read_counts(io.BytesIO(b"\r\n\\data\\\r\nngram 1=3\r\n\r\n")) == [3]


def test_malformed_header():
    with pytest.raises(FormatError) as e:
        read_counts(io.BytesIO(b"\n\\data\\\nngram 2=1\n\n"))
    assert e.value.line == b"ngram 2=1"
    assert "ngram 2=1" in str(e.value)

    # Gap in the lengths
    with pytest.raises(FormatError) as e:
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=4\nngram 3=1\n\n"))
    assert e.value.line == b"ngram 3=1"

    # Descending lengths
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=4\nngram 2=2\nngram 1=4\n\n"))

    with pytest.raises(FormatError) as e:
        read_counts(io.BytesIO(b"\\data\\\nngram 1=4\n\n"))
    assert e.value.line == b"\\data\\"

    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\dada\\\nngram 1=4\n\n"))
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\data\\\nngrams 1=4\n\n"))
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1:4\n\n"))
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=many\n\n"))
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=-4\n\n"))

    # Numbers must be plain unsigned decimals
    for bad in (b"ngram 1=1_000", b"ngram +1=2", b"ngram 1= 7", b"ngram 1=7 ",
                b"ngram  1=7", b"ngram 1=", b"ngram =7"):
        with pytest.raises(FormatError) as e:
            read_counts(io.BytesIO(b"\n\\data\\\n" + bad + b"\n\n"))
        assert e.value.line == bad


def test_whitespace_is_not_blank():
    """ Only empty lines count as blank in the header """
    with pytest.raises(FormatError):
        read_counts(io.BytesIO(b" \n\\data\\\nngram 1=1\n\n"))
    with pytest.raises(FormatError) as e:
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=1\n\t\n"))
    assert e.value.line == b"\t"
    with pytest.raises(FormatError) as e:
        read_ngram_header(io.BytesIO(b"   \n\t\n\\1-grams:\n"), 1)
    assert e.value.line == b"   "


def test_truncated_header():
    with pytest.raises(TruncatedInputError):
        read_counts(io.BytesIO(b""))
    with pytest.raises(TruncatedInputError):
        read_counts(io.BytesIO(b"\n"))
    with pytest.raises(TruncatedInputError):
        read_counts(io.BytesIO(b"\n\\data\\\nngram 1=2\nngram 2=1\n"))
    # A truncated input is also a format error
    assert issubclass(TruncatedInputError, FormatError)


def test_read_ngram_header():
    f = io.BytesIO(b"\n\n\\2-grams:\n-1.0\ta b\n")
    read_ngram_header(f, 2)
    assert f.readline() == b"-1.0\ta b\n"

    with pytest.raises(FormatError) as e:
        read_ngram_header(io.BytesIO(b"\\3-grams:\n"), 2)
    assert e.value.line == b"\\3-grams:"
    with pytest.raises(FormatError):
        read_ngram_header(io.BytesIO(b"\\2-grams: \n"), 2)
    with pytest.raises(FormatError):
        read_ngram_header(io.BytesIO(b"\n\n"), 1)


def test_read_end():
    read_end(io.BytesIO(b"\\end\\\n"))
    read_end(io.BytesIO(b"\\end\\"))
    with pytest.raises(FormatError):
        read_end(io.BytesIO(b"\n\\end\\\n"))
    with pytest.raises(FormatError):
        read_end(io.BytesIO(b"\\the end\\\n"))
    with pytest.raises(FormatError):
        read_end(io.BytesIO(b""))


def test_reader_sections():
    model = (
        b"\n\\data\\\nngram 1=2\nngram 2=1\n\n"
        b"\\1-grams:\n-1.0\ta\t-0.5\n-1.5\tb\t-0.2\n\n"
        b"\\2-grams:\n-0.3\ta b\n\n"
        b"\\end\\\n"
    )
    reader = ArpaReader(io.BytesIO(model))
    assert reader.read_counts() == [2, 1]
    reader.read_ngram_header(1)
    assert list(reader.read_ngrams()) == [b"-1.0\ta\t-0.5", b"-1.5\tb\t-0.2"]
    reader.read_ngram_header(2)
    assert list(reader.read_ngrams()) == [b"-0.3\ta b"]
    reader.read_end()


def test_reader_section_without_blank_line():
    """ A section may end directly with the next marker """
    reader = ArpaReader(io.BytesIO(
        b"\\1-grams:\n-1.0\ta\n\\2-grams:\n-0.3\ta a\n\\end\\\n"
    ))
    reader.read_ngram_header(1)
    assert list(reader.read_ngrams()) == [b"-1.0\ta"]
    reader.read_ngram_header(2)
    assert list(reader.read_ngrams()) == [b"-0.3\ta a"]
    reader.read_end()
