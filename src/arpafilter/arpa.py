"""

    Arpafilter: Vocabulary filtering of ARPA language models

    arpa.py

    Copyright (C) 2020 Miðeind ehf.

    This software is licensed under the MIT License:

        Permission is hereby granted, free of charge, to any person
        obtaining a copy of this software and associated documentation
        files (the "Software"), to deal in the Software without restriction,
        including without limitation the rights to use, copy, modify, merge,
        publish, distribute, sublicense, and/or sell copies of the Software,
        and to permit persons to whom the Software is furnished to do so,
        subject to the following conditions:

        The above copyright notice and this permission notice shall be
        included in all copies or substantial portions of the Software.

        THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
        EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
        MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
        IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
        CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
        TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
        SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.


    This module reads and writes the structural parts of an ARPA
    language model file:

        <blank line>
        \\data\\
        ngram 1=<count>
        ngram 2=<count>
        ...
        <blank line>
        \\1-grams:
        <records>
        <blank line>
        \\2-grams:
        <records>
        <blank line>
        \\end\\

    The header block (the "counts") lists how many n-grams of each
    length the file contains. The records themselves are passed through
    as opaque byte strings; only their word fields are of interest to
    the filter, and those are extracted in filter.py.

    All functions work on binary streams and bytes objects. Lines are
    compared after stripping the line terminator.

"""

from typing import List, Sequence, Iterator, Optional, IO, Any

from .errors import FormatError, TruncatedInputError


DATA_MARKER = b"\\data\\"
END_MARKER = b"\\end\\"


def section_marker(length: int) -> bytes:
    """ Return the marker line that starts the section for n-grams
        of the given length, e.g. b"\\2-grams:" """
    return "\\{0}-grams:".format(length).encode("ascii")


def encode_counts(counts: Sequence[int]) -> bytes:
    """ Encode the n-gram counts as an ARPA header block, including
        the leading and trailing blank lines """
    parts = [b"\n", DATA_MARKER, b"\n"]
    for length, count in enumerate(counts, start=1):
        if count < 0:
            raise ValueError("N-gram counts must be non-negative")
        parts.append("ngram {0}={1}\n".format(length, count).encode("ascii"))
    parts.append(b"\n")
    return b"".join(parts)


def size_needed_for_counts(counts: Sequence[int]) -> int:
    """ Return the number of bytes that the header for the given
        counts occupies """
    return len(encode_counts(counts))


def write_counts(f: IO[bytes], counts: Sequence[int]) -> None:
    """ Write the header block to f at its current position.
        Seeking is the responsibility of the caller. """
    f.write(encode_counts(counts))


def _getline(f: Any) -> Optional[bytes]:
    """ Read a line from f, without its terminator.
        Returns None at end of input. """
    line = f.readline()
    if not line:
        return None
    return line.rstrip(b"\r\n")


def _parse_count(line: bytes, expected: int) -> int:
    """ Parse a header line of the form 'ngram <length>=<count>',
        checking that the length is the expected one """
    if not line.startswith(b"ngram "):
        raise FormatError("Header line doesn't begin with \"ngram \"", line)
    length, equals, count = line[6:].partition(b"=")
    if not equals:
        raise FormatError("No equals sign in header line", line)
    # Plain unsigned decimals only: no sign, padding or underscores
    if not (length.isdigit() and count.isdigit()):
        raise FormatError("Invalid number in header line", line)
    n = int(length)
    c = int(count)
    if n != expected:
        raise FormatError(
            "N-gram length {0} is not the expected {1}".format(n, expected), line
        )
    return c


def read_counts(f: Any) -> List[int]:
    """ Read the header block from f and return the list of n-gram
        counts, where index i holds the count of (i+1)-grams.
        The lengths must appear in order, starting from 1. """
    counts = []  # type: List[int]
    line = _getline(f)
    if line is None:
        raise TruncatedInputError("End of input while reading the first line")
    if line:
        raise FormatError("First line is not blank", line)
    line = _getline(f)
    if line is None:
        raise TruncatedInputError("End of input while reading the \\data\\ marker")
    if line != DATA_MARKER:
        raise FormatError("Second line is not the \\data\\ marker", line)
    while True:
        line = _getline(f)
        if line is None:
            raise TruncatedInputError("End of input before the end of the header")
        if not line:
            return counts
        counts.append(_parse_count(line, len(counts) + 1))


def read_ngram_header(f: Any, length: int) -> None:
    """ Skip blank lines and read the marker of the section
        containing n-grams of the given length """
    while True:
        line = _getline(f)
        if line is None:
            raise TruncatedInputError(
                "End of input while looking for the {0}-gram section".format(length)
            )
        if line:
            break
    if line != section_marker(length):
        raise FormatError("Wrong n-gram section header", line)


def read_end(f: Any) -> None:
    """ Read the \\end\\ marker that terminates the model """
    line = _getline(f)
    if line is None:
        raise TruncatedInputError("End of input while looking for \\end\\")
    if line != END_MARKER:
        raise FormatError("Bad end marker", line)


class ArpaReader:

    """ A reader for ARPA model streams that allows one line
        of pushback, so that a section can end either with a blank
        line or directly with the next marker. """

    def __init__(self, f: IO[bytes]) -> None:
        self._f = f
        self._pending = None  # type: Optional[bytes]

    def readline(self) -> bytes:
        """ Return the next raw line, or b"" at end of input """
        if self._pending is not None:
            line, self._pending = self._pending, None
            return line
        return self._f.readline()

    def unread(self, line: bytes) -> None:
        """ Push a line back, to be returned by the next readline() """
        assert self._pending is None
        self._pending = line

    def read_counts(self) -> List[int]:
        return read_counts(self)

    def read_ngram_header(self, length: int) -> None:
        read_ngram_header(self, length)

    def read_ngrams(self) -> Iterator[bytes]:
        """ Yield the records of the current section, without line
            terminators. The section ends at a blank line (which is
            consumed), at the next marker line (which is not), or at
            the end of input. """
        while True:
            line = self.readline()
            if not line:
                return
            record = line.rstrip(b"\r\n")
            if not record:
                return
            if record.startswith(b"\\"):
                self.unread(line)
                return
            yield record

    def read_end(self) -> None:
        read_end(self)
