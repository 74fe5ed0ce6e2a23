"""

    Arpafilter: Vocabulary filtering of ARPA language models

    output.py

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


    This module contains OutputModel, which streams a filtered ARPA
    model to a seekable binary sink.

    An ARPA file starts with the n-gram counts of each length, but a
    filter only knows how many n-grams of a given length it kept once
    the whole section has been written. There are two ways around this:

    1) Buffer the entire body in memory (or in a temporary file) and
       write the header first once everything is known. This works on
       any sink, but memory use grows with the size of the model.
    2) Reserve room for the header at the start of the sink by writing
       filler bytes, stream the body straight out, and finally seek back
       to the start and overwrite the filler with the real header.

    We use the second approach, which keeps memory use bounded no matter
    how large the model is, at the price of requiring a seekable sink.
    The reserved space is sized by encoding an upper bound of the final
    counts (normally the counts of the input model, which a filter can
    never exceed). Any part of the reservation that the real header does
    not use remains as blank lines before the first section marker,
    which ARPA readers skip. If the real header would not fit, finish()
    fails with HeaderOverflowError rather than clobbering the body.

    The writer is a simple state machine:

        CREATED -> HEADER_RESERVED -> (WRITING -> BETWEEN_LENGTHS)* -> FINISHED

    Calling an operation in the wrong state raises StateViolationError.

"""

from typing import List, Sequence, Optional, IO, Any
import io
import logging
from enum import Enum

from .arpa import encode_counts, size_needed_for_counts, section_marker, END_MARKER
from .errors import StateViolationError, ShapeMismatchError, HeaderOverflowError


logger = logging.getLogger(__name__)

# The byte used to fill the space reserved for the header
FILLER = b"\n"


class State(Enum):
    CREATED = "created"
    HEADER_RESERVED = "header reserved"
    WRITING = "writing length"
    BETWEEN_LENGTHS = "between lengths"
    FINISHED = "finished"
    CLOSED = "closed"


class OutputModel:

    """ Writes one ARPA model to a seekable binary sink, patching
        the header with the real counts when the model is finished """

    def __init__(self, f: IO[bytes], name: Optional[str] = None, *, owns: bool = False) -> None:
        """ Wrap the binary stream f. If owns is True, the stream is
            closed by close(); otherwise it is left open for the caller. """
        if not f.seekable():
            raise io.UnsupportedOperation(
                "Output model stream {0} must be seekable".format(name or f)
            )
        self._f = f
        self._owns = owns
        self.name = name
        self._state = State.CREATED
        # The length currently being written, and how many records
        # of that length have been written so far
        self._length = 0
        self._counter = 0
        # Finalized counts, index i holding the count of (i+1)-grams
        self._counts = []  # type: List[int]
        # Number of bytes reserved for the header
        self._reserved = 0
        # Number of lengths that the reservation was sized for, if known
        self._reserved_shape = None  # type: Optional[int]

    @classmethod
    def open(cls, path: Any) -> "OutputModel":
        """ Create (or truncate) the file at path and return an
            OutputModel that owns it """
        f = open(path, "wb")
        try:
            return cls(f, name=str(path), owns=True)
        except BaseException:
            f.close()
            raise

    @property
    def state(self) -> State:
        return self._state

    @property
    def length(self) -> int:
        """ The n-gram length currently or most recently written """
        return self._length

    @property
    def counts(self) -> List[int]:
        """ The counts finalized so far """
        return list(self._counts)

    def _require(self, operation: str, *states: State) -> None:
        if self._state not in states:
            raise StateViolationError(
                "Cannot {0} an output model in state '{1}'"
                .format(operation, self._state.value)
            )

    def reserve(self, byte_count: int) -> None:
        """ Write byte_count filler bytes, to be overwritten by
            the header in finish() """
        self._require("reserve header space in", State.CREATED)
        if byte_count < 0:
            raise ValueError("Cannot reserve a negative number of bytes")
        self._f.write(FILLER * byte_count)
        self._reserved = byte_count
        self._state = State.HEADER_RESERVED
        logger.debug("Reserved %d bytes for the header of %s", byte_count, self.name)

    def reserve_for_counts(self, counts: Sequence[int]) -> None:
        """ Reserve enough space for a header with the same number of
            lengths as counts, where no count exceeds the corresponding
            one in counts """
        self.reserve(size_needed_for_counts(counts))
        self._reserved_shape = len(counts)

    def begin_length(self, length: int) -> None:
        """ Start the section of n-grams of the given length.
            Lengths must be written in order, starting from 1. """
        self._require("begin a section in", State.HEADER_RESERVED, State.BETWEEN_LENGTHS)
        if length != len(self._counts) + 1:
            raise StateViolationError(
                "Cannot begin the {0}-gram section, expected {1}-grams"
                .format(length, len(self._counts) + 1)
            )
        self._f.write(section_marker(length) + b"\n")
        self._length = length
        self._counter = 0
        self._state = State.WRITING

    def write_record(self, record: bytes) -> None:
        """ Write one n-gram record, which should not include
            a line terminator """
        self._require("write a record to", State.WRITING)
        self._f.write(record)
        self._f.write(b"\n")
        self._counter += 1

    def end_length(self, length: int) -> None:
        """ Finish the section of n-grams of the given length
            and note how many records it contains """
        self._require("end a section in", State.WRITING)
        if length != self._length:
            raise StateViolationError(
                "Cannot end the {0}-gram section while writing {1}-grams"
                .format(length, self._length)
            )
        self._f.write(b"\n")
        if length > len(self._counts):
            self._counts.extend([0] * (length - len(self._counts)))
        self._counts[length - 1] = self._counter
        self._state = State.BETWEEN_LENGTHS

    def finish(self) -> None:
        """ Write the end marker, then go back to the start of the
            sink and overwrite the reserved space with the real header """
        self._require("finish", State.HEADER_RESERVED, State.BETWEEN_LENGTHS)
        if self._reserved_shape is not None and self._reserved_shape != len(self._counts):
            raise ShapeMismatchError(
                "Header space was reserved for {0} lengths but {1} were written"
                .format(self._reserved_shape, len(self._counts))
            )
        header = encode_counts(self._counts)
        if len(header) > self._reserved:
            raise HeaderOverflowError(
                "Header needs {0} bytes but only {1} were reserved"
                .format(len(header), self._reserved)
            )
        self._f.write(END_MARKER + b"\n")
        self._f.seek(0)
        self._f.write(header)
        self._f.seek(0, io.SEEK_END)
        self._f.flush()
        self._state = State.FINISHED
        logger.debug("Finished %s with counts %s", self.name, self._counts)

    def close(self) -> None:
        """ Release the sink. An unfinished model is left incomplete. """
        if self._state is State.CLOSED:
            return
        self._state = State.CLOSED
        if self._owns:
            self._f.close()

    def __enter__(self) -> "OutputModel":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
