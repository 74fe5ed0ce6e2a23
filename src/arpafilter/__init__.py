"""

    Arpafilter: Vocabulary filtering of ARPA language models

    __init__.py

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


    This module exposes the arpafilter API, i.e. the identifiers that are
    directly accessible via the arpafilter module object after importing it.

"""

# Expose the arpafilter API

from .arpa import (
    ArpaReader, encode_counts, size_needed_for_counts, write_counts,
    read_counts, read_ngram_header, read_end, section_marker,
)
from .errors import (
    ArpaFilterError, FormatError, TruncatedInputError, StateViolationError,
    ShapeMismatchError, HeaderOverflowError,
)
from .output import OutputModel, State
from .vocab import (
    Vocabulary, load_vocabulary, read_vocabularies, RESERVED_WORDS,
    SENTENCE_BEGIN, SENTENCE_END, UNKNOWN_WORD,
)
from .router import MultipleOutputs
from .filter import (
    ngram_words, accepting, filter_model, filter_single, filter_multiple,
)

__author__ = "Miðeind ehf."
__copyright__ = "(C) 2020 Miðeind ehf."
__version__ = "0.1.0"
