"""

    Arpafilter: Vocabulary filtering of ARPA language models

    filter.py

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


    This module runs the filter: it reads an ARPA model once, record
    by record, and copies each n-gram to every output whose vocabulary
    contains all of the n-gram's words. Probabilities and backoff
    weights are copied unchanged; no renormalization is done.

    The header of the input model is used to size the header
    reservation of each output, since a filtered model can never
    contain more n-grams of a given length than its input.

"""

from typing import Callable, Dict, List, Mapping, Sequence, IO, Any
import logging

from .arpa import ArpaReader
from .errors import FormatError
from .output import OutputModel
from .router import MultipleOutputs, Opener
from .vocab import Vocabulary


logger = logging.getLogger(__name__)

Tokenizer = Callable[[bytes, int], List[bytes]]


def ngram_words(record: bytes, length: int) -> List[bytes]:
    """ Return the words of an n-gram record of the given length.
        A record consists of a probability, the words, and an
        optional backoff weight, separated by whitespace. """
    fields = record.split()
    if len(fields) < length + 1:
        raise FormatError(
            "Expected a probability and {0} words in n-gram record".format(length),
            record,
        )
    return fields[1:length + 1]


def accepting(words: Sequence[bytes], vocabularies: Mapping[str, Vocabulary]) -> List[str]:
    """ Return the names of the vocabularies that contain
        every one of the words, in mapping order """
    return [
        name for name, vocab in vocabularies.items()
        if all(w in vocab for w in words)
    ]


def filter_model(
    model: IO[bytes], outputs: MultipleOutputs, *, tokenize: Tokenizer = ngram_words
) -> Dict[str, List[int]]:
    """ Filter the ARPA model read from the binary stream model into
        outputs, and return the final counts of each output """
    reader = ArpaReader(model)
    counts = reader.read_counts()
    logger.info(
        "Filtering a model with counts %s into %d output(s)", counts, len(outputs)
    )
    outputs.reserve_for_counts(counts)
    vocabs = outputs.vocabularies
    for length, expected in enumerate(counts, start=1):
        reader.read_ngram_header(length)
        outputs.begin_length(length)
        seen = 0
        for record in reader.read_ngrams():
            seen += 1
            if seen > expected:
                # The header space reserved from the input counts
                # would not hold the output counts
                raise FormatError(
                    "Header declares {0} {1}-grams but the section contains more"
                    .format(expected, length),
                    record,
                )
            for name in accepting(tokenize(record, length), vocabs):
                outputs.output(name).write_record(record)
        if seen < expected:
            logger.warning(
                "Header declares %d %d-grams but the section contains %d",
                expected, length, seen
            )
        outputs.end_length(length)
    reader.read_end()
    outputs.finish()
    result = outputs.counts()
    for name, c in result.items():
        logger.info("Output %s: %s", name, c)
    return result


def filter_single(
    model: IO[bytes],
    vocabulary: Vocabulary,
    sink: Any,
    *,
    tokenize: Tokenizer = ngram_words
) -> List[int]:
    """ Filter model into a single output, given either as a path
        or as a seekable binary stream, and return its counts """
    if hasattr(sink, "write"):
        name = getattr(sink, "name", None) or "output"
        opener = lambda _: OutputModel(sink, name=str(name))  # type: Opener
    else:
        name = str(sink)
        opener = OutputModel.open
    with MultipleOutputs({str(name): vocabulary}, opener=opener) as outputs:
        return filter_model(model, outputs, tokenize=tokenize)[str(name)]


def filter_multiple(
    model: IO[bytes],
    vocabularies: Sequence[Vocabulary],
    prefix: str,
    *,
    opener: Opener = OutputModel.open,
    tokenize: Tokenizer = ngram_words
) -> Dict[str, List[int]]:
    """ Filter model into one output per vocabulary, named
        <prefix>0, <prefix>1, ..., and return their counts """
    with MultipleOutputs.from_prefix(prefix, vocabularies, opener=opener) as outputs:
        return filter_model(model, outputs, tokenize=tokenize)
