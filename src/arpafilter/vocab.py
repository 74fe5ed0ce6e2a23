"""

    Arpafilter: Vocabulary filtering of ARPA language models

    vocab.py

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


    This module builds the vocabularies that decide which n-grams
    are kept. A vocabulary is an immutable set of words, stored as
    bytes and compared byte for byte, without any normalization.

    A filtered model needs the sentence markers and the unknown word
    token to remain usable. Vocabulary.build() only contains the words
    it reads; use seeded() or the load_vocabulary() and
    read_vocabularies() helpers to add the reserved words.

"""

from typing import FrozenSet, Iterable, Iterator, List, Union, IO, Any

SENTENCE_BEGIN = b"<s>"
SENTENCE_END = b"</s>"
UNKNOWN_WORD = b"<unk>"

RESERVED_WORDS = frozenset((SENTENCE_BEGIN, SENTENCE_END, UNKNOWN_WORD))


def _tokens(line: Union[bytes, str]) -> List[bytes]:
    """ Split a line into whitespace-delimited tokens, as bytes """
    if isinstance(line, str):
        return [w.encode("utf-8") for w in line.split()]
    return line.split()


class Vocabulary:

    """ An immutable set of words (bytes) """

    __slots__ = ("_words",)

    def __init__(self, words: Iterable[bytes] = ()) -> None:
        self._words = frozenset(words)  # type: FrozenSet[bytes]

    @classmethod
    def build(cls, stream: Iterable[Any]) -> "Vocabulary":
        """ Read whitespace-delimited words from a text or binary
            stream until it is exhausted. Duplicates are ignored. """
        words = set()
        try:
            for line in stream:
                words.update(_tokens(line))
        except UnicodeDecodeError as e:
            raise OSError("Unable to read vocabulary: {0}".format(e)) from e
        return cls(words)

    def seeded(self) -> "Vocabulary":
        """ Return a copy of this vocabulary that also contains
            the sentence markers and the unknown word token """
        return Vocabulary(self._words | RESERVED_WORDS)

    def contains(self, word: bytes) -> bool:
        return word in self._words

    def __contains__(self, word: object) -> bool:
        return word in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._words)

    def __repr__(self) -> str:
        return "Vocabulary({0:,} words)".format(len(self._words))


def load_vocabulary(path: Any, *, seed: bool = True) -> Vocabulary:
    """ Load a vocabulary from a file of whitespace-delimited words """
    with open(path, "rb") as f:
        vocab = Vocabulary.build(f)
    return vocab.seeded() if seed else vocab


def read_vocabularies(stream: IO[Any], *, seed: bool = True) -> List[Vocabulary]:
    """ Read one vocabulary per line of the stream, for filtering
        into multiple outputs. Line i becomes the vocabulary of
        output i; an empty line gives a vocabulary without words. """
    vocabs = []  # type: List[Vocabulary]
    try:
        for line in stream:
            vocab = Vocabulary(_tokens(line))
            vocabs.append(vocab.seeded() if seed else vocab)
    except UnicodeDecodeError as e:
        raise OSError("Unable to read vocabularies: {0}".format(e)) from e
    return vocabs
