"""

    Arpafilter: Vocabulary filtering of ARPA language models

    router.py

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


    This module contains MultipleOutputs, which pairs each output
    destination with its own vocabulary so that one pass over an
    input model can scatter n-grams into many filtered models.

    MultipleOutputs does no filtering itself. The caller decides which
    destinations accept a record (see filter.accepting()) and writes
    the record to their OutputModel objects. All outputs are driven in
    lockstep from a single loop; the section helpers below simply
    apply the same step to every output.

"""

from typing import (
    Callable, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple
)
from types import MappingProxyType

from .output import OutputModel
from .vocab import Vocabulary


Opener = Callable[[str], OutputModel]


class MultipleOutputs:

    """ A fixed, ordered collection of (name, vocabulary, output)
        triples. The set of outputs never changes after construction. """

    def __init__(
        self,
        vocabularies: Mapping[str, Vocabulary],
        *,
        opener: Opener = OutputModel.open
    ) -> None:
        """ Open one output per entry of vocabularies, using opener
            to map the entry's name to an OutputModel. If any output
            cannot be opened, the ones already opened are closed
            and the exception is propagated. """
        outputs = {}  # type: Dict[str, OutputModel]
        try:
            for name in vocabularies:
                outputs[name] = opener(name)
        except BaseException:
            for out in outputs.values():
                out.close()
            raise
        self._vocabs = MappingProxyType(dict(vocabularies))
        self._outputs = outputs

    @classmethod
    def from_prefix(
        cls,
        prefix: str,
        vocabularies: Sequence[Vocabulary],
        count: Optional[int] = None,
        *,
        opener: Opener = OutputModel.open
    ) -> "MultipleOutputs":
        """ Create outputs named <prefix>0, <prefix>1, ..., one per
            vocabulary. If count is given, it must equal the number
            of vocabularies. """
        if count is not None and count != len(vocabularies):
            raise ValueError(
                "Expected {0} vocabularies, got {1}".format(count, len(vocabularies))
            )
        return cls(
            {"{0}{1}".format(prefix, i): v for i, v in enumerate(vocabularies)},
            opener=opener,
        )

    @property
    def vocabularies(self) -> Mapping[str, Vocabulary]:
        """ A read-only mapping of output names to vocabularies """
        return self._vocabs

    def names(self) -> List[str]:
        return list(self._outputs)

    def vocabulary(self, name: str) -> Vocabulary:
        return self._vocabs[name]

    def output(self, name: str) -> OutputModel:
        return self._outputs[name]

    def items(self) -> Iterator[Tuple[str, Vocabulary, OutputModel]]:
        for name, out in self._outputs.items():
            yield name, self._vocabs[name], out

    def counts(self) -> Dict[str, List[int]]:
        """ The counts finalized so far, by output name """
        return {name: out.counts for name, out in self._outputs.items()}

    def __len__(self) -> int:
        return len(self._outputs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._outputs)

    def reserve_for_counts(self, counts: Sequence[int]) -> None:
        for out in self._outputs.values():
            out.reserve_for_counts(counts)

    def begin_length(self, length: int) -> None:
        for out in self._outputs.values():
            out.begin_length(length)

    def end_length(self, length: int) -> None:
        for out in self._outputs.values():
            out.end_length(length)

    def finish(self) -> None:
        for out in self._outputs.values():
            out.finish()

    def close(self) -> None:
        for out in self._outputs.values():
            out.close()

    def __enter__(self) -> "MultipleOutputs":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
