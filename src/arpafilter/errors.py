"""

    Arpafilter: Vocabulary filtering of ARPA language models

    errors.py

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


    This module defines the exceptions raised by arpafilter.

    None of them is recoverable: the ARPA text format has no way of
    resuming in the middle of a section, so callers are expected to
    abandon the affected output (or the whole run). Underlying I/O
    failures are not wrapped; they surface as the builtin OSError.

"""

from typing import Optional


class ArpaFilterError(Exception):

    """ Base class for all arpafilter errors """


class FormatError(ArpaFilterError):

    """ A structurally invalid header line or section marker.
        The offending line, if any, is available as self.line. """

    def __init__(self, message: str, line: Optional[bytes] = None) -> None:
        if line is not None:
            message = "{0}: \"{1}\"".format(
                message, line.decode("utf-8", errors="replace")
            )
        super().__init__(message)
        self.line = line


class TruncatedInputError(FormatError):

    """ End of input was reached where more content was required """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class StateViolationError(ArpaFilterError):

    """ An output operation was invoked in the wrong state """


class ShapeMismatchError(ArpaFilterError):

    """ The number of n-gram lengths written does not match the
        header space that was reserved for them """


class HeaderOverflowError(ShapeMismatchError):

    """ The final header does not fit into the reserved space """
