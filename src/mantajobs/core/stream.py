# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Incremental decoder for concatenated JSON streams.

List responses are not a JSON array but a sequence of complete JSON values
separated by optional whitespace (usually newlines):

    {"name":"a","mtime":"..."}
    {"name":"b","mtime":"..."}

iter_json_values() reads the body in chunks and yields one value at a time,
so memory stays bounded by the largest single value rather than the whole
listing.
"""

import codecs
import json
import re
from collections.abc import Iterator
from typing import Any, Protocol

from mantajobs.errors import StreamDecodeError

DEFAULT_CHUNK_SIZE = 8192

_WHITESPACE = re.compile(r"[ \t\n\r]*")

# A decode error this close to the end of the buffer may be a value cut off
# by the chunk boundary ("tru", "-Infinit", a split \uXXXX surrogate pair)
_TRUNCATION_WINDOW = 16


class Readable(Protocol):
    def read(self, size: int = -1) -> bytes: ...


def _may_be_truncated(error: json.JSONDecodeError, buffered: int) -> bool:
    """Whether more input could turn a failed decode into a valid value.

    A valid prefix only fails where the data runs out. The exception is an
    open string, which the decoder reports at its opening quote.
    """
    if error.msg.startswith("Unterminated string"):
        return True
    return error.pos >= buffered - _TRUNCATION_WINDOW


def iter_json_values(stream: Readable, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Any]:
    """Yield each JSON value from a stream of concatenated JSON values.

    Exhausting the stream between values ends iteration normally; an empty
    stream yields nothing. Running out of data inside a value, or any
    malformed input, raises StreamDecodeError. Input that could not be the
    start of a value fails without reading further.

    Args:
        stream: Binary file-like object; only read() is used
        chunk_size: Bytes requested per read

    Raises:
        StreamDecodeError: On malformed JSON, truncation or invalid UTF-8
    """
    decoder = json.JSONDecoder()
    utf8 = codecs.getincrementaldecoder("utf-8")()
    buffer = ""
    pos = 0
    eof = False

    def fill() -> None:
        nonlocal buffer, pos, eof
        chunk = stream.read(chunk_size)
        try:
            text = utf8.decode(chunk, final=not chunk)
        except UnicodeDecodeError as e:
            raise StreamDecodeError(f"invalid UTF-8 in stream: {e}") from e
        buffer = buffer[pos:] + text
        pos = 0
        if not chunk:
            eof = True

    while True:
        pos = _WHITESPACE.match(buffer, pos).end()
        if pos == len(buffer):
            if eof:
                return
            fill()
            continue

        try:
            value, end = decoder.raw_decode(buffer, pos)
        except json.JSONDecodeError as e:
            if eof or not _may_be_truncated(e, len(buffer)):
                raise StreamDecodeError(f"malformed or truncated JSON value: {e.msg}") from e
            fill()
            continue

        # A bare number at the end of the buffer may continue in the next chunk
        if end == len(buffer) and not eof and not isinstance(value, (dict, list, str)):
            fill()
            continue

        yield value
        pos = end
