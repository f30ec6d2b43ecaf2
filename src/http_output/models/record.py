"""
Module: record.py
Description: Record and chunk types handed over by the host pipeline.

A record is a flat mapping of string keys to scalar values; a chunk is
the ordered sequence of records delivered as one HTTP request.
"""

from typing import Mapping, Sequence, Union

Scalar = Union[str, int, float, bytes]

Record = Mapping[str, Scalar]

Chunk = Sequence[Record]
