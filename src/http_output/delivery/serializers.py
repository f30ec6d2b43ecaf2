"""
Module: serializers.py
Description: Request body serializers.

Turns a chunk of records into a content type and a byte body. Each
format is a class implementing serialize(); the engine picks one from
SERIALIZERS once, at construction.

Key Components:
- FormSerializer: application/x-www-form-urlencoded, first record only
- JsonSerializer: application/json, native numbers, lossless bytes
- TextSerializer: text/plain, the record's 'message' field verbatim

Dependencies: json, urllib
"""

import json
from typing import Any, Dict, NamedTuple
from urllib.parse import urlencode

from http_output.errors import ConfigError, SerializationError
from http_output.models.config import SerializerKind
from http_output.models.record import Chunk, Record, Scalar
from http_output.utils.logger import get_logger

logger = get_logger(__name__)


class SerializedBody(NamedTuple):
    content_type: str
    body: bytes


def _first_record(chunk: Chunk, format_name: str) -> Record:
    """Return the record sent by single-record formats, warning on extras."""
    if len(chunk) > 1:
        logger.warning(
            "Chunk holds more than one record, sending the first only",
            serializer=format_name,
            dropped_records=len(chunk) - 1
        )
    return chunk[0]


class FormSerializer:
    content_type = "application/x-www-form-urlencoded"

    def serialize(self, chunk: Chunk) -> SerializedBody:
        record = _first_record(chunk, "form")
        pairs = [(str(key), self._form_value(value)) for key, value in record.items()]
        # bytes values are percent-encoded byte-wise by urlencode
        return SerializedBody(self.content_type, urlencode(pairs).encode("ascii"))

    @staticmethod
    def _form_value(value: Scalar):
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        return str(value)


class JsonSerializer:
    """
    Serialize records as JSON.

    Integers and floats keep their JSON number types. Byte values become
    strings: valid UTF-8 decodes normally, anything else is carried with
    surrogate escapes so the receiver can recover the original bytes with
    ``.encode("utf-8", "surrogateescape")``.
    """

    content_type = "application/json"

    def serialize(self, chunk: Chunk) -> SerializedBody:
        if len(chunk) == 1:
            document: Any = self._json_record(chunk[0])
        else:
            document = [self._json_record(record) for record in chunk]

        try:
            body = json.dumps(document, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Record is not JSON serializable: {e}") from e

        return SerializedBody(self.content_type, body)

    @staticmethod
    def _json_record(record: Record) -> Dict[str, Any]:
        return {
            str(key): value.decode("utf-8", "surrogateescape")
            if isinstance(value, (bytes, bytearray)) else value
            for key, value in record.items()
        }


class TextSerializer:
    content_type = "text/plain"
    message_key = "message"

    def serialize(self, chunk: Chunk) -> SerializedBody:
        record = _first_record(chunk, "text")
        if self.message_key not in record:
            raise SerializationError(
                f"text serializer requires a '{self.message_key}' field"
            )

        message = record[self.message_key]
        if isinstance(message, (bytes, bytearray)):
            body = bytes(message)
        else:
            body = str(message).encode("utf-8")

        return SerializedBody(self.content_type, body)


SERIALIZERS = {
    SerializerKind.FORM: FormSerializer,
    SerializerKind.JSON: JsonSerializer,
    SerializerKind.TEXT: TextSerializer,
}


def get_serializer(kind: SerializerKind):
    """
    Resolve the serializer for a configured kind.

    Raises:
        ConfigError: If the kind is not a known format
    """
    try:
        return SERIALIZERS[SerializerKind(kind)]()
    except (KeyError, ValueError) as e:
        raise ConfigError(f"Unknown serializer: {kind!r}") from e
