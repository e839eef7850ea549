# feedback_api/services/json_column.py
"""
Encoding of the schema-less columns (`feedback_forms.fields` and
`feedback_responses.response_data`).

Decoding never raises. A stored value that cannot be parsed is logged and
reported as ``DecodeStatus.CORRUPT`` with an empty value, so a read path keeps
working while callers can still tell corrupt storage from genuinely empty data.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from feedback_api.core.errors import StorageError
from feedback_api.schemas.forms import FormField

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FIELDS = TypeAdapter(List[FormField])
_ANSWERS = TypeAdapter(dict[str, Any])


class DecodeStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class Decoded(Generic[T]):
    value: T
    status: DecodeStatus

    @property
    def corrupt(self) -> bool:
        return self.status is DecodeStatus.CORRUPT


def encode_fields(fields: Optional[List[FormField]]) -> Optional[str]:
    """An empty field list is stored as NULL."""
    if not fields:
        return None
    try:
        return _FIELDS.dump_json(fields, by_alias=True).decode("utf-8")
    except PydanticSerializationError as exc:
        logger.error("Could not serialize form fields: %s", exc)
        raise StorageError("form fields are not serializable") from exc


def decode_fields(raw: Optional[str]) -> Decoded[List[FormField]]:
    if raw is None or not raw.strip():
        return Decoded([], DecodeStatus.EMPTY)
    try:
        return Decoded(_FIELDS.validate_json(raw), DecodeStatus.OK)
    except ValidationError as exc:
        logger.warning("Stored form fields are corrupt, serving none: %s", exc)
        return Decoded([], DecodeStatus.CORRUPT)


def encode_response_data(data: dict[str, Any]) -> str:
    try:
        return _ANSWERS.dump_json(data).decode("utf-8")
    except PydanticSerializationError as exc:
        logger.error("Could not serialize response data: %s", exc)
        raise StorageError("response data is not serializable") from exc


def decode_response_data(raw: Optional[str]) -> Decoded[dict[str, Any]]:
    if raw is None or not raw.strip():
        return Decoded({}, DecodeStatus.EMPTY)
    try:
        return Decoded(_ANSWERS.validate_json(raw), DecodeStatus.OK)
    except ValidationError as exc:
        logger.warning("Stored response data is corrupt, serving none: %s", exc)
        return Decoded({}, DecodeStatus.CORRUPT)
