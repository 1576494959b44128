"""
types.py

Column types shared by the models.

Ordered lists (authors, jury members, expertises, education entries,
presentation blocks) are stored as JSON text. JSONEncodedList encodes on
write and decodes on read so the rest of the code only ever sees Python
lists. Substring search still runs against the serialized text.

"""

import json
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import Text
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def decode_list(value) -> list:
    """Best-effort conversion of stored/received data into a list."""
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except ValueError:
            logger.warning("Could not decode JSON list value %r", value[:80])
            return []
        return parsed if isinstance(parsed, list) else []
    return []


class JSONEncodedList(TypeDecorator):
    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(decode_list(value), ensure_ascii=False, default=_json_default)

    def process_result_value(self, value, dialect):
        return decode_list(value)

    def coerce_compared_value(self, op, value):
        # LIKE against the column compares raw text, not an encoded list
        return self.impl.coerce_compared_value(op, value)


def _json_default(value):
    if isinstance(value, uuid.UUID):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
