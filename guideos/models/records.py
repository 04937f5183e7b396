"""
Shared base for persisted records.

Records round-trip through JSON blobs written by older builds, so the
base model is lenient on input (numbers become text, unknown keys are
ignored) and writes back the same camelCase field names it read.
"""

import secrets
import string
import time

from pydantic import BaseModel, ConfigDict, Field


_ID_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase


def new_record_id() -> str:
    """
    Mint a time-based record id.

    Milliseconds since the epoch followed by a random base-36 suffix.
    Descending string order of these ids approximates recency, which the
    payment list relies on.
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_SUFFIX_ALPHABET) for _ in range(9))
    return f"{millis}{suffix}"


class Record(BaseModel):
    """A member of a persisted collection, identified by `id`."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(
        default="",
        description="Opaque unique id; empty until first saved"
    )

    def to_storage(self) -> dict:
        """Dump to the JSON-ready dict written to the store."""
        return self.model_dump(mode="json", by_alias=True)
