from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.constants import LONG_FORM_KEYS

logger = logging.getLogger(__name__)


class LongForm(BaseModel):
    """
    A definition of an acronym, with the variations of it found in the literature.

    Records come straight from the dictionary service, e.g.
    ``{"lf": "heavy meromyosin", "freq": 267, "since": 1971, "vars": [...]}``.
    """

    model_config = ConfigDict(frozen=True, strict=True, populate_by_name=True)

    name: str = Field(alias="lf")
    frequency: int = Field(alias="freq", ge=0)
    since: int  # year the definition was first seen
    variations: tuple[LongForm, ...] = Field(default=(), alias="vars")

    def __str__(self) -> str:
        return f"lf: {self.name}, freq: {self.frequency}, since: {self.since}"

    @classmethod
    def from_record(cls, record: Any) -> LongForm | None:
        """
        Parse a record and its nested variations.

        Args:
            record: Decoded record from the service

        Returns:
            The parsed node, or None if the record lacks a well typed name, frequency or year
        """
        if not isinstance(record, Mapping):
            return None

        try:
            node = cls.model_validate({key: record[key] for key in LONG_FORM_KEYS if key in record})
        except ValidationError as e:
            logger.debug(f"Skipping long form record {record!r}: {e.error_count()} invalid field(s)")
            return None

        return node.model_copy(update={"variations": cls.from_records(record.get("vars"))})

    @classmethod
    def from_records(cls, records: Any) -> tuple[LongForm, ...]:
        """Parse a list of records, leaving out the ones that fail to parse."""
        if not isinstance(records, list):
            return ()
        return tuple(node for node in map(cls.from_record, records) if node is not None)


class Acronym(BaseModel):
    """An abbreviation and the long forms it stands for."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    short_form: str = Field(alias="sf")
    long_forms: tuple[LongForm, ...] = Field(default=(), alias="lfs")

    @classmethod
    def from_record(cls, record: Any) -> Acronym | None:
        if not isinstance(record, Mapping):
            return None

        short_form = record.get("sf")
        long_forms = record.get("lfs")
        if not isinstance(short_form, str) or not isinstance(long_forms, list):
            return None

        return cls(short_form=short_form, long_forms=LongForm.from_records(long_forms))
