from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

from client.services.base import ServiceBase
from core.constants import (
    QUERY_PARAMETERS,
    QUERY_SAFE_CHARACTERS,
    QUERY_SEPARATOR,
    QUERY_TRIM_CHARACTERS,
)
from core.errors import (
    AcronymError,
    InvalidFormatError,
    InvalidParameterError,
    LookupFailedError,
    MissingTermError,
    NoResultError,
)
from core.models.long_form import Acronym
from core.models.network import LookupOutcome

logger = logging.getLogger(__name__)


def normalize_query(term: str | None) -> str:
    """
    Turn a search term typed by the user into a lookup key.

    Args:
        term: Raw term, e.g. " SF=HMM "

    Returns:
        Lower-cased, percent-encoded key, e.g. "sf=hmm"

    Raises:
        MissingTermError: the term is empty once trimmed
        InvalidFormatError: the term is not "param=<term>"
        InvalidParameterError: param is neither "sf" nor "lf"
    """
    search_term = (term or "").strip().strip(QUERY_TRIM_CHARACTERS).lower()
    if not search_term:
        raise MissingTermError()

    components = search_term.split(QUERY_SEPARATOR)
    if len(components) < 2 or not components[-1]:
        raise InvalidFormatError()

    if components[0].strip() not in QUERY_PARAMETERS:
        raise InvalidParameterError()

    return quote(search_term, safe=QUERY_SAFE_CHARACTERS)


class AcronymService(ServiceBase):
    """Looks up search terms and turns the first record of each answer into an Acronym."""

    def __init__(self, *args) -> None:
        super().__init__(*args)
        self.current_key: str | None = None
        self.current_acronym: Acronym | None = None
        self.last_error: AcronymError | None = None
        self.on_result_callbacks: list[Callable[[Acronym], Any]] = []
        self.on_error_callbacks: list[Callable[[AcronymError], Any]] = []

    def register_result_callback(self, cb: Callable[[Acronym], Any]) -> None:
        self.on_result_callbacks.append(cb)

    def register_error_callback(self, cb: Callable[[AcronymError], Any]) -> None:
        self.on_error_callbacks.append(cb)

    @property
    def is_loading(self) -> bool:
        return self.current_key is not None and self.app.lookup_client.pending_key == self.current_key

    def lookup(self, term: str | None) -> str | None:
        """
        Start looking up a search term.

        Returns:
            The lookup key, or None if the term was rejected
        """
        try:
            key = normalize_query(term)
        except AcronymError as e:
            self._handle_error(e)
            return None

        self.current_key = key
        self.current_acronym = None
        self.last_error = None
        self.app.lookup_client.resolve(key, lambda outcome: self._handle_outcome(key, outcome))
        return key

    def cancel(self) -> None:
        self.app.lookup_client.cancel()
        self.current_key = None

    def _handle_outcome(self, key: str, outcome: LookupOutcome) -> None:
        if outcome.status == "ignored":
            logger.info(f"Lookup for {key!r} already in progress.")
            return

        if outcome.status == "empty":
            self._handle_error(NoResultError())
            return

        if not outcome.succeeded:
            self._handle_error(LookupFailedError(outcome.error))
            return

        first = outcome.records[0] if outcome.records else None
        if first is None:
            self._handle_error(NoResultError())
            return

        acronym = Acronym.from_record(first)
        if acronym is None:
            logger.warning(f"Unexpected record for {key!r}: {first!r}")
            self._handle_error(AcronymError())
            return

        self.current_acronym = acronym
        for cb in self.on_result_callbacks:
            try:
                cb(acronym)
            except Exception:
                logger.exception("Error in acronym result callback")

    def _handle_error(self, error: AcronymError) -> None:
        self.last_error = error
        for cb in self.on_error_callbacks:
            try:
                cb(error)
            except Exception:
                logger.exception("Error in acronym error callback")
