"""Tests for search term normalization and the acronym service."""

import json
from types import SimpleNamespace

import httpx
import pytest

from client.services import AcronymService, normalize_query
from core.errors import (
    AcronymError,
    InvalidFormatError,
    InvalidParameterError,
    LookupFailedError,
    MissingTermError,
    NoResultError,
)
from core.models.network import LookupOutcome

RECORD = {
    "sf": "HMM",
    "lfs": [
        {
            "lf": "heavy meromyosin",
            "freq": 267,
            "since": 1971,
            "vars": [{"lf": "Heavy meromyosin", "freq": 20, "since": 1976}],
        },
        {"lf": "hidden Markov model", "freq": 37, "since": 1992},
    ],
}


class TestNormalizeQuery:
    @pytest.mark.parametrize(
        "term, key",
        [
            ("sf=HMM", "sf=hmm"),
            ("  SF=hmm\n", "sf=hmm"),
            ("sf=hmm?!", "sf=hmm"),
            ("lf=heavy meromyosin", "lf=heavy%20meromyosin"),
            ("sf=a&b", "sf=a%26b"),
            ("sf=a/b", "sf=a/b"),
            ("sf=mé", "sf=m%C3%A9"),
        ],
    )
    def test_valid_terms(self, term, key):
        assert normalize_query(term) == key

    @pytest.mark.parametrize("term", ["", "   ", "?!.", None])
    def test_missing_term(self, term):
        with pytest.raises(MissingTermError):
            normalize_query(term)

    @pytest.mark.parametrize("term", ["hmm", "sf=", "sf=?"])
    def test_invalid_format(self, term):
        with pytest.raises(InvalidFormatError):
            normalize_query(term)

    def test_invalid_parameter(self):
        with pytest.raises(InvalidParameterError):
            normalize_query("xx=hmm")


@pytest.fixture
def service(client, settings):
    app = SimpleNamespace(settings=settings, lookup_client=client)
    service = AcronymService(app)
    service.results = []
    service.errors = []
    service.register_result_callback(service.results.append)
    service.register_error_callback(service.errors.append)
    return service


class TestAcronymService:
    def test_lookup_resolves_normalized_key(self, service, client):
        assert service.lookup("SF=HMM") == "sf=hmm"
        assert client.pending_key == "sf=hmm"
        assert service.is_loading

    def test_result(self, service, client, transport):
        service.lookup("sf=hmm")
        transport.complete(transport.started[0], json.dumps([RECORD]).encode())
        client.process_events()

        (acronym,) = service.results
        assert acronym.short_form == "HMM"
        assert [lf.name for lf in acronym.long_forms] == ["heavy meromyosin", "hidden Markov model"]
        assert acronym.long_forms[0].variations[0].frequency == 20
        assert service.current_acronym is acronym
        assert service.errors == []
        assert not service.is_loading

    def test_rejected_term_does_not_start_lookup(self, service, transport):
        assert service.lookup("hmm") is None

        assert transport.started == []
        assert isinstance(service.errors[0], InvalidFormatError)
        assert service.last_error is service.errors[0]

    def test_no_records(self, service, client, transport):
        service.lookup("sf=zzzz")
        transport.complete(transport.started[0], b"[]")
        client.process_events()

        assert isinstance(service.errors[0], NoResultError)
        assert service.errors[0].message == "There are no result for this search."

    def test_empty_outcome_is_no_result(self, service):
        service._handle_outcome("sf=hmm", LookupOutcome(status="empty"))

        (error,) = service.errors
        assert isinstance(error, NoResultError)

    def test_ignored_outcome_is_not_reported(self, service):
        service._handle_outcome("sf=hmm", LookupOutcome(status="ignored"))

        assert service.errors == []
        assert service.results == []

    def test_unreadable_body(self, service, client, transport):
        service.lookup("sf=hmm")
        transport.complete(transport.started[0], b"not json", 502)
        client.process_events()

        assert isinstance(service.errors[0], NoResultError)

    def test_unexpected_record(self, service, client, transport):
        service.lookup("sf=hmm")
        transport.complete(transport.started[0], b'[{"lf": "heavy meromyosin"}]')
        client.process_events()

        (error,) = service.errors
        assert type(error) is AcronymError
        assert error.message == "Request failed with unknown error."

    def test_transport_failure(self, service, client, transport):
        service.lookup("sf=hmm")
        transport.finish(transport.started[0], httpx.ConnectError("connection refused"))
        client.process_events()

        (error,) = service.errors
        assert isinstance(error, LookupFailedError)
        assert error.message == "connection refused"
        assert isinstance(error.error, httpx.ConnectError)

    def test_duplicate_lookup_is_not_an_error(self, service, transport):
        service.lookup("sf=hmm")
        service.lookup("sf=HMM")

        assert len(transport.started) == 1
        assert service.errors == []

    def test_new_term_supersedes(self, service, client, transport):
        service.lookup("sf=abc")
        service.lookup("sf=hmm")
        transport.complete(transport.started[0], json.dumps([{**RECORD, "sf": "ABC"}]).encode())
        transport.complete(transport.started[1], json.dumps([RECORD]).encode())
        client.process_events()

        assert [a.short_form for a in service.results] == ["HMM"]

    def test_cancel(self, service, client, transport):
        service.lookup("sf=hmm")
        service.cancel()
        transport.complete(transport.started[0], json.dumps([RECORD]).encode())
        client.process_events()

        assert service.results == []
        assert service.errors == []
        assert not service.is_loading


class TestLookupFailedError:
    def test_unknown_error_message(self):
        assert LookupFailedError().message == "Request failed with unknown error."
        assert LookupFailedError(httpx.ConnectError("")).message == (
            "Request failed with unknown error."
        )
        assert LookupFailedError().title == "Error"
