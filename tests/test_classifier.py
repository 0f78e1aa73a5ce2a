"""Tests for envelope success/failure classification."""

import pytest

from oaiweave.classifier import classify, raise_for_error
from oaiweave.exceptions import (
    PROTOCOL_ERRORS,
    BadArgumentError,
    NoRecordsMatchError,
    ProtocolError,
)
from oaiweave.models import ListRecordsResponse, OaiError, OaiResponse, Record


def test_empty_error_block_is_success():
    assert classify(OaiResponse()) is None
    raise_for_error(OaiResponse())


@pytest.mark.parametrize(("code", "error_cls"), sorted(PROTOCOL_ERRORS.items()))
def test_known_codes_map_to_their_class(code, error_cls):
    """Test that every OAI-PMH error code yields its own exception class."""
    envelope = OaiResponse(error=OaiError(code=code, message="details"))

    error = classify(envelope)

    assert type(error) is error_cls
    assert error.code == code
    assert error.message == "details"
    assert error.envelope is envelope


def test_code_without_message_is_failure():
    error = classify(OaiResponse(error=OaiError(code="noRecordsMatch")))

    assert isinstance(error, NoRecordsMatchError)
    assert str(error) == "noRecordsMatch"


def test_message_without_code_is_failure():
    """Test that a bare error message still counts as a failure."""
    error = classify(OaiResponse(error=OaiError(message="Something went wrong")))

    assert type(error) is ProtocolError
    assert error.code == ""
    assert error.message == "Something went wrong"


def test_unknown_code_falls_back_to_base_class():
    error = classify(OaiResponse(error=OaiError(code="serverMeltdown", message="x")))

    assert type(error) is ProtocolError
    assert str(error) == "serverMeltdown: x"


def test_error_block_is_checked_even_with_payload():
    """Test that a populated payload does not hide an error block."""
    envelope = ListRecordsResponse(
        records=[Record()], error=OaiError(code="badArgument", message="Bad from")
    )

    with pytest.raises(BadArgumentError) as exc_info:
        raise_for_error(envelope)

    assert exc_info.value.envelope.records == [Record()]
