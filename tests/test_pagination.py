"""Tests for resumption token extraction and follow-up options."""

import pytest

from oaiweave.decoder import decode_envelope
from oaiweave.models import (
    IdentifyResponse,
    ListIdentifiersResponse,
    ListOptions,
    ListRecordsResponse,
    ListSetsOptions,
    ListSetsResponse,
    ResumptionToken,
)
from oaiweave.pagination import extract_token, has_more, next_options


def test_extract_token_with_attributes(envelope):
    body = (
        "<ListRecords>"
        '<resumptionToken expirationDate="2024-03-03T08:30:00Z" '
        'completeListSize="1000" cursor="100">page-2</resumptionToken>'
        "</ListRecords>"
    )
    page = decode_envelope(envelope(body, verb="ListRecords"), ListRecordsResponse)

    token = extract_token(page)

    assert token.value == "page-2"
    assert token.expiration_date == "2024-03-03T08:30:00Z"
    assert token.complete_list_size == 1000
    assert token.cursor == 100
    assert has_more(page)


def test_extract_token_keeps_value_verbatim(envelope):
    """Test that the token text is not trimmed, unescaped twice or re-encoded."""
    body = (
        "<ListIdentifiers>"
        "<resumptionToken> set=a%2Fb&amp;from=2024 </resumptionToken>"
        "</ListIdentifiers>"
    )
    page = decode_envelope(
        envelope(body, verb="ListIdentifiers"), ListIdentifiersResponse
    )

    assert extract_token(page).value == " set=a%2Fb&from=2024 "


def test_blank_numeric_attributes_are_none(envelope):
    body = '<ListSets><resumptionToken completeListSize="" cursor=""/></ListSets>'
    page = decode_envelope(envelope(body, verb="ListSets"), ListSetsResponse)

    token = extract_token(page)

    assert token.is_empty()
    assert token.complete_list_size is None
    assert token.cursor is None
    assert not has_more(page)


def test_missing_token_is_empty(envelope):
    page = decode_envelope(
        envelope("<ListRecords/>", verb="ListRecords"), ListRecordsResponse
    )

    assert extract_token(page) == ResumptionToken()
    assert not has_more(page)


def test_non_list_envelope_has_no_token():
    assert extract_token(IdentifyResponse()).is_empty()


def test_next_options_carries_only_the_token():
    """Test that filters from the first page are not resent with the token."""
    first = ListOptions(
        metadata_prefix="oai_dc", set_spec="physics", until="2024-01-01"
    )

    following = next_options(first, ResumptionToken(value="page-2"))

    assert isinstance(following, ListOptions)
    assert following.metadata_prefix is None
    assert following.set_spec is None
    assert following.to_params() == {"resumptionToken": "page-2"}


def test_next_options_accepts_plain_string():
    following = next_options(ListSetsOptions(), "sets-page-2")

    assert isinstance(following, ListSetsOptions)
    assert following.resumption_token == "sets-page-2"


@pytest.mark.parametrize("token", [ResumptionToken(), ""])
def test_next_options_rejects_empty_token(token):
    """Test that an empty token signals the end of the harvest."""
    with pytest.raises(ValueError):
        next_options(ListOptions(), token)


def test_non_numeric_attributes_do_not_fail_the_page(envelope, dc_record):
    """Test that a malformed cursor keeps the records and the token."""
    body = (
        "<ListRecords>"
        f"{dc_record('oai:example.org:1', 'One')}"
        '<resumptionToken completeListSize="about 40" cursor="abc">next</resumptionToken>'
        "</ListRecords>"
    )
    page = decode_envelope(envelope(body, verb="ListRecords"), ListRecordsResponse)

    token = extract_token(page)

    assert len(page.records) == 1
    assert token.value == "next"
    assert token.complete_list_size is None
    assert token.cursor is None


def test_whitespace_only_token_is_sent_back_verbatim(envelope):
    """Test that only a truly empty token ends the harvest."""
    body = "<ListSets><resumptionToken>\n  </resumptionToken></ListSets>"
    page = decode_envelope(envelope(body, verb="ListSets"), ListSetsResponse)

    token = extract_token(page)

    assert token.value == "\n  "
    assert has_more(page)
    assert next_options(ListSetsOptions(), token).to_params() == {
        "resumptionToken": "\n  "
    }
