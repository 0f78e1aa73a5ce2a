"""Shared fixtures for the oaiweave test suite."""

import pytest

from oaiweave.client import OaiPmhClient
from oaiweave.config import OaiPmhSettings

BASE_URL = "https://repository.example.org/oai"

OAI_NAMESPACES = (
    'xmlns="http://www.openarchives.org/OAI/2.0/" '
    'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'
)

DC_RECORD = """
<record>
  <header>
    <identifier>{identifier}</identifier>
    <datestamp>2024-03-01T12:00:00Z</datestamp>
    <setSpec>physics</setSpec>
    <setSpec>physics:hep</setSpec>
  </header>
  <metadata>
    <oai_dc:dc xmlns:oai_dc="http://www.openarchives.org/OAI/2.0/oai_dc/"
               xmlns:dc="http://purl.org/dc/elements/1.1/">
      <dc:title>{title}</dc:title>
      <dc:creator>Doe, Jane</dc:creator>
      <dc:creator>Roe, Richard</dc:creator>
      <dc:date>2024-02-28</dc:date>
    </oai_dc:dc>
  </metadata>
</record>
"""


def make_envelope(body: str, verb: str | None = "Identify", **attrs: str) -> bytes:
    """Wrap ``body`` in an OAI-PMH envelope echoing ``verb`` and ``attrs``."""
    echoed = "".join(f' {key}="{value}"' for key, value in attrs.items())
    if verb:
        echoed = f' verb="{verb}"' + echoed
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<OAI-PMH {OAI_NAMESPACES}>\n"
        "  <responseDate>2024-03-02T08:30:00Z</responseDate>\n"
        f"  <request{echoed}>{BASE_URL}</request>\n"
        f"  {body}\n"
        "</OAI-PMH>\n"
    ).encode("utf-8")


def make_dc_record(identifier: str, title: str) -> str:
    return DC_RECORD.format(identifier=identifier, title=title)


@pytest.fixture
def envelope():
    """Fixture exposing the envelope builder."""
    return make_envelope


@pytest.fixture
def dc_record():
    """Fixture exposing the Dublin Core record builder."""
    return make_dc_record


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return OaiPmhSettings(_env_file=None)


@pytest.fixture
def client(settings):
    """An OaiPmhClient pointed at the mocked repository."""
    with OaiPmhClient(BASE_URL, settings=settings) as oai_client:
        yield oai_client
