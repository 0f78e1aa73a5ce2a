# oaiweave/models/envelope.py
"""Pydantic models for the fixed-shape OAI-PMH response envelope.

Every response, whatever the verb, is an ``OAI-PMH`` document carrying a
``responseDate``, the echoed ``request`` and either an ``error`` block or a
verb-specific payload. All fields default to their zero value so that a
response missing optional sub-elements, or an error response with no payload
at all, still decodes.
Reference: https://www.openarchives.org/OAI/openarchivesprotocol.html
"""

from typing import Any, ClassVar

from pydantic import Field, PrivateAttr, field_validator

from ..types import HTTPResponse
from .base import XmlModel, int_or_none


class InterpretedRequest(XmlModel):
    """The ``request`` element echoing what the repository understood.

    Attributes:
        verb: The echoed verb. Empty when the repository rejected the request
            (for instance with ``badVerb`` or ``badArgument``).
        base_url: The repository base URL, from the element's text.
    """

    verb: str = Field(default="", alias="@verb")
    base_url: str = Field(default="", alias="#text")
    identifier: str = Field(default="", alias="@identifier")
    metadata_prefix: str = Field(default="", alias="@metadataPrefix")
    from_: str = Field(default="", alias="@from")
    until: str = Field(default="", alias="@until")
    set_spec: str = Field(default="", alias="@set")
    resumption_token: str = Field(default="", alias="@resumptionToken")


class OaiError(XmlModel):
    """The ``error`` element: an OAI-PMH error code and its message."""

    code: str = Field(default="", alias="@code")
    message: str = Field(default="", alias="#text")

    def is_empty(self) -> bool:
        """True when neither a code nor a message was reported."""
        return not self.code and not self.message


class MetadataFormat(XmlModel):
    """One ``metadataFormat`` entry of a ListMetadataFormats response."""

    metadata_prefix: str = Field(default="", alias="metadataPrefix")
    schema_url: str = Field(default="", alias="schema")
    metadata_namespace: str = Field(default="", alias="metadataNamespace")


class Identify(XmlModel):
    """The ``Identify`` payload describing the repository."""

    repository_name: str = Field(default="", alias="repositoryName")
    base_url: str = Field(default="", alias="baseURL")
    protocol_version: str = Field(default="", alias="protocolVersion")
    earliest_datestamp: str = Field(default="", alias="earliestDatestamp")
    deleted_record: str = Field(default="", alias="deletedRecord")
    granularity: str = ""
    admin_emails: list[str] = Field(default_factory=list, alias="adminEmail")
    compressions: list[str] = Field(default_factory=list, alias="compression")
    descriptions: list[bytes] = Field(default_factory=list, alias="description")


class RecordHeader(XmlModel):
    """The ``header`` of a record, also the unit of ListIdentifiers.

    Attributes:
        identifier: The unique item identifier.
        datestamp: Creation, modification or deletion date of the record.
        set_specs: Set memberships, in document order.
        status: ``deleted`` for deleted records, otherwise empty.
    """

    identifier: str = ""
    datestamp: str = ""
    set_specs: list[str] = Field(default_factory=list, alias="setSpec")
    status: str = Field(default="", alias="@status")

    @property
    def is_deleted(self) -> bool:
        return self.status == "deleted"


class Record(XmlModel):
    """A raw record: its header plus the undecoded metadata markup.

    ``metadata`` is the inner markup of the ``metadata`` element, kept as
    bytes. It is empty for deleted records.
    """

    header: RecordHeader = Field(default_factory=RecordHeader)
    metadata: bytes = b""


class Set(XmlModel):
    """One ``set`` entry of a ListSets response."""

    set_spec: str = Field(default="", alias="setSpec")
    set_name: str = Field(default="", alias="setName")


class ResumptionToken(XmlModel):
    """The ``resumptionToken`` element of a list-style response.

    The value is opaque: it is kept exactly as sent, whitespace included, and
    must be sent back unchanged. An empty value marks the last page.

    Only a truly empty value ends a harvest. A whitespace-only token, as some
    repositories emit for ``<resumptionToken>\\n  </resumptionToken>``, still
    counts as a further page and is sent back verbatim; the repository then
    answers with ``badResumptionToken`` if it did not mean it.

    ``complete_list_size`` and ``cursor`` are informational. Blank or
    non-numeric values read as None rather than failing the envelope.
    """

    value: str = Field(default="", alias="#text")
    expiration_date: str = Field(default="", alias="@expirationDate")
    complete_list_size: int | None = Field(default=None, alias="@completeListSize")
    cursor: int | None = Field(default=None, alias="@cursor")

    @field_validator("complete_list_size", "cursor", mode="before")
    @classmethod
    def lenient_int(cls, v: Any) -> Any:
        return int_or_none(v)

    def is_empty(self) -> bool:
        """True when no further page is available."""
        return not self.value

    @property
    def has_more(self) -> bool:
        return not self.is_empty()


class OaiResponse(XmlModel):
    """Fields shared by every OAI-PMH response envelope.

    ``http_response`` exposes the status code and raw body of the exchange
    the envelope was decoded from, when it came from a client call.
    """

    xml_tag: ClassVar[str | None] = "OAI-PMH"

    response_date: str = Field(default="", alias="responseDate")
    request: InterpretedRequest = Field(default_factory=InterpretedRequest)
    error: OaiError = Field(default_factory=OaiError)

    _http_response: HTTPResponse | None = PrivateAttr(default=None)

    @property
    def http_response(self) -> HTTPResponse | None:
        return self._http_response


class IdentifyResponse(OaiResponse):
    identify: Identify = Field(default_factory=Identify, alias="Identify")


class ListMetadataFormatsResponse(OaiResponse):
    metadata_formats: list[MetadataFormat] = Field(
        default_factory=list, alias="ListMetadataFormats/metadataFormat"
    )


class GetRecordResponse(OaiResponse):
    """GetRecord envelope.

    Attributes:
        record: The raw record.
        decoded: The caller's target populated from ``record.metadata``.
            Set by the client, never read from the XML.
    """

    record: Record = Field(default_factory=Record, alias="GetRecord/record")

    _decoded: Any = PrivateAttr(default=None)

    @property
    def decoded(self) -> Any:
        return self._decoded


class ListRecordsResponse(OaiResponse):
    """ListRecords envelope.

    Attributes:
        records: Raw records of this page, in document order.
        resumption_token: Continuation token for the next page.
        decoded: The caller's container populated from every record.
        failed_indices: Positions in ``records`` whose metadata could not be
            decoded; the matching entries in ``decoded`` hold zero values.

    ``decoded`` and ``failed_indices`` are set by the client, never read
    from the XML.
    """

    records: list[Record] = Field(default_factory=list, alias="ListRecords/record")
    resumption_token: ResumptionToken = Field(
        default_factory=ResumptionToken, alias="ListRecords/resumptionToken"
    )

    _decoded: Any = PrivateAttr(default=None)
    _failed_indices: list[int] = PrivateAttr(default_factory=list)

    @property
    def decoded(self) -> Any:
        return self._decoded

    @property
    def failed_indices(self) -> list[int]:
        return self._failed_indices


class ListIdentifiersResponse(OaiResponse):
    headers: list[RecordHeader] = Field(
        default_factory=list, alias="ListIdentifiers/header"
    )
    resumption_token: ResumptionToken = Field(
        default_factory=ResumptionToken, alias="ListIdentifiers/resumptionToken"
    )


class ListSetsResponse(OaiResponse):
    sets: list[Set] = Field(default_factory=list, alias="ListSets/set")
    resumption_token: ResumptionToken = Field(
        default_factory=ResumptionToken, alias="ListSets/resumptionToken"
    )


ListResponse = ListRecordsResponse | ListIdentifiersResponse | ListSetsResponse
"""Envelopes that carry a resumption token."""
