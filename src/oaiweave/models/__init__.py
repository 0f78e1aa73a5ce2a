"""Pydantic models for OAI-PMH envelopes, request options and Dublin Core records."""

from .base import XmlModel
from .dublin_core import (
    DC_NAMESPACE,
    OAI_DC_NAMESPACE,
    DublinCoreRecord,
    DublinCoreRecords,
)
from .envelope import (
    GetRecordResponse,
    Identify,
    IdentifyResponse,
    InterpretedRequest,
    ListIdentifiersResponse,
    ListMetadataFormatsResponse,
    ListRecordsResponse,
    ListResponse,
    ListSetsResponse,
    MetadataFormat,
    OaiError,
    OaiResponse,
    Record,
    RecordHeader,
    ResumptionToken,
    Set,
)
from .options import (
    GetRecordOptions,
    ListMetadataFormatsOptions,
    ListOptions,
    ListSetsOptions,
)

__all__ = [
    # Base
    "XmlModel",
    # Envelope
    "OaiResponse",
    "InterpretedRequest",
    "OaiError",
    "Identify",
    "IdentifyResponse",
    "MetadataFormat",
    "ListMetadataFormatsResponse",
    "RecordHeader",
    "Record",
    "GetRecordResponse",
    "ListRecordsResponse",
    "ListIdentifiersResponse",
    "Set",
    "ListSetsResponse",
    "ListResponse",
    "ResumptionToken",
    # Options
    "GetRecordOptions",
    "ListMetadataFormatsOptions",
    "ListOptions",
    "ListSetsOptions",
    # Dublin Core
    "DC_NAMESPACE",
    "OAI_DC_NAMESPACE",
    "DublinCoreRecord",
    "DublinCoreRecords",
]
