"""oaiweave: a typed OAI-PMH harvesting client.

This package provides a synchronous client for the six OAI-PMH 2.0 verbs,
a declarative decoder that maps the opaque metadata of harvested records
onto caller-supplied pydantic models, and resumption-token helpers for
multi-page harvests.
"""

__version__ = "0.1.0"

from . import (
    classifier,
    client,
    config,
    decoder,
    exceptions,
    formatting,
    harvest,
    log_config,
    models,
    pagination,
    types,
)
from .client import OaiPmhClient
from .decoder import decode_many, decode_one
from .exceptions import (
    APIError,
    BadArgumentError,
    BadResumptionTokenError,
    BadVerbError,
    CannotDisseminateFormatError,
    ConfigurationError,
    DecodeError,
    IdDoesNotExistError,
    MarkupError,
    NetworkError,
    NoMetadataFormatsError,
    NoRecordsMatchError,
    NoSetHierarchyError,
    NotFoundError,
    OaiWeaveError,
    ProtocolError,
    SchemaError,
    TargetTypeError,
    TimeoutError,
    TransportError,
    ValidationError,
)
from .models import (
    DublinCoreRecord,
    DublinCoreRecords,
    GetRecordOptions,
    ListMetadataFormatsOptions,
    ListOptions,
    ListSetsOptions,
    ResumptionToken,
    XmlModel,
)

__all__ = [
    "__version__",
    # Modules
    "classifier",
    "client",
    "config",
    "decoder",
    "exceptions",
    "formatting",
    "harvest",
    "log_config",
    "models",
    "pagination",
    "types",
    # Client and decoding
    "OaiPmhClient",
    "decode_one",
    "decode_many",
    # Models
    "XmlModel",
    "DublinCoreRecord",
    "DublinCoreRecords",
    "GetRecordOptions",
    "ListMetadataFormatsOptions",
    "ListOptions",
    "ListSetsOptions",
    "ResumptionToken",
    # Exceptions
    "OaiWeaveError",
    "TransportError",
    "APIError",
    "NotFoundError",
    "TimeoutError",
    "NetworkError",
    "DecodeError",
    "MarkupError",
    "SchemaError",
    "TargetTypeError",
    "ValidationError",
    "ConfigurationError",
    "ProtocolError",
    "BadArgumentError",
    "BadResumptionTokenError",
    "BadVerbError",
    "CannotDisseminateFormatError",
    "IdDoesNotExistError",
    "NoRecordsMatchError",
    "NoMetadataFormatsError",
    "NoSetHierarchyError",
]
