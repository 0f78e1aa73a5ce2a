"""Success/failure classification of decoded OAI-PMH envelopes.

OAI-PMH reports errors in the body of an HTTP 200 response, so the HTTP
status says nothing about protocol success. Classification looks only at the
envelope's ``error`` block, the same way for every verb.
"""

import httpx

from .exceptions import PROTOCOL_ERRORS, ProtocolError
from .log_config import logger
from .models.envelope import OaiResponse


def classify(
    envelope: OaiResponse, *, response: httpx.Response | None = None
) -> ProtocolError | None:
    """Return the protocol error carried by ``envelope``, or None on success.

    An envelope is a failure whenever its error block has a code or a
    message, even if a payload was populated as well.

    Args:
        envelope: The decoded envelope.
        response: Optional HTTP response to attach to the error.

    Returns:
        ProtocolError | None: The ``ProtocolError`` subclass registered for
            the code (the base class for unknown codes), or None.
    """
    error = envelope.error
    if error.is_empty():
        return None
    error_cls = PROTOCOL_ERRORS.get(error.code, ProtocolError)
    logger.debug(
        f"Envelope carries OAI-PMH error {error.code or '<no code>'}: {error.message}"
    )
    return error_cls(error.code, error.message, envelope=envelope, response=response)


def raise_for_error(
    envelope: OaiResponse, *, response: httpx.Response | None = None
) -> None:
    """Raise the classified ``ProtocolError`` if ``envelope`` is a failure."""
    error = classify(envelope, response=response)
    if error is not None:
        raise error
