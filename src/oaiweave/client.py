"""Synchronous OAI-PMH client.

This module provides ``OaiPmhClient``, which maps each of the six OAI-PMH
verbs onto one stateless request/response cycle: build the arguments, GET
the repository base URL, decode the envelope, classify it and, for
GetRecord and ListRecords, decode the embedded metadata into the caller's
target model. Pagination state stays with the caller; see
``oaiweave.pagination`` and ``oaiweave.harvest``.
"""

import ssl
from collections.abc import Mapping
from http import HTTPStatus
from typing import Any, Self, TypeVar

import certifi
import httpx

from .classifier import classify
from .config import OaiPmhSettings, get_settings
from .decoder import decode_envelope, decode_many, decode_one
from .exceptions import (
    APIError,
    ConfigurationError,
    DecodeError,
    NetworkError,
    NotFoundError,
    TimeoutError,
    TransportError,
    ValidationError,
)
from .log_config import logger
from .models.envelope import (
    GetRecordResponse,
    IdentifyResponse,
    ListIdentifiersResponse,
    ListMetadataFormatsResponse,
    ListRecordsResponse,
    ListSetsResponse,
    OaiResponse,
)
from .models.options import (
    GetRecordOptions,
    ListMetadataFormatsOptions,
    ListOptions,
    ListSetsOptions,
)
from .types import HTTPResponse, RequestData

EnvelopeT = TypeVar("EnvelopeT", bound=OaiResponse)

ACCEPT_HEADER = "text/xml, application/xml;q=0.9, */*;q=0.1"


def prepare_parameters(verb: str, options: Mapping[str, str | None]) -> dict[str, str]:
    """Build the query arguments for ``verb``, dropping empty values.

    Optional filters are never sent as empty strings.
    """
    params = {"verb": verb}
    for key, value in options.items():
        if value:
            params[key] = value
    return params


class OaiPmhClient:
    """Synchronous client for a single OAI-PMH repository.

    Each verb method performs exactly one blocking HTTP GET and returns the
    decoded envelope. Failures are raised, never retried:

    - ``TransportError`` (and its ``APIError``, ``TimeoutError``,
      ``NetworkError`` subclasses) when no usable body was received;
    - ``MarkupError`` / ``SchemaError`` when the body cannot be decoded;
    - ``ProtocolError`` subclasses when the envelope carries an ``error``
      block. The partially decoded envelope is available as ``error.envelope``;
    - ``TargetTypeError`` / ``SchemaError`` when the caller's target model
      cannot receive the metadata.

    The client holds no state between calls, so one instance can be shared
    as long as the underlying ``httpx.Client`` is.

    Typical usage:
    ```python
    with OaiPmhClient("https://export.arxiv.org/oai2") as client:
        page = client.list_records(ListOptions(metadata_prefix="oai_dc"), DublinCoreRecords)
        for record in page.decoded.records:
            print(record.titles)
    ```

    Attributes:
        _settings: Configuration settings for the client.
        _base_url: The repository base URL every request is sent to.
        _http_client: The underlying httpx.Client.
        _should_close_client: Flag indicating if this instance owns the _http_client.
    """

    def __init__(
        self,
        base_url: str,
        settings: OaiPmhSettings | None = None,
        *,
        http_client: httpx.Client | None = None,
    ):
        """Initialize the OaiPmhClient.

        Args:
            base_url: The repository's OAI-PMH base URL.
            settings: Optional settings; defaults to ``get_settings()``.
            http_client: Optional pre-configured httpx.Client instance. It is
                not closed by this client.

        Raises:
            ConfigurationError: If ``base_url`` is not an http(s) URL.
        """
        if not base_url or not base_url.startswith(("http://", "https://")):
            raise ConfigurationError(
                f"OAI-PMH base URL must be an http(s) URL, got {base_url!r}"
            )
        self._settings = settings or get_settings()
        self._base_url: str = base_url
        self._should_close_client = http_client is None
        self._http_client = http_client or self._create_default_http_client()
        logger.debug(f"OaiPmhClient initialized for {self._base_url}")

    @property
    def base_url(self) -> str:
        return self._base_url

    def _create_default_http_client(self) -> httpx.Client:
        """Create a default httpx.Client with configured settings."""
        try:
            ssl_context = ssl.create_default_context(cafile=certifi.where())
            verify_ssl: ssl.SSLContext | bool = ssl_context
            logger.debug("Using certifi SSL context.")
        except (OSError, ssl.SSLError):
            verify_ssl = True
            logger.warning(
                "certifi bundle could not be loaded. Using default SSL verification."
            )

        return httpx.Client(
            timeout=self._settings.request_timeout,
            verify=verify_ssl,
            follow_redirects=self._settings.follow_redirects,
            headers={"User-Agent": self._settings.user_agent, "Accept": ACCEPT_HEADER},
        )

    # --- Transport --- #

    def _send(self, params: dict[str, str]) -> httpx.Response:
        """Run pre-request hooks and perform the GET.

        Raises:
            TimeoutError: If the request times out.
            NetworkError: For connection-level failures.
            TransportError: For any other httpx request error.
        """
        hook_params: dict[str, Any] = dict(params)
        hook_headers = httpx.Headers({"User-Agent": self._settings.user_agent})

        for hook in self._settings.pre_request_hooks:
            try:
                hook("GET", self._base_url, hook_params, hook_headers)
            except Exception as e:
                logger.error(
                    f"Error executing pre-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                )

        request_data = RequestData(
            url=self._base_url,
            params=hook_params,
            headers={k: v for k, v in hook_headers.items()},
        )
        request = request_data.build_request(self._http_client)

        try:
            logger.debug(f"Sending request: {request.method} {request.url}")
            logger.trace(f"Request Headers: {request.headers}")
            response = self._http_client.send(request)
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {request.url}")
            raise TimeoutError("Request timed out", request=request) from e
        except httpx.NetworkError as e:
            logger.error(f"Network error occurred for {request.url}: {e}")
            raise NetworkError(
                f"Network error for {request.url}: {e}", request=request
            ) from e
        except httpx.RequestError as e:
            logger.error(f"HTTP request error for {request.url}: {e}")
            raise TransportError(
                f"HTTP request error for {request.url}: {e}", request=request
            ) from e

        logger.debug(f"Received response: {response.status_code} for {request.url}")
        logger.trace(f"Response Headers: {response.headers}")
        return response

    def _run_post_request_hooks(
        self, response: httpx.Response, envelope: OaiResponse | None
    ) -> None:
        for hook in self._settings.post_request_hooks:
            try:
                hook(response, envelope)
            except Exception as e:
                logger.error(
                    f"Error executing post-request hook {getattr(hook, '__name__', str(hook))}: {e}"
                )

    @staticmethod
    def _status_error(response: httpx.Response) -> APIError:
        message = f"Repository request failed with status {response.status_code}"
        if response.status_code == HTTPStatus.NOT_FOUND:
            return NotFoundError(message, response=response)
        return APIError(message, response=response)

    def _dispatch(
        self,
        verb: str,
        options: Mapping[str, str | None],
        response_model: type[EnvelopeT],
    ) -> EnvelopeT:
        """Perform one verb request and return its classified envelope.

        A protocol error takes precedence over a non-2xx status: repositories
        that pair an ``error`` block with a 4xx status still raise the
        matching ``ProtocolError``. A non-2xx status with an error-free or
        undecodable body raises ``APIError``.
        """
        params = prepare_parameters(verb, options)
        response = self._send(params)

        envelope: EnvelopeT | None = None
        try:
            envelope = decode_envelope(response.content, response_model)
        except DecodeError as e:
            self._run_post_request_hooks(response, None)
            if not response.is_success:
                raise self._status_error(response) from e
            logger.warning(f"Could not decode {verb} response from {response.url}: {e}")
            raise

        envelope._http_response = HTTPResponse(
            status_code=response.status_code,
            raw=response.content,
            url=str(response.url),
        )
        self._run_post_request_hooks(response, envelope)

        protocol_error = classify(envelope, response=response)
        if protocol_error is not None:
            logger.info(f"{verb} returned OAI-PMH error: {protocol_error}")
            raise protocol_error
        if not response.is_success:
            raise self._status_error(response)
        return envelope

    # --- Verbs --- #

    def identify(self) -> IdentifyResponse:
        """Retrieve information about the repository."""
        return self._dispatch("Identify", {}, IdentifyResponse)

    def list_metadata_formats(
        self, options: ListMetadataFormatsOptions | None = None
    ) -> ListMetadataFormatsResponse:
        """List the metadata formats of the repository, or of one item."""
        options = options or ListMetadataFormatsOptions()
        return self._dispatch(
            "ListMetadataFormats", options.to_params(), ListMetadataFormatsResponse
        )

    def get_record(
        self, options: GetRecordOptions, target: Any = None
    ) -> GetRecordResponse:
        """Retrieve one record and decode its metadata into ``target``.

        Args:
            options: Identifier and metadata prefix of the record.
            target: A pydantic model class or instance for the metadata. With
                a class, ``response.decoded`` is a new instance; with an
                instance, it is populated in place. With None the metadata
                is left undecoded in ``response.record.metadata``.

        Raises:
            ValidationError: If no identifier is given.
            ProtocolError: E.g. ``IdDoesNotExistError``; ``target`` is untouched.
            TargetTypeError: If ``target`` is not a model, or is a frozen
                instance that cannot be populated in place.
        """
        if not options.identifier:
            raise ValidationError("GetRecord requires an identifier")
        params = {
            "identifier": options.identifier,
            "metadataPrefix": options.metadata_prefix
            or self._settings.default_metadata_prefix,
        }
        envelope = self._dispatch("GetRecord", params, GetRecordResponse)
        if target is not None:
            envelope._decoded = decode_one(envelope.record.metadata, target)
        return envelope

    def _list_params(self, options: ListOptions) -> dict[str, str]:
        params = options.to_params()
        if "resumptionToken" not in params and "metadataPrefix" not in params:
            params["metadataPrefix"] = self._settings.default_metadata_prefix
        return params

    def list_records(
        self, options: ListOptions | None = None, target: Any = None
    ) -> ListRecordsResponse:
        """Harvest one page of records and decode them into ``target``.

        Args:
            options: Selective-harvesting filters, or a resumption token.
            target: A pydantic container model (class or instance) with a
                ``records`` list field. Decoded elements land there in
                document order; indices that failed to decode are listed in
                ``response.failed_indices``.
        """
        options = options or ListOptions()
        envelope = self._dispatch(
            "ListRecords", self._list_params(options), ListRecordsResponse
        )
        if target is not None:
            envelope._decoded, envelope._failed_indices = decode_many(
                (record.metadata for record in envelope.records), target
            )
        return envelope

    def list_identifiers(
        self, options: ListOptions | None = None
    ) -> ListIdentifiersResponse:
        """Harvest one page of record headers."""
        options = options or ListOptions()
        return self._dispatch(
            "ListIdentifiers", self._list_params(options), ListIdentifiersResponse
        )

    def list_sets(self, options: ListSetsOptions | None = None) -> ListSetsResponse:
        """Retrieve one page of the repository's set structure."""
        options = options or ListSetsOptions()
        return self._dispatch("ListSets", options.to_params(), ListSetsResponse)

    # --- Lifecycle --- #

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._should_close_client and not self._http_client.is_closed:
            self._http_client.close()
            logger.debug(f"OaiPmhClient HTTP client closed for {self._base_url}")

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        self.close()


__all__ = ["OaiPmhClient", "prepare_parameters"]
