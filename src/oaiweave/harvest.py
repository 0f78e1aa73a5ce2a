"""Harvesting loops built on top of ``OaiPmhClient``.

These helpers drive resumption-token pagination on the caller's side: the
first request carries the selective-harvesting filters, every following
request carries only the previous page's token, and iteration stops when a
page comes back with an empty token. The client itself stays stateless.
"""

from collections.abc import Iterator
from typing import Any

from .client import OaiPmhClient
from .exceptions import NoRecordsMatchError
from .log_config import logger
from .models.envelope import (
    ListIdentifiersResponse,
    ListRecordsResponse,
    ListSetsResponse,
    RecordHeader,
    Set,
)
from .models.options import ListOptions, ListSetsOptions
from .pagination import extract_token, next_options


def iter_record_pages(
    client: OaiPmhClient, options: ListOptions | None = None, target: Any = None
) -> Iterator[ListRecordsResponse]:
    """Yield every ListRecords page, following resumption tokens.

    ``target`` is passed to each ``list_records`` call. A class target gives
    every page its own container; an instance target would be overwritten
    page by page.

    A ``noRecordsMatch`` error on the first page ends the iteration without
    yielding anything.
    """
    current = options or ListOptions()
    page_number = 1
    while True:
        try:
            page = client.list_records(current, target)
        except NoRecordsMatchError:
            if page_number == 1:
                logger.info("ListRecords: no records match the harvest filters.")
                return
            raise
        yield page
        token = extract_token(page)
        if token.is_empty():
            logger.debug(f"ListRecords harvest complete after {page_number} page(s).")
            return
        current = next_options(current, token)
        page_number += 1


def iter_records(
    client: OaiPmhClient, options: ListOptions | None, target: type[Any]
) -> Iterator[Any]:
    """Yield decoded records across all pages.

    Args:
        client: The client to harvest with.
        options: Filters for the first page.
        target: A container model class with a ``records`` list field.
    """
    for page in iter_record_pages(client, options, target):
        yield from page.decoded.records


def iter_headers(
    client: OaiPmhClient, options: ListOptions | None = None
) -> Iterator[RecordHeader]:
    """Yield every record header across all ListIdentifiers pages."""
    current = options or ListOptions()
    first = True
    while True:
        try:
            page: ListIdentifiersResponse = client.list_identifiers(current)
        except NoRecordsMatchError:
            if first:
                logger.info("ListIdentifiers: no records match the harvest filters.")
                return
            raise
        first = False
        yield from page.headers
        token = extract_token(page)
        if token.is_empty():
            return
        current = next_options(current, token)


def iter_sets(
    client: OaiPmhClient, options: ListSetsOptions | None = None
) -> Iterator[Set]:
    """Yield every set across all ListSets pages."""
    current = options or ListSetsOptions()
    while True:
        page: ListSetsResponse = client.list_sets(current)
        yield from page.sets
        token = extract_token(page)
        if token.is_empty():
            return
        current = next_options(current, token)
