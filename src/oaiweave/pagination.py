"""Resumption token handling for list-style responses.

The harvest loop itself belongs to the caller (see ``oaiweave.harvest``):
request the first page with the full filters, then each following page with
nothing but the previous page's token, until the token comes back empty.
This module only extracts the token and builds the follow-up options.
"""

from typing import TypeVar

from .models.envelope import ResumptionToken
from .models.options import ListOptions, ListSetsOptions

OptionsT = TypeVar("OptionsT", ListOptions, ListSetsOptions)


def extract_token(envelope: object) -> ResumptionToken:
    """Return the resumption token of a list-style envelope.

    Envelopes without a token, or of a verb that never paginates, yield an
    empty token.
    """
    token = getattr(envelope, "resumption_token", None)
    if isinstance(token, ResumptionToken):
        return token
    return ResumptionToken()


def has_more(envelope: object) -> bool:
    """True when the envelope announces a further page."""
    return extract_token(envelope).has_more


def next_options(options: OptionsT, token: ResumptionToken | str) -> OptionsT:
    """Build the options for the page following ``token``.

    The result carries only the resumption token. Selective-harvesting
    filters are dropped because OAI-PMH forbids sending both.

    Raises:
        ValueError: If the token is empty, i.e. the harvest is complete.
    """
    value = token.value if isinstance(token, ResumptionToken) else token
    if not value:
        raise ValueError("Harvest is complete; there is no next page")
    return type(options)(resumption_token=value)
