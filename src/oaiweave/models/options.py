# oaiweave/models/options.py
"""Request option models, one per verb that takes arguments.

Field aliases are the OAI-PMH argument names, so ``to_params`` is a plain
``model_dump(by_alias=True)`` with unset and empty values removed.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..formatting import format_datetime


class _Options(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    def to_params(self) -> dict[str, str]:
        """Return the wire arguments, omitting unset and empty values."""
        dumped = self.model_dump(by_alias=True, exclude_none=True)
        return {key: value for key, value in dumped.items() if value not in (None, "")}


class ListMetadataFormatsOptions(_Options):
    """Options for ListMetadataFormats; without an identifier the repository lists all formats."""

    identifier: str | None = None


class GetRecordOptions(_Options):
    """Options for GetRecord.

    ``metadata_prefix`` falls back to ``OaiPmhSettings.default_metadata_prefix``.
    """

    identifier: str
    metadata_prefix: str | None = Field(default=None, alias="metadataPrefix")


class ListOptions(_Options):
    """Options for ListRecords and ListIdentifiers.

    Either the selective-harvesting filters or a resumption token is sent,
    never both: once ``resumption_token`` is set the filters are ignored.
    """

    metadata_prefix: str | None = Field(default=None, alias="metadataPrefix")
    from_: datetime | date | str | None = Field(default=None, alias="from")
    until: datetime | date | str | None = None
    set_spec: str | None = Field(default=None, alias="set")
    resumption_token: str | None = Field(default=None, alias="resumptionToken")

    @field_serializer("from_", "until")
    def _format_dates(self, value: Any) -> str | None:
        return format_datetime(value)

    def to_params(self) -> dict[str, str]:
        if self.resumption_token:
            return {"resumptionToken": self.resumption_token}
        return super().to_params()


class ListSetsOptions(_Options):
    resumption_token: str | None = Field(default=None, alias="resumptionToken")
