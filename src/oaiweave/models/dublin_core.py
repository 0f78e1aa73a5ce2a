# oaiweave/models/dublin_core.py
"""Unqualified Dublin Core (``oai_dc``) record shapes.

These are ordinary decode targets. Nothing in the client special-cases them;
they double as a worked example of binding fields to namespaced elements.
Reference: https://www.openarchives.org/OAI/2.0/oai_dc.xsd
"""

from typing import ClassVar

from pydantic import Field

from .base import XmlModel

OAI_DC_NAMESPACE = "http://www.openarchives.org/OAI/2.0/oai_dc/"
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"


def _dc(element: str) -> str:
    return f"{{{DC_NAMESPACE}}}{element}"


class DublinCoreRecord(XmlModel):
    """A single ``oai_dc:dc`` record; each of the 15 elements is repeatable."""

    xml_tag: ClassVar[str | None] = f"{{{OAI_DC_NAMESPACE}}}dc"

    titles: list[str] = Field(default_factory=list, alias=_dc("title"))
    creators: list[str] = Field(default_factory=list, alias=_dc("creator"))
    subjects: list[str] = Field(default_factory=list, alias=_dc("subject"))
    descriptions: list[str] = Field(default_factory=list, alias=_dc("description"))
    publishers: list[str] = Field(default_factory=list, alias=_dc("publisher"))
    contributors: list[str] = Field(default_factory=list, alias=_dc("contributor"))
    dates: list[str] = Field(default_factory=list, alias=_dc("date"))
    types: list[str] = Field(default_factory=list, alias=_dc("type"))
    formats: list[str] = Field(default_factory=list, alias=_dc("format"))
    identifiers: list[str] = Field(default_factory=list, alias=_dc("identifier"))
    sources: list[str] = Field(default_factory=list, alias=_dc("source"))
    languages: list[str] = Field(default_factory=list, alias=_dc("language"))
    relations: list[str] = Field(default_factory=list, alias=_dc("relation"))
    coverages: list[str] = Field(default_factory=list, alias=_dc("coverage"))
    rights: list[str] = Field(default_factory=list, alias=_dc("rights"))


class DublinCoreRecords(XmlModel):
    """Container used with ``list_records`` to collect a page of records."""

    records: list[DublinCoreRecord] = Field(default_factory=list)
