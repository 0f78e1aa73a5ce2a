"""Base Pydantic model for shapes decoded from XML.

Any pydantic model can be a decode target. Subclassing ``XmlModel`` only adds
the conveniences most targets want: fields can be populated by name as well
as by their XML binding alias, unknown keys are ignored, and an optional
``xml_tag`` pins the expected root element.

Field aliases are read as XML bindings by ``oaiweave.decoder``:

- ``name`` matches child elements by local name in any namespace;
- ``{namespace}name`` matches child elements by qualified name;
- ``outer/inner`` walks a path of child elements;
- ``@attr`` reads an attribute and ``#text`` the element's text content.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict


class XmlModel(BaseModel):
    """A pydantic model whose field aliases are XML bindings.

    Attributes:
        xml_tag: Expected root element when this model is decoded from a
            standalone document. ``None`` accepts any root.
    """

    xml_tag: ClassVar[str | None] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def empty_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only attribute values as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def int_or_none(value: Any) -> Any:
    """Read an optional integer attribute.

    Blank and non-numeric values are treated as absent, so a malformed
    informational attribute never fails the element that carries it.
    """
    value = empty_to_none(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return value
