"""Declarative XML decoding into pydantic models.

This module turns markup into caller-supplied pydantic models without any
built-in knowledge of their schema. A model's fields are discovered at
runtime, and each field's alias is read as an XML binding (see
``oaiweave.models.base``). The field annotation then decides how a match
is converted:

- ``list[X]`` collects every match, ``X`` takes the first one;
- a pydantic model type is decoded recursively from the matched element;
- ``bytes`` receives the matched element's inner markup, verbatim;
- anything else receives the element's text and is coerced by pydantic.

Elements without a matching field are ignored, and fields without a matching
element keep their defaults. The same machinery decodes the fixed OAI-PMH
envelope (``decode_envelope``) and the opaque metadata payload of records
(``decode_one`` / ``decode_many``).
"""

import re
import types
from collections.abc import Iterable, Sequence
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin
from xml.sax.saxutils import escape

from lxml import etree
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .exceptions import DecodeError, MarkupError, SchemaError, TargetTypeError
from .log_config import logger

ModelT = TypeVar("ModelT", bound=BaseModel)

# One step of a binding path; a step may carry a {namespace} containing "/",
# after an optional "@".
_STEP = re.compile(r"@?(?:\{[^}]*\})?[^/]+")

TEXT_BINDING = "#text"
ATTRIBUTE_PREFIX = "@"


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False, no_network=True, remove_comments=True
    )


def parse_markup(content: bytes | str) -> etree._Element | None:
    """Parse a document or fragment with a single root element.

    Args:
        content: The raw markup. Surrounding whitespace is ignored.

    Returns:
        The root element, or None when ``content`` is empty.

    Raises:
        MarkupError: If ``content`` is not well-formed XML.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    content = content.strip()
    if not content:
        return None
    try:
        return etree.fromstring(content, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise MarkupError(f"Malformed XML: {e}") from e


# --- Type introspection --- #


def _unwrap(annotation: Any) -> Any:
    """Strip ``Annotated`` and ``X | None`` down to ``X``."""
    origin = get_origin(annotation)
    if origin is Annotated:
        return _unwrap(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return _unwrap(args[0])
    return annotation


def _shape(annotation: Any) -> tuple[bool, Any]:
    """Return ``(is_list, element_type)`` for a field annotation."""
    annotation = _unwrap(annotation)
    if get_origin(annotation) in (list, Sequence):
        args = get_args(annotation)
        return True, _unwrap(args[0]) if args else Any
    if annotation is list:
        return True, Any
    return False, annotation


def _is_model(annotation: Any) -> bool:
    return (
        isinstance(annotation, type)
        and get_origin(annotation) is None
        and issubclass(annotation, BaseModel)
    )


def _target_model(target: Any) -> tuple[type[BaseModel], BaseModel | None]:
    """Split a decode target into its model class and optional instance."""
    if isinstance(target, BaseModel):
        return type(target), target
    if _is_model(target):
        return target, None
    raise TargetTypeError(
        "Decode target must be a pydantic model class or instance, "
        f"got {type(target).__name__}: {target!r}"
    )


def _check_writable(model: type[BaseModel], names: Iterable[str] = ()) -> None:
    """Fail before any assignment if ``names`` cannot be set on an instance.

    Raises:
        TargetTypeError: If the model is frozen or any of ``names`` is a
            frozen field.
    """
    if model.model_config.get("frozen"):
        raise TargetTypeError(
            f"{model.__name__} is frozen and cannot be populated in place; "
            "pass the class instead"
        )
    frozen = sorted(
        name
        for name in names
        if name in model.model_fields and model.model_fields[name].frozen
    )
    if frozen:
        raise TargetTypeError(
            f"{model.__name__} has frozen fields that cannot be populated in "
            f"place: {', '.join(frozen)}"
        )


def _assign(instance: BaseModel, name: str, value: Any) -> None:
    try:
        setattr(instance, name, value)
    except PydanticValidationError as e:
        raise TargetTypeError(
            f"Cannot set `{name}` on {type(instance).__name__}: {e}"
        ) from e


# --- Matching --- #


def _matches(tag: str, name: str) -> bool:
    if name.startswith("{"):
        return tag == name
    return tag.rpartition("}")[2] == name


def _children(element: etree._Element, name: str) -> list[etree._Element]:
    return [
        child
        for child in element
        if isinstance(child.tag, str) and _matches(child.tag, name)
    ]


def _attribute(element: etree._Element, name: str) -> str | None:
    value = element.get(name)
    if value is None and not name.startswith("{"):
        for key, candidate in element.attrib.items():
            if key.rpartition("}")[2] == name:
                return candidate
    return value


def _text(element: etree._Element) -> str:
    return str(element.xpath("string()"))


def inner_xml(element: etree._Element) -> bytes:
    """Serialize the content of ``element`` without its own tags."""
    parts = [escape(element.text or "")]
    parts.extend(
        etree.tostring(child, encoding="unicode", with_tail=True) for child in element
    )
    return "".join(parts).encode("utf-8")


def _resolve(element: etree._Element, binding: str) -> list[Any]:
    """Find the elements or strings a binding points at, in document order."""
    steps = _STEP.findall(binding)
    if not steps:
        return []
    nodes = [element]
    for step in steps[:-1]:
        nodes = [child for node in nodes for child in _children(node, step)]
    last = steps[-1]
    if last == TEXT_BINDING:
        return [_text(node) for node in nodes]
    if last.startswith(ATTRIBUTE_PREFIX):
        name = last[len(ATTRIBUTE_PREFIX) :]
        values = (_attribute(node, name) for node in nodes)
        return [value for value in values if value is not None]
    return [child for node in nodes for child in _children(node, last)]


# --- Decoding --- #


def _convert(match: Any, annotation: Any) -> Any:
    if isinstance(match, str):
        return match.encode("utf-8") if annotation is bytes else match
    if _is_model(annotation):
        return _collect(match, annotation)
    if annotation is bytes:
        return inner_xml(match)
    return _text(match)


def _collect(element: etree._Element, model: type[BaseModel]) -> dict[str, Any]:
    """Build the validation input for ``model`` from ``element``."""
    data: dict[str, Any] = {}
    for name, field in model.model_fields.items():
        binding = field.alias or name
        is_list, annotation = _shape(field.annotation)
        matches = _resolve(element, binding)
        if not matches:
            continue
        if is_list:
            data[binding] = [_convert(match, annotation) for match in matches]
        else:
            data[binding] = _convert(matches[0], annotation)
    return data


def _validate(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise SchemaError(f"Cannot decode {model.__name__}: {e}") from e


def decode_element(element: etree._Element, model: type[ModelT]) -> ModelT:
    """Decode an already parsed element into a new ``model`` instance.

    Raises:
        SchemaError: If ``model.xml_tag`` is set and does not match the
            element, or if the collected values fail validation.
    """
    expected = getattr(model, "xml_tag", None)
    if expected and not _matches(element.tag, expected):
        raise SchemaError(
            f"Expected <{expected}> element for {model.__name__}, found <{element.tag}>"
        )
    return _validate(model, _collect(element, model))


def decode_envelope(content: bytes | str, response_model: type[ModelT]) -> ModelT:
    """Decode a complete OAI-PMH response body into its envelope model.

    Raises:
        MarkupError: If the body is empty or not well-formed.
        SchemaError: If the root is not ``OAI-PMH`` or a field fails validation.
    """
    root = parse_markup(content)
    if root is None:
        raise MarkupError("Response body is empty")
    logger.trace(f"Decoding <{root.tag}> into {response_model.__name__}")
    return decode_element(root, response_model)


def decode_one(blob: bytes | str, target: Any) -> Any:
    """Decode one metadata blob into a caller-supplied target.

    Args:
        blob: The inner markup of a record's ``metadata`` element. The record
            itself is never modified.
        target: A pydantic model class, in which case a new instance is
            returned, or a model instance, whose matched fields are assigned
            in place before it is returned.

    Returns:
        The decoded model instance. An empty blob (a deleted record) yields
        the zero value: the untouched instance, or the model's defaults.

    Raises:
        TargetTypeError: If ``target`` is not a pydantic model class or
            instance, or is an instance whose matched fields are frozen.
        MarkupError: If ``blob`` is not well-formed XML.
        SchemaError: If the root element or the values do not fit the model.
    """
    model, instance = _target_model(target)
    if instance is not None:
        _check_writable(model)
    root = parse_markup(blob)
    if root is None:
        return instance if instance is not None else _validate(model, {})
    decoded = decode_element(root, model)
    if instance is None:
        return decoded
    _check_writable(model, decoded.model_fields_set)
    for name in decoded.model_fields_set:
        _assign(instance, name, getattr(decoded, name))
    return instance


def decode_many(
    blobs: Iterable[bytes | str], container: Any, field: str = "records"
) -> tuple[Any, list[int]]:
    """Decode several metadata blobs into the collection field of a container.

    The element type of the list field ``field`` is the decode target for
    every blob. The resulting list always has one entry per blob, in input
    order. A blob that fails to decode is replaced by the element type's
    zero value and its index is reported, so one bad record never hides the
    rest of a page.

    Args:
        blobs: Metadata blobs, typically ``record.metadata`` for each record.
        container: A pydantic model class or instance declaring ``field``.
        field: Name of the collection field.

    Returns:
        tuple[Any, list[int]]: The populated container and the indices of
            blobs that could not be decoded.

    Raises:
        TargetTypeError: If ``container`` is not a pydantic model class or
            instance, or is a frozen instance.
        SchemaError: If ``container`` has no list-of-models field named ``field``.
    """
    model, instance = _target_model(container)
    info = model.model_fields.get(field)
    if info is None:
        raise SchemaError(f"{model.__name__} must declare a `{field}` field")
    is_list, element_type = _shape(info.annotation)
    if not is_list or not _is_model(element_type):
        raise SchemaError(
            f"{model.__name__}.{field} must be a list of pydantic models, "
            f"got {info.annotation!r}"
        )
    if instance is not None:
        _check_writable(model, (field,))

    items: list[Any] = []
    failed: list[int] = []
    for index, blob in enumerate(blobs):
        try:
            items.append(decode_one(blob, element_type))
        except DecodeError as e:
            logger.warning(
                f"Could not decode record {index} into {element_type.__name__}: {e}"
            )
            failed.append(index)
            items.append(element_type.model_construct())

    if instance is None:
        return model.model_construct(**{field: items}), failed
    _assign(instance, field, items)
    return instance, failed
