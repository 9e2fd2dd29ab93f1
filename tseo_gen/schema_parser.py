"""Turn OpenAPI schema nodes into TypeScript type descriptors.

Raw schema dicts are converted once, at the document boundary, into one of
four variants:
- PrimitiveSchema (integer, string, boolean, object)
- ArraySchema (wrapping the parsed ``items`` schema)
- ReferenceSchema (``$ref`` pointer)
- UnknownSchema (absent, empty or unrecognized)

``resolve_type`` then maps a variant to a ``TypeDescriptor``. It never
raises: anything it does not understand becomes ``string``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Union

JSON_MEDIA_TYPE = "application/json"

# OpenAPI primitive type -> TypeScript type name
_PRIMITIVE_TYPES: dict[str, str] = {
    "integer": "number",
    "string": "string",
    "boolean": "boolean",
    "object": "any",
}


@dataclass(frozen=True, slots=True)
class PrimitiveSchema:
    kind: str


@dataclass(frozen=True, slots=True)
class ArraySchema:
    items: Schema


@dataclass(frozen=True, slots=True)
class ReferenceSchema:
    ref: str


@dataclass(frozen=True, slots=True)
class UnknownSchema:
    pass


Schema = Union[PrimitiveSchema, ArraySchema, ReferenceSchema, UnknownSchema]


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Resolved TypeScript type of a schema."""

    name: str
    is_reference: bool = False
    is_array: bool = False

    @property
    def ts_type(self) -> str:
        return f"{self.name}[]" if self.is_array else self.name


STRING_TYPE = TypeDescriptor("string")


@dataclass(frozen=True, slots=True)
class ParameterDescriptor:
    name: str
    required: bool
    schema: Schema

    @property
    def type(self) -> TypeDescriptor:
        return resolve_type(self.schema)


def parse_schema(node: Any) -> Schema:
    """Convert a raw schema dict into a schema variant.

    ``type`` is checked before ``$ref``, so a node carrying both an
    understood type and a reference resolves by its type.
    """
    if not isinstance(node, dict) or not node:
        return UnknownSchema()

    schema_type = node.get("type")
    if schema_type in _PRIMITIVE_TYPES:
        return PrimitiveSchema(schema_type)
    if schema_type == "array":
        return ArraySchema(parse_schema(node.get("items")))

    ref = node.get("$ref")
    if isinstance(ref, str) and ref:
        return ReferenceSchema(ref)

    return UnknownSchema()


def resolve_type(schema: Schema) -> TypeDescriptor:
    """Resolve a schema variant to a TypeScript type.

    Arrays resolve their item type and flag it as an array; an array of
    arrays therefore collapses to a single-level array of the innermost
    element type.
    """
    if isinstance(schema, PrimitiveSchema):
        return TypeDescriptor(_PRIMITIVE_TYPES[schema.kind])
    if isinstance(schema, ArraySchema):
        return replace(resolve_type(schema.items), is_array=True)
    if isinstance(schema, ReferenceSchema):
        return TypeDescriptor(schema.ref.rsplit("/", 1)[-1], is_reference=True)
    return STRING_TYPE


def resolve_schema_node(node: Any) -> TypeDescriptor:
    """Resolve a raw schema dict in one step."""
    return resolve_type(parse_schema(node))


def _json_schema(holder: Any) -> Any:
    """Return ``holder.content["application/json"].schema`` or None."""
    if not isinstance(holder, dict):
        return None
    content = holder.get("content")
    if not isinstance(content, dict):
        return None
    media = content.get(JSON_MEDIA_TYPE)
    if not isinstance(media, dict):
        return None
    return media.get("schema")


def parse_parameters(operation: dict[str, Any]) -> list[ParameterDescriptor]:
    """Parse the declared parameters of an operation, in document order."""
    params: list[ParameterDescriptor] = []
    for param in operation.get("parameters") or []:
        if not isinstance(param, dict) or "name" not in param:
            continue
        params.append(ParameterDescriptor(
            name=str(param["name"]),
            required=bool(param.get("required", False)),
            schema=parse_schema(param.get("schema")),
        ))
    return params


def parse_request_body(operation: dict[str, Any]) -> Schema | None:
    """Return the JSON request body schema, or None if there is none."""
    node = _json_schema(operation.get("requestBody"))
    if node is None:
        return None
    return parse_schema(node)


def parse_responses(operation: dict[str, Any]) -> dict[str, Schema | None]:
    """Map every response code to its JSON schema (None when it has no JSON content)."""
    responses = operation.get("responses")
    if not isinstance(responses, dict):
        return {}

    result: dict[str, Schema | None] = {}
    for status, response in responses.items():
        node = _json_schema(response)
        result[str(status)] = parse_schema(node) if node is not None else None
    return result


def get_response_type(responses: dict[str, Schema | None]) -> TypeDescriptor | None:
    """Determine the return type of an operation.

    Every response carrying a JSON schema overwrites the previous one, so
    the last such response in document order wins. None means ``void``.
    """
    response_type: TypeDescriptor | None = None
    for schema in responses.values():
        if schema is not None:
            response_type = resolve_type(schema)
    return response_type
