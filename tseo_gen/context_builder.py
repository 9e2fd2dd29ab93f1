"""Build Jinja2 template contexts from indexed tag groups.

Each builder turns a TagGroup (or all of them) into a plain dict of
structured values: method signatures, request fields, model imports and
route bindings. Formatting is left to the templates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .indexer import OperationRecord, TagGroup
from .naming import controller_class_name, express_path, relative_module
from .schema_parser import TypeDescriptor, get_response_type, resolve_type

VOID = "void"


@dataclass(frozen=True, slots=True)
class RequestField:
    """One field of a delegate method's inline request type."""

    name: str
    optional: bool
    type: TypeDescriptor


@dataclass(frozen=True, slots=True)
class DelegateMethod:
    operation_id: str
    description_lines: list[str]
    path: str
    response_codes: list[str]
    fields: list[RequestField]
    return_type: str


@dataclass(frozen=True, slots=True)
class RouteHandler:
    operation_id: str
    description_lines: list[str]
    method: str
    path: str
    arguments: list[str]
    returns_value: bool


def _comment_lines(text: str | None) -> list[str]:
    if not text:
        return []
    return [line.rstrip() for line in text.rstrip("\n").split("\n")]


def request_fields(op: OperationRecord) -> list[RequestField]:
    """Build the inline request type: declared parameters, then ``payload``."""
    fields = [
        RequestField(name=param.name, optional=not param.required, type=param.type)
        for param in op.parameters
    ]
    if op.request_body is not None:
        fields.append(RequestField(
            name="payload", optional=True, type=resolve_type(op.request_body),
        ))
    return fields


def return_type(op: OperationRecord) -> str:
    response_type = get_response_type(op.responses)
    return response_type.ts_type if response_type else VOID


def collect_model_imports(group: TagGroup) -> list[str]:
    """Collect referenced model names in first-seen order, without duplicates."""
    names: dict[str, None] = {}
    for op in group.operations():
        types = [field.type for field in request_fields(op)]
        response_type = get_response_type(op.responses)
        if response_type is not None:
            types.append(response_type)
        for descriptor in types:
            if descriptor.is_reference:
                names.setdefault(descriptor.name, None)
    return list(names)


def build_delegate_method(op: OperationRecord) -> DelegateMethod:
    return DelegateMethod(
        operation_id=op.operation_id,
        description_lines=_comment_lines(op.description),
        path=op.path,
        response_codes=list(op.responses),
        fields=request_fields(op),
        return_type=return_type(op),
    )


def build_delegate_context(group: TagGroup) -> dict[str, Any]:
    """Build the template context for one ``<Tag>APIDelegate`` unit."""
    return {
        "tag": group.name,
        "description_lines": _comment_lines(group.description),
        "imports": collect_model_imports(group),
        "methods": [build_delegate_method(op) for op in group.operations()],
    }


def build_controller_context(tag_groups: dict[str, TagGroup], base_name: str) -> dict[str, Any]:
    """Build the template context for the controller and the API index."""
    return {
        "base_name": base_name,
        "tags": list(tag_groups),
    }


def build_route_handler(op: OperationRecord) -> RouteHandler:
    arguments = [param.name for param in op.parameters]
    if op.request_body is not None:
        arguments.append("payload")

    return RouteHandler(
        operation_id=op.operation_id,
        description_lines=_comment_lines(op.description),
        method=op.http_method,
        path=express_path(op.path),
        arguments=arguments,
        returns_value=get_response_type(op.responses) is not None,
    )


def build_router_context(
    group: TagGroup, base_name: str, api_dir: str, routes_dir: str,
) -> dict[str, Any]:
    """Build the template context for one ``<Tag>Router`` unit."""
    controller = controller_class_name(base_name)
    return {
        "tag": group.name,
        "base_name": base_name,
        "controller_module": relative_module(routes_dir, api_dir, controller),
        "handlers": [build_route_handler(op) for op in group.operations()],
    }


def build_registry_context(
    tag_groups: dict[str, TagGroup], base_name: str, api_dir: str, routes_dir: str,
) -> dict[str, Any]:
    """Build the template context for ``<Base>Router`` and the routes index."""
    return {
        "base_name": base_name,
        "tags": list(tag_groups),
        "api_module": relative_module(routes_dir, api_dir),
    }
