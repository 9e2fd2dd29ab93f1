"""Group the operations of an OpenAPI document by tag and HTTP method.

Order is preserved at every level: tags appear in the order they are first
used by an operation (not the order of the ``tags`` declaration list), and
operations keep their document order within a tag and method.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .loader import get_paths, get_tags
from .schema_parser import (
    ParameterDescriptor,
    Schema,
    parse_parameters,
    parse_request_body,
    parse_responses,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

DEFAULT_DESCRIPTION = "No summary for this service"


@dataclass(frozen=True)
class OperationRecord:
    """A single path + method entry of the document."""

    operation_id: str
    description: str
    parameters: list[ParameterDescriptor]
    request_body: Schema | None
    responses: dict[str, Schema | None]
    path: str
    http_method: str


@dataclass
class TagGroup:
    """All operations sharing the same first tag."""

    name: str
    description: str | None = None
    operations_by_method: dict[str, list[OperationRecord]] = field(default_factory=dict)

    def add(self, record: OperationRecord) -> None:
        self.operations_by_method.setdefault(record.http_method, []).append(record)

    def operations(self) -> list[OperationRecord]:
        """All operations, methods first then document order within a method."""
        return [op for ops in self.operations_by_method.values() for op in ops]


def build_tag_descriptions(spec: dict[str, Any]) -> dict[str, str | None]:
    """Map each declared tag name to its description."""
    descriptions: dict[str, str | None] = {}
    for tag in get_tags(spec):
        if isinstance(tag, dict) and "name" in tag:
            descriptions[str(tag["name"])] = tag.get("description")
    return descriptions


def build_operation(path: str, method: str, operation: dict[str, Any]) -> OperationRecord:
    """Build an OperationRecord from a raw operation dict."""
    return OperationRecord(
        operation_id=str(operation["operationId"]),
        description=operation.get("description") or DEFAULT_DESCRIPTION,
        parameters=parse_parameters(operation),
        request_body=parse_request_body(operation),
        responses=parse_responses(operation),
        path=path,
        http_method=method,
    )


def index_operations(
    spec: dict[str, Any],
) -> tuple[dict[str, str | None], dict[str, TagGroup]]:
    """Index every tagged operation of the document.

    Only the first tag of an operation is used. Operations without tags or
    without an ``operationId`` are skipped with a warning.

    Returns:
        A ``(tag_descriptions, tag_groups)`` pair.
    """
    tag_descriptions = build_tag_descriptions(spec)
    tag_groups: dict[str, TagGroup] = {}
    seen: set[tuple[str, str]] = set()

    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, dict):
            continue

        for method, operation in path_item.items():
            if method not in HTTP_METHODS or not isinstance(operation, dict):
                continue

            tags = operation.get("tags")
            if not tags or not isinstance(tags, list):
                logger.warning("Tags section is missing for path '%s' ... skipping.", path)
                continue

            if not operation.get("operationId"):
                logger.warning(
                    "operationId is missing for %s '%s' ... skipping.", method.upper(), path
                )
                continue

            tag = str(tags[0])
            if len(tags) > 1:
                logger.debug("Only the first tag '%s' is used for %s '%s'", tag, method.upper(), path)

            record = build_operation(path, method, operation)
            key = (tag, record.operation_id)
            if key in seen:
                logger.warning(
                    "Duplicate operationId '%s' in tag '%s'; the later method shadows the earlier one.",
                    record.operation_id,
                    tag,
                )
            seen.add(key)

            group = tag_groups.get(tag)
            if group is None:
                group = TagGroup(name=tag, description=tag_descriptions.get(tag))
                tag_groups[tag] = group
            group.add(record)

    return tag_descriptions, tag_groups


def find_duplicate_operations(tag_groups: dict[str, TagGroup]) -> list[tuple[str, str]]:
    """Return ``(tag, operation_id)`` pairs that occur more than once."""
    duplicates: list[tuple[str, str]] = []
    for group in tag_groups.values():
        counts: dict[str, int] = {}
        for op in group.operations():
            counts[op.operation_id] = counts.get(op.operation_id, 0) + 1
        duplicates.extend(
            (group.name, op_id) for op_id, count in counts.items() if count > 1
        )
    return duplicates
