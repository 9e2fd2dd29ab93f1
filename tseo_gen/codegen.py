"""Render templates and write generated output.

Every unit is rendered through one shared Jinja2 environment whose filters
are the naming helpers, so delegates, controller and routers always agree
on class, field and accessor names.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable

import jinja2

from . import naming
from .context_builder import (
    build_controller_context,
    build_delegate_context,
    build_registry_context,
    build_router_context,
)
from .errors import EmissionError
from .indexer import TagGroup, index_operations

TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_BASE_NAME = "Generated"
DEFAULT_API_DIR = "src/api"
DEFAULT_ROUTES_DIR = "src/routes"


@dataclass(frozen=True)
class GeneratorOptions:
    """Naming parameters of a generation run."""

    base_name: str = DEFAULT_BASE_NAME
    api_dir: str = DEFAULT_API_DIR
    routes_dir: str = DEFAULT_ROUTES_DIR

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_dir", naming.strip_trailing_slash(self.api_dir))
        object.__setattr__(self, "routes_dir", naming.strip_trailing_slash(self.routes_dir))


@dataclass(frozen=True, slots=True)
class GeneratedUnit:
    target_path: str
    content: str


@lru_cache(maxsize=1)
def template_env() -> jinja2.Environment:
    """Return the shared template environment."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters.update({
        "lower_camel": naming.lower_camel,
        "delegate_class": naming.delegate_class_name,
        "delegate_field": naming.delegate_field_name,
        "delegate_accessor": naming.delegate_accessor_name,
        "router_class": naming.router_class_name,
        "controller_class": naming.controller_class_name,
        "router_registry": naming.router_registry_name,
        "model_module": naming.model_module_path,
    })
    return env


def render(template_name: str, context: dict[str, Any]) -> str:
    return template_env().get_template(template_name).render(**context)


def emit_delegate(group: TagGroup, options: GeneratorOptions) -> GeneratedUnit:
    """Render the ``<Tag>APIDelegate`` stub class for one tag."""
    content = render("delegate.ts.j2", build_delegate_context(group))
    target = f"{options.api_dir}/{naming.delegate_class_name(group.name)}.ts"
    return GeneratedUnit(target, content)


def emit_controller(
    tag_groups: dict[str, TagGroup], options: GeneratorOptions,
) -> list[GeneratedUnit]:
    """Render the controller and the API index."""
    context = build_controller_context(tag_groups, options.base_name)
    controller = naming.controller_class_name(options.base_name)
    return [
        GeneratedUnit(
            f"{options.api_dir}/{controller}.ts", render("controller.ts.j2", context),
        ),
        GeneratedUnit(f"{options.api_dir}/index.ts", render("api_index.ts.j2", context)),
    ]


def emit_router(group: TagGroup, options: GeneratorOptions) -> GeneratedUnit:
    """Render the ``<Tag>Router`` Express bindings for one tag."""
    context = build_router_context(
        group, options.base_name, options.api_dir, options.routes_dir,
    )
    target = f"{options.routes_dir}/{naming.router_class_name(group.name)}.ts"
    return GeneratedUnit(target, render("router.ts.j2", context))


def emit_router_registry(
    tag_groups: dict[str, TagGroup], options: GeneratorOptions,
) -> list[GeneratedUnit]:
    """Render ``<Base>Router`` (registers every tag router) and the routes index."""
    context = build_registry_context(
        tag_groups, options.base_name, options.api_dir, options.routes_dir,
    )
    registry = naming.router_registry_name(options.base_name)
    return [
        GeneratedUnit(
            f"{options.routes_dir}/{registry}.ts", render("router_registry.ts.j2", context),
        ),
        GeneratedUnit(f"{options.routes_dir}/index.ts", render("routes_index.ts.j2", context)),
    ]


def generate(
    spec: dict[str, Any], options: GeneratorOptions | None = None,
) -> list[GeneratedUnit]:
    """Generate every unit for a document.

    Delegates come before the controller that imports them, and tag routers
    before the registry that registers them.
    """
    options = options or GeneratorOptions()
    _, tag_groups = index_operations(spec)
    units: list[GeneratedUnit] = []

    print("Generating API delegates ...")
    for group in tag_groups.values():
        unit = emit_delegate(group, options)
        print(
            f"- Generating Delegate for '{naming.delegate_class_name(group.name)}'"
            f" ({len(group.operations())} operations) -> {unit.target_path}"
        )
        units.append(unit)

    controller_units = emit_controller(tag_groups, options)
    print(
        f"- Generating {naming.controller_class_name(options.base_name)} module"
        f" -> {controller_units[0].target_path}"
    )
    units.extend(controller_units)

    print("Generating routes ...")
    for group in tag_groups.values():
        unit = emit_router(group, options)
        print(f"- Generating Routes for '{naming.router_class_name(group.name)}' -> {unit.target_path}")
        units.append(unit)

    registry_units = emit_router_registry(tag_groups, options)
    print(f"- Generating {naming.router_registry_name(options.base_name)} -> {registry_units[0].target_path}")
    units.extend(registry_units)

    return units


def prepare_directories(options: GeneratorOptions) -> None:
    """Create the API and routes output directories."""
    for directory in (options.api_dir, options.routes_dir):
        try:
            Path(directory).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise EmissionError(f"Failed to create directory: {e}", directory) from e


def write_units(units: Iterable[GeneratedUnit]) -> int:
    """Write each unit to its target path.

    Stops at the first failure; units already written are left in place.

    Returns:
        The number of units written.
    """
    written = 0
    for unit in units:
        try:
            Path(unit.target_path).write_text(unit.content, encoding="utf-8")
        except OSError as e:
            raise EmissionError(f"Failed to write unit: {e}", unit.target_path) from e
        written += 1
    return written
