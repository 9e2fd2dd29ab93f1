"""Naming conventions shared by every emitter.

Tag ``Pets`` with base name ``Generated`` yields:
  - delegate class        -> PetsAPIDelegate
  - controller field      -> petsApiDelegate
  - controller accessor   -> petsDelegate
  - router class          -> PetsRouter
  - controller class      -> GeneratedController
  - router registry class -> GeneratedRouter

Model ``OrderItem`` is imported from ``../model/orderItem``.
"""

from __future__ import annotations

import posixpath
import re

# Only the first placeholder of a path is rewritten to Express syntax.
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def lower_camel(name: str) -> str:
    """Lower-case the first character of a name."""
    return name[:1].lower() + name[1:]


def delegate_class_name(tag: str) -> str:
    return f"{tag}APIDelegate"


def delegate_field_name(tag: str) -> str:
    return f"{lower_camel(tag)}ApiDelegate"


def delegate_accessor_name(tag: str) -> str:
    return f"{lower_camel(tag)}Delegate"


def router_class_name(tag: str) -> str:
    return f"{tag}Router"


def controller_class_name(base_name: str) -> str:
    return f"{base_name}Controller"


def router_registry_name(base_name: str) -> str:
    return f"{base_name}Router"


def model_module_path(type_name: str) -> str:
    """Return the import path of a referenced model, relative to the API directory."""
    return f"../model/{lower_camel(type_name)}"


def express_path(path: str) -> str:
    """Convert the first ``{name}`` placeholder in a path to ``:name``.

    Examples:
        >>> express_path("/pets/{id}")
        '/pets/:id'
        >>> express_path("/a/{x}/b/{y}")
        '/a/:x/b/{y}'
    """
    return _PLACEHOLDER.sub(r":\1", path, count=1)


def strip_trailing_slash(directory: str) -> str:
    """Drop a single trailing ``/`` from a directory argument."""
    if directory.endswith("/") and len(directory) > 1:
        return directory[:-1]
    return directory


def relative_module(from_dir: str, to_dir: str, module: str = "") -> str:
    """Build a TypeScript import specifier for ``to_dir/module`` as seen from ``from_dir``."""
    rel = posixpath.relpath(to_dir, from_dir)
    target = posixpath.join(rel, module) if module else rel
    if not target.startswith("."):
        target = f"./{target}"
    return target
