"""Shared fixtures for generator tests.

The Pet Store document below is small but covers every emitter path: a
referenced response model, a JSON request body, a void operation, two tags
and a path with two placeholders.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from tseo_gen.codegen import GeneratorOptions


def _json(schema: dict[str, Any]) -> dict[str, Any]:
    return {"content": {"application/json": {"schema": schema}}}


PET_STORE: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Pet Store", "version": "1.0.0"},
    "tags": [
        {"name": "Store", "description": "Orders placed in the store"},
        {"name": "Pets", "description": "Everything about pets"},
    ],
    "paths": {
        "/pets/{id}": {
            "get": {
                "tags": ["Pets"],
                "operationId": "getPet",
                "description": "Returns a single pet",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {"description": "OK", **_json({"$ref": "#/components/schemas/Pet"})},
                    "404": {"description": "Not found"},
                },
            },
            "delete": {
                "tags": ["Pets"],
                "operationId": "deletePet",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {"204": {"description": "Deleted"}},
            },
        },
        "/pets": {
            "get": {
                "tags": ["Pets"],
                "operationId": "listPets",
                "description": "Lists pets",
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                ],
                "responses": {
                    "200": _json({"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}),
                },
            },
            "post": {
                "tags": ["Pets"],
                "operationId": "addPet",
                "requestBody": _json({"$ref": "#/components/schemas/NewPet"}),
                "responses": {"201": _json({"$ref": "#/components/schemas/Pet"})},
            },
        },
        "/store/{storeId}/orders/{orderId}": {
            "get": {
                "tags": ["Store", "Pets"],
                "operationId": "getOrder",
                "parameters": [
                    {"name": "storeId", "in": "path", "required": True, "schema": {"type": "integer"}},
                    {"name": "orderId", "in": "path", "required": True, "schema": {"type": "integer"}},
                ],
                "responses": {"200": _json({"$ref": "#/components/schemas/OrderItem"})},
            },
        },
        "/health": {
            "get": {
                "operationId": "health",
                "responses": {"200": {"description": "OK"}},
            },
        },
    },
}


@pytest.fixture
def pet_store() -> dict[str, Any]:
    """A fresh copy of the Pet Store document."""
    return copy.deepcopy(PET_STORE)


@pytest.fixture
def options() -> GeneratorOptions:
    return GeneratorOptions()
