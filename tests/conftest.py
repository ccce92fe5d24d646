"""
Shared fixtures: a small package graph covering every type kind.
"""

import copy

import pytest

from wit_dartgen.codegen.core.schema import load_package
from wit_dartgen.codegen.languages.dart import create_dart_generator

SAMPLE_DOCUMENT = {
    "name": "example:shapes",
    "types": [
        {
            "name": "point",
            "kind": "record",
            "fields": [
                {"name": "count", "type": "u32"},
                {"name": "label", "type": "string"},
            ],
        },
        {
            "name": "color",
            "kind": "enum",
            "cases": [{"name": "red"}, {"name": "light-blue"}],
        },
        {
            "name": "shape",
            "kind": "union",
            "cases": [
                {"name": "a", "type": "u32"},
                {"name": "b", "type": "string"},
            ],
        },
        {
            "name": "event",
            "kind": "variant",
            "cases": [
                {"name": "tick"},
                {"name": "moved", "type": {"id": 0}},
            ],
        },
        {
            "name": "perms",
            "kind": "flags",
            "flags": [{"name": "read"}, {"name": "write"}],
        },
        {"kind": "tuple", "types": ["u8", "bool"]},
        {"kind": "option", "type": "u32"},
        {"kind": "result", "ok": "u32"},
        {"kind": "list", "type": 0},
        {"name": "counter", "kind": "type", "type": "u32"},
        {
            "name": "location",
            "kind": "type",
            "type": 0,
            "docs": "Where something is.",
        },
    ],
    "interfaces": {
        "math": {
            "functions": [
                {
                    "name": "add",
                    "params": [
                        {"name": "a", "type": "u32"},
                        {"name": "b", "type": "u32"},
                    ],
                    "results": "u32",
                    "docs": "Adds two numbers.",
                }
            ]
        }
    },
    "worlds": {
        "app": {
            "imports": [
                {
                    "name": "log",
                    "function": {
                        "name": "log",
                        "params": [{"name": "msg", "type": "string"}],
                    },
                },
                {"name": "math"},
            ],
            "exports": [
                {"name": "run", "function": {"name": "run", "results": "u32"}},
            ],
        }
    },
}

POINT_ID = 0
TUPLE_ID = 5
OPTION_ID = 6
RESULT_ID = 7
LIST_ID = 8
COUNTER_ID = 9
LOCATION_ID = 10


@pytest.fixture
def document():
    """Fresh copy of the sample package document."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def package(document):
    """Loaded sample package."""
    return load_package(document)


@pytest.fixture
def generator():
    """Dart generator with default configuration."""
    return create_dart_generator()


@pytest.fixture
def emitter(generator, package):
    """Emitter for the sample package."""
    return generator.emitter(package)


def make_emitter(package, **options):
    """Emitter with configuration overrides."""
    return create_dart_generator(options).emitter(package)
