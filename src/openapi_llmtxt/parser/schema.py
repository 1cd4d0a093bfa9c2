"""Shape classification for schema nodes.

A schema node is tagged by the keywords it carries, tested in a fixed
order: `$ref`, composition, object, array, then plain typed value.
"""

from enum import Enum

COMPOSITION_KEYWORDS = ("allOf", "anyOf", "oneOf")


class SchemaKind(str, Enum):
    REF = "ref"
    COMPOSITION = "composition"
    OBJECT = "object"
    ARRAY = "array"
    PRIMITIVE = "primitive"
    EMPTY = "empty"


def schema_type(node: dict) -> str | None:
    """Return the declared `type`, picking the first non-null entry of a type list."""
    declared = node.get("type")
    if isinstance(declared, list):
        for candidate in declared:
            if isinstance(candidate, str) and candidate != "null":
                return candidate
        return "null" if "null" in declared else None
    return declared if isinstance(declared, str) else None


def required_names(node: dict) -> list:
    """The `required` property names, or an empty list when `required` is not a list."""
    required = node.get("required")
    return required if isinstance(required, list) else []


def composition_keyword(node: dict) -> str | None:
    for keyword in COMPOSITION_KEYWORDS:
        if isinstance(node.get(keyword), list):
            return keyword
    return None


def classify(node) -> SchemaKind:
    if not isinstance(node, dict):
        return SchemaKind.EMPTY
    if isinstance(node.get("$ref"), str):
        return SchemaKind.REF
    if composition_keyword(node):
        return SchemaKind.COMPOSITION

    declared = schema_type(node)
    if declared == "object" or node.get("properties"):
        return SchemaKind.OBJECT
    if declared == "array":
        return SchemaKind.ARRAY
    if declared:
        return SchemaKind.PRIMITIVE
    return SchemaKind.EMPTY
