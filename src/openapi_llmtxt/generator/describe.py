"""Schema describer: flattens a schema graph into indented Markdown bullets."""

import json
import logging

from openapi_llmtxt.parser.refs import RefResolver
from openapi_llmtxt.parser.schema import SchemaKind, classify, composition_keyword, required_names, schema_type

logger = logging.getLogger(__name__)

INDENT = "  "

COMPOSITION_LABELS = {"allOf": "All of:", "anyOf": "Any of:", "oneOf": "One of:"}


def _json(value) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def render_metadata(fields: dict, include_example: bool = False) -> list[str]:
    """Render format/min/max/default/enum (and optionally example) fragments in fixed order."""
    parts = []
    if fields.get("format"):
        parts.append(f"format: `{fields['format']}`")
    if "minimum" in fields:
        parts.append(f"min: `{_json(fields['minimum'])}`")
    if "maximum" in fields:
        parts.append(f"max: `{_json(fields['maximum'])}`")
    if "default" in fields:
        parts.append(f"default: `{_json(fields['default'])}`")
    if isinstance(fields.get("enum"), list):
        parts.append(f"enum: {_json(fields['enum'])}")
    if include_example and "example" in fields:
        parts.append(f"example: `{_json(fields['example'])}`")
    return parts


def _suffix(node: dict) -> str:
    description = node.get("description")
    return f": {description}" if description else ""


class SchemaDescriber:
    """Appends documentation lines for schema nodes resolved against one document."""

    def __init__(self, root: dict, resolver: RefResolver | None = None):
        self.resolver = resolver or RefResolver(root)

    def describe(self, node, lines: list[str], depth: int = 0) -> None:
        self._describe(node, lines, depth, frozenset())

    def _describe(self, node, lines: list[str], depth: int, active: frozenset) -> None:
        pad = INDENT * depth
        kind = classify(node)

        if kind is SchemaKind.REF:
            ref = node["$ref"]
            if ref in active:
                logger.debug("Circular reference %s", ref)
                lines.append(f"{pad}- `Circular ref: {ref}`")
                return
            target = self.resolver.resolve(ref)
            if target is None:
                lines.append(f"{pad}- `Unresolved ref: {ref}`")
                return
            # A ref hop keeps the caller's depth.
            self._describe(target, lines, depth, active | {ref})

        elif kind is SchemaKind.COMPOSITION:
            keyword = composition_keyword(node)
            lines.append(f"{pad}- *{COMPOSITION_LABELS[keyword]}*")
            for child in node[keyword]:
                self._describe(child, lines, depth + 1, active)

        elif kind is SchemaKind.OBJECT:
            self._describe_properties(node, lines, depth, active)

        elif kind is SchemaKind.ARRAY and node.get("items") is not None:
            parts = ["array"]
            if "default" in node:
                parts.append(f"default: `{_json(node['default'])}`")
            lines.append(f"{pad}- `Array` ({', '.join(parts)}){_suffix(node)}")
            self._describe(node["items"], lines, depth + 1, active)

        elif kind in (SchemaKind.PRIMITIVE, SchemaKind.ARRAY):
            parts = [f"`{schema_type(node)}`", *render_metadata(node, include_example=True)]
            lines.append(f"{pad}- ({', '.join(parts)}){_suffix(node)}")

    def _describe_properties(self, node: dict, lines: list[str], depth: int, active: frozenset) -> None:
        pad = INDENT * depth
        properties = node.get("properties")
        if not isinstance(properties, dict):
            return
        required = required_names(node)

        for name, prop in properties.items():
            if not isinstance(prop, dict):
                prop = {}
            label = "**Required**" if name in required else "Optional"
            prop_kind = classify(prop)
            prop_type = schema_type(prop) or ("object" if prop_kind is SchemaKind.REF else "unknown")
            metadata = ", ".join([f"`{prop_type}`", *render_metadata(prop, include_example=True)])
            lines.append(f"{pad}- `{name}` [{label}] ({metadata}){_suffix(prop)}")

            if prop_kind in (SchemaKind.OBJECT, SchemaKind.REF, SchemaKind.COMPOSITION):
                self._describe(prop, lines, depth + 1, active)
            elif prop_kind is SchemaKind.ARRAY and prop.get("items") is not None:
                lines.append(f"{INDENT * (depth + 1)}*Items:*")
                self._describe(prop["items"], lines, depth + 2, active)


def describe_schema(node, root: dict, lines: list[str], depth: int = 0) -> None:
    """Append documentation lines for `node` to `lines`."""
    SchemaDescriber(root).describe(node, lines, depth)
