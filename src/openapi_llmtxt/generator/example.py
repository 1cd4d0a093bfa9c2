"""Example synthesizer: builds representative JSON values from schema nodes.

Two flavours are produced from the same schema: a full example carrying
every declared property, and a required-only example limited to the
properties listed in each object's `required` array.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from openapi_llmtxt.parser.refs import RefResolver
from openapi_llmtxt.parser.schema import SchemaKind, classify, composition_keyword, required_names, schema_type

logger = logging.getLogger(__name__)

PLACEHOLDER_URI = "https://example.com"


class _Undefined:
    """Marks the absence of a value, as opposed to JSON null."""

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a `Z` suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ExampleSynthesizer:
    """Synthesizes example payloads for schema nodes of one document."""

    def __init__(
        self,
        root: dict,
        resolver: RefResolver | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.resolver = resolver or RefResolver(root)
        self.now = now or _utcnow

    def synthesize(self, node, required_only: bool = False) -> Any:
        """Return an example value for `node`, or UNDEFINED if none can be produced."""
        return self._synthesize(node, required_only, frozenset())

    def _synthesize(self, node, required_only: bool, active: frozenset) -> Any:
        if not isinstance(node, dict):
            return UNDEFINED
        kind = classify(node)

        if kind is SchemaKind.REF:
            ref = node["$ref"]
            if ref in active:
                logger.debug("Circular reference %s, stopping example", ref)
                return UNDEFINED
            target = self.resolver.resolve(ref)
            if target is None:
                return UNDEFINED
            return self._synthesize(target, required_only, active | {ref})

        if kind is SchemaKind.COMPOSITION:
            keyword = composition_keyword(node)
            children = node[keyword]
            if keyword == "allOf":
                merged = {}
                for child in children:
                    value = self._synthesize(child, required_only, active)
                    if isinstance(value, dict):
                        merged.update(value)
                return merged
            if not children:
                return UNDEFINED
            return self._synthesize(children[0], required_only, active)

        if "example" in node:
            return node["example"]
        if "default" in node:
            return node["default"]

        if kind is SchemaKind.OBJECT:
            return self._synthesize_object(node, required_only, active)

        if kind is SchemaKind.ARRAY:
            item = self._synthesize(node.get("items"), required_only, active)
            return [None if item is UNDEFINED else item]

        enum = node.get("enum")
        if isinstance(enum, list) and enum:
            return enum[0]

        return self._placeholder(node)

    def _synthesize_object(self, node: dict, required_only: bool, active: frozenset) -> dict:
        properties = node.get("properties")
        if not isinstance(properties, dict):
            properties = {}
        required = required_names(node)

        result = {}
        for name, prop in properties.items():
            if required_only and name not in required:
                continue
            value = self._synthesize(prop, required_only, active)
            if value is not UNDEFINED:
                result[name] = value
        return result

    def _placeholder(self, node: dict) -> Any:
        declared = schema_type(node)
        if declared == "string":
            fmt = node.get("format")
            if fmt == "date-time":
                return format_timestamp(self.now())
            if fmt == "uri":
                return PLACEHOLDER_URI
            return "string"
        if declared in ("integer", "number"):
            return 0
        if declared == "boolean":
            return True
        return None


def synthesize_example(node, root: dict, required_only: bool = False) -> Any:
    """One-shot helper around ExampleSynthesizer."""
    return ExampleSynthesizer(root).synthesize(node, required_only)
