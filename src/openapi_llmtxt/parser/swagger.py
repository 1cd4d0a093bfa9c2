"""OpenAPI / Swagger document parser.

Loads OpenAPI 3.x and Swagger 2.0 documents and normalizes their
operations into ApiOperation models. Schema nodes are carried through
untouched; references inside them are left for the generators.
"""

import json
import logging
from pathlib import Path

import yaml

from openapi_llmtxt.errors import InvalidDocumentError
from openapi_llmtxt.parser.base import ApiOperation, ApiResponse, Param, RequestBody
from openapi_llmtxt.parser.detect import detect_dialect, detect_format
from openapi_llmtxt.parser.refs import RefResolver
from openapi_llmtxt.parser.schema import SchemaKind, classify, schema_type

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "options", "head")

DEFAULT_BASE_URL = "https://api.example.com"

MEDIA_TYPE_ORDER = ("application/json", "*/*")

CONSTRAINT_KEYS = ("format", "minimum", "maximum", "default", "enum")


def load_document(text: str) -> dict:
    """Decode JSON text into a document, raising InvalidDocumentError if it is not one."""
    try:
        doc = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidDocumentError("Invalid JSON format") from e
    if not isinstance(doc, dict):
        raise InvalidDocumentError("Invalid JSON format: expected a JSON object at the top level")
    return doc


def load_document_file(file_path: Path) -> dict:
    """Read a document from disk, decoding YAML for .yaml/.yml files and JSON otherwise."""
    text = file_path.read_text(encoding="utf-8")
    if detect_format(file_path) != "yaml":
        return load_document(text)

    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise InvalidDocumentError(f"Invalid YAML format: {e}") from e
    if not isinstance(doc, dict):
        raise InvalidDocumentError("Invalid YAML format: expected a mapping at the top level")
    return doc


def base_url(doc: dict) -> str:
    """The documentation base URL: first server, Swagger 2.0 host, or a placeholder."""
    servers = doc.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict) and servers[0].get("url"):
        return servers[0]["url"]

    if detect_dialect(doc) == "swagger2" and doc.get("host"):
        schemes = doc.get("schemes") or ["https"]
        return f"{schemes[0]}://{doc['host']}{doc.get('basePath', '')}"

    return DEFAULT_BASE_URL


def parse_operations(doc: dict, resolver: RefResolver | None = None) -> list[ApiOperation]:
    """Collect every recognised HTTP operation in path and method declaration order."""
    resolver = resolver or RefResolver(doc)
    operations = []
    paths = doc.get("paths")
    if not isinstance(paths, dict):
        paths = {}

    for path, path_item in paths.items():
        if not isinstance(path_item, dict):
            continue
        shared_params = path_item.get("parameters") or []

        for method, operation in path_item.items():
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            if not isinstance(operation, dict):
                operation = {}

            raw_params = _merge_parameters(shared_params, operation.get("parameters") or [], resolver)
            request_body = _parse_request_body(operation, raw_params, doc, resolver)

            operations.append(
                ApiOperation(
                    method=method.upper(),
                    path=str(path),
                    summary=str(operation.get("summary") or operation.get("operationId") or "No summary"),
                    description=str(operation.get("description") or ""),
                    parameters=_parse_parameters(raw_params, resolver),
                    request_body=request_body,
                    responses=_parse_responses(operation.get("responses") or {}, resolver),
                )
            )

    return operations


def _merge_parameters(shared: list, own: list, resolver: RefResolver) -> list[dict]:
    """Path-level parameters overridden by operation-level ones with the same name and location."""
    merged: dict[tuple, dict] = {}
    for raw in [*shared, *own]:
        param = _resolve_node(raw, resolver)
        if param is None:
            logger.warning("Skipping unresolved parameter %r", raw)
            continue
        merged[(param.get("name"), param.get("in"))] = param
    return list(merged.values())


def _parse_parameters(params: list[dict], resolver: RefResolver) -> list[Param]:
    result = []
    for p in params:
        schema = _resolve_node(p.get("schema") or {}, resolver) or {}
        constraints = {}
        for key in CONSTRAINT_KEYS:
            if key in schema:
                constraints[key] = schema[key]
            elif key in p:
                constraints[key] = p[key]

        result.append(
            Param(
                name=str(p.get("name", "")),
                location=str(p.get("in") or "query"),
                required=bool(p.get("required", False)),
                param_type=schema_type(schema) or schema_type(p) or "unknown",
                description=str(p.get("description") or ""),
                constraints=constraints,
            )
        )
    return result


def _parse_request_body(operation: dict, params: list[dict], doc: dict, resolver: RefResolver) -> RequestBody | None:
    body = operation.get("requestBody")
    if isinstance(body, dict):
        ref = body.get("$ref")
        if isinstance(ref, str):
            body = resolver.resolve(ref)
            if body is None:
                return RequestBody(body_schema={"$ref": ref})
        content = body.get("content")
        if not isinstance(content, dict):
            content = {}
        media = _select_media(content)
        return RequestBody(
            content_types=list(content),
            body_schema=media["schema"] if media else None,
        )

    # Swagger 2.0 carries the payload as an `in: body` parameter.
    for p in params:
        if p.get("in") == "body" and isinstance(p.get("schema"), dict):
            consumes = operation.get("consumes") or doc.get("consumes") or ["application/json"]
            return RequestBody(content_types=list(consumes), body_schema=p["schema"])
    return None


def _parse_responses(responses: dict, resolver: RefResolver) -> list[ApiResponse]:
    result = []
    if not isinstance(responses, dict):
        return result
    for status_code, resp in responses.items():
        if not isinstance(resp, dict):
            resp = {}

        ref = resp.get("$ref")
        if isinstance(ref, str):
            target = resolver.resolve(ref)
            if target is None or classify(target) is not SchemaKind.EMPTY:
                # Unresolved, or a ref straight to a schema: describe the ref itself.
                result.append(ApiResponse(status_code=str(status_code), description="", body_schema={"$ref": ref}))
                continue
            resp = target

        body_schema = None
        example = None
        media = _select_media(resp.get("content") or {})
        if media:
            body_schema = media["schema"]
            example = _media_example(media, resolver)
        elif isinstance(resp.get("schema"), dict):
            body_schema = resp["schema"]
            examples = resp.get("examples")
            if isinstance(examples, dict):
                example = examples.get("application/json")

        result.append(
            ApiResponse(
                status_code=str(status_code),
                description=str(resp.get("description") or ""),
                body_schema=body_schema,
                example=example,
            )
        )
    return result


def _select_media(content: dict) -> dict | None:
    """Pick the media object whose schema documents the payload."""
    if not isinstance(content, dict):
        return None
    candidates = [content.get(media_type) for media_type in MEDIA_TYPE_ORDER]
    candidates.append(next(iter(content.values()), None))
    for media in candidates:
        if isinstance(media, dict) and isinstance(media.get("schema"), dict):
            return media
    return None


def _media_example(media: dict, resolver: RefResolver):
    if media.get("example") is not None:
        return media["example"]
    examples = media.get("examples")
    if isinstance(examples, dict):
        examples = list(examples.values())
    if isinstance(examples, list) and examples:
        first = _resolve_node(examples[0], resolver) or {}
        return first.get("value")
    return None


def _resolve_node(node, resolver: RefResolver) -> dict | None:
    if not isinstance(node, dict):
        return None
    ref = node.get("$ref")
    if isinstance(ref, str):
        return resolver.resolve(ref)
    return node
