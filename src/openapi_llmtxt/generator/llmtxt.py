"""llm.txt generator: assembles the Markdown document for a whole OpenAPI spec."""

import json
import logging
from datetime import datetime
from typing import Any, Callable

from openapi_llmtxt.generator.describe import SchemaDescriber, render_metadata
from openapi_llmtxt.generator.example import UNDEFINED, ExampleSynthesizer
from openapi_llmtxt.parser.base import ApiOperation, ApiResponse, Param
from openapi_llmtxt.parser.refs import RefResolver
from openapi_llmtxt.parser.swagger import load_document, parse_operations
from openapi_llmtxt.parser.swagger import base_url as document_base_url

logger = logging.getLogger(__name__)


def _dumps(value: Any) -> str:
    if value is UNDEFINED:
        value = None
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _json_block(lines: list[str], value: Any, indent: str = "") -> None:
    lines.append(f"{indent}```json")
    lines.extend(f"{indent}{line}" for line in _dumps(value).split("\n"))
    lines.append(f"{indent}```")


def _is_empty_example(value: Any) -> bool:
    return value is UNDEFINED or value is None or value == {}


def _param_line(param: Param) -> str:
    metadata = ", ".join([param.location, f"`{param.param_type}`", *render_metadata(param.constraints)])
    label = "**Required**" if param.required else "Optional"
    return f"- `{param.name}` [{label}] ({metadata}): {param.description or 'No description'}"


class LlmTxtGenerator:
    """Renders one OpenAPI document into the llm.txt Markdown layout."""

    def __init__(
        self,
        doc: dict,
        base_url: str | None = None,
        now: Callable[[], datetime] | None = None,
    ):
        self.doc = doc
        self.resolver = RefResolver(doc)
        self.describer = SchemaDescriber(doc, self.resolver)
        self.synthesizer = ExampleSynthesizer(doc, self.resolver, now=now)
        self.base_url = base_url or document_base_url(doc)

    def generate(self) -> str:
        """Return the complete llm.txt document."""
        info = self.doc.get("info")
        if not isinstance(info, dict):
            info = {}

        lines = [
            f"# {info.get('title') or 'API Documentation'}",
            f"{info.get('description') or 'No description provided.'}",
            "",
            "## Endpoints",
            "",
        ]

        operations = parse_operations(self.doc, self.resolver)
        for operation in operations:
            logger.debug("Rendering %s %s", operation.method, operation.path)
            self._render_operation(operation, lines)

        logger.info("Rendered %d operations", len(operations))
        return "\n".join(lines)

    def _render_operation(self, op: ApiOperation, lines: list[str]) -> None:
        lines.append(f"### {op.method} {op.path} - {op.summary}")
        if op.description:
            lines.append(op.description)
        lines.append("")

        body_schema = self._render_input(op, lines)

        required_example = UNDEFINED
        if body_schema:
            required_example = self.synthesizer.synthesize(body_schema, required_only=True)
            full_example = self.synthesizer.synthesize(body_schema, required_only=False)

            if not _is_empty_example(required_example):
                lines.append("**Required Parameters Example**:")
                _json_block(lines, required_example)
                lines.append("")

            lines.append("**Full Example**:")
            _json_block(lines, full_example)
            lines.append("")

        self._render_output(op, lines)
        self._render_usage(op, body_schema, required_example, lines)

        lines.append("---")
        lines.append("")

    def _render_input(self, op: ApiOperation, lines: list[str]) -> dict | None:
        lines.append("#### Input")

        if op.parameters:
            lines.append("**Parameters:**")
            lines.extend(_param_line(p) for p in op.parameters)

        body_schema = None
        if op.request_body is not None:
            lines.append("**Request Body:**")
            body_schema = op.request_body.body_schema
            if body_schema:
                self.describer.describe(body_schema, lines, 0)
            else:
                types = ", ".join(op.request_body.content_types)
                lines.append(f"- *Content types: {types or 'Unknown'} (No schema defined)*")

        if not op.parameters and op.request_body is None:
            lines.append("- No input parameters required.")
        lines.append("")
        return body_schema

    def _render_output(self, op: ApiOperation, lines: list[str]) -> None:
        lines.append("#### Output")
        if not op.responses:
            lines.append("- No response documentation provided.")
            return

        for response in op.responses:
            lines.append(f"**Response {response.status_code}: {response.description or 'No description'}**")
            if response.body_schema:
                self.describer.describe(response.body_schema, lines, 1)
                example = self._response_example(response)
                if not _is_empty_example(example):
                    lines.append("  **Example Response**:")
                    _json_block(lines, example, indent="  ")
            else:
                lines.append("  - No response body schema defined.")
            lines.append("")

    def _response_example(self, response: ApiResponse) -> Any:
        if response.example is not None:
            return response.example
        return self.synthesizer.synthesize(response.body_schema, required_only=False)

    def _render_usage(self, op: ApiOperation, body_schema: dict | None, required_example: Any, lines: list[str]) -> None:
        lines.append("#### Usage Examples")
        lines.append("")
        lines.append("##### cURL")
        lines.append("```bash")

        parts = [
            f"curl --request {op.method}",
            f"--url {self.base_url}{op.path}",
            '--header "Content-Type: application/json"',
        ]
        if body_schema:
            parts.append(f"--data '{_dumps(required_example)}'")
        lines.append(" \\\n  ".join(parts))

        lines.append("```")
        lines.append("")


def convert(text: str, base_url: str | None = None) -> str:
    """Convert OpenAPI JSON text to llm.txt Markdown.

    Raises InvalidDocumentError before producing any output if the text is not
    a JSON document.
    """
    doc = load_document(text)
    return LlmTxtGenerator(doc, base_url=base_url).generate()
