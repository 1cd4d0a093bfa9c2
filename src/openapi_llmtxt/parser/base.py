"""Normalized models for the operations of an OpenAPI document.

Schema nodes themselves stay as the raw mappings from the document;
only the operation skeleton around them is modelled here.
"""

from typing import Any

from pydantic import BaseModel


class Param(BaseModel):
    """A single operation parameter (query, path, header, cookie or body)."""

    name: str
    location: str  # query / path / header / cookie / body
    required: bool
    param_type: str  # string / integer / boolean / array / object / unknown
    description: str = ""
    constraints: dict = {}  # format, minimum, maximum, default, enum


class RequestBody(BaseModel):
    content_types: list[str] = []
    body_schema: dict | None = None


class ApiResponse(BaseModel):
    status_code: str
    description: str
    body_schema: dict | None = None
    example: Any = None  # explicit example from the document, if any


class ApiOperation(BaseModel):
    """One HTTP method on one path, with everything the llm.txt block needs."""

    method: str  # GET / POST / PUT / DELETE / PATCH / OPTIONS / HEAD
    path: str  # /pets/{petId}
    summary: str
    description: str = ""
    parameters: list[Param] = []
    request_body: RequestBody | None = None
    responses: list[ApiResponse] = []
