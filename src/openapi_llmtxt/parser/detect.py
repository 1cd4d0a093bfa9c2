"""Detect the file format and dialect of an API document."""

from pathlib import Path

YAML_SUFFIXES = (".yaml", ".yml")


def detect_format(file_path: Path) -> str:
    """Return 'yaml' for .yaml/.yml files and 'json' for everything else."""
    return "yaml" if file_path.suffix.lower() in YAML_SUFFIXES else "json"


def detect_dialect(doc: dict) -> str:
    """Detect which OpenAPI generation a parsed document follows.

    Returns: 'openapi3', 'swagger2', or 'unknown'.
    """
    if "openapi" in doc:
        return "openapi3"
    if str(doc.get("swagger", "")).startswith("2"):
        return "swagger2"
    if "servers" in doc or "components" in doc:
        return "openapi3"
    if "definitions" in doc or "host" in doc or "basePath" in doc:
        return "swagger2"
    return "unknown"
