"""Exceptions raised at the conversion boundary."""


class LlmTxtError(Exception):
    """Base class for conversion failures."""


class InvalidDocumentError(LlmTxtError):
    """The input text is not a JSON (or YAML) OpenAPI document."""


class RemoteConversionError(LlmTxtError):
    """The remote LLM conversion failed or returned nothing."""
