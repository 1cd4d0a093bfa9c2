"""Remote converter: asks an LLM to write the llm.txt document directly."""

import logging
from pathlib import Path

from openapi_llmtxt.errors import RemoteConversionError
from openapi_llmtxt.llm import LlmClient
from openapi_llmtxt.parser.swagger import load_document

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

TEMPERATURE = 0.1

FAILURE_MESSAGE = "Failed to process the OpenAPI spec. Please ensure it is a valid JSON."

USER_PROMPT = (
    "Please convert this OpenAPI JSON into a detailed llm.txt formatted Markdown. "
    "For every endpoint, include Input/Output sections with types, descriptions, and MUST include "
    'JSON blocks for "Required Parameters Example", "Full Example", "Example Response", and a '
    'Usage Examples section with a "cURL" sub-heading (using #### and ##### respectively):\n\n'
)


class RemoteConverter:
    """Converts OpenAPI JSON text to llm.txt Markdown through an LLM."""

    def __init__(self, model: str | None = None):
        self.client = LlmClient(model=model)

    def convert(self, text: str) -> str:
        load_document(text)

        system_prompt = (PROMPTS_DIR / "llmtxt.md").read_text(encoding="utf-8")
        try:
            result = self.client.call(system=system_prompt, user=USER_PROMPT + text, temperature=TEMPERATURE)
        except Exception as e:
            logger.exception("Remote conversion with %s failed", self.client.model)
            raise RemoteConversionError(FAILURE_MESSAGE) from e

        if not result or not result.strip():
            logger.error("Remote conversion with %s returned an empty response", self.client.model)
            raise RemoteConversionError(FAILURE_MESSAGE)
        return result
