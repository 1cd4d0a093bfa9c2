from unittest.mock import patch

import pytest

from openapi_llmtxt.errors import InvalidDocumentError, RemoteConversionError
from openapi_llmtxt.generator.remote import FAILURE_MESSAGE, TEMPERATURE, RemoteConverter

SPEC_TEXT = '{"info": {"title": "T"}, "paths": {}}'


class TestRemoteConverter:
    @patch("openapi_llmtxt.generator.remote.LlmClient")
    def test_returns_llm_markdown(self, MockClient):
        MockClient.return_value.call.return_value = "# T\nSummary"

        result = RemoteConverter(model="gpt-4o").convert(SPEC_TEXT)

        assert result == "# T\nSummary"
        MockClient.assert_called_once_with(model="gpt-4o")
        kwargs = MockClient.return_value.call.call_args[1]
        assert "llm.txt" in kwargs["system"]
        assert kwargs["user"].endswith(SPEC_TEXT)
        assert kwargs["temperature"] == TEMPERATURE

    @patch("openapi_llmtxt.generator.remote.LlmClient")
    def test_invalid_json_fails_before_calling_llm(self, MockClient):
        with pytest.raises(InvalidDocumentError):
            RemoteConverter().convert("{not json")
        MockClient.return_value.call.assert_not_called()

    @patch("openapi_llmtxt.generator.remote.LlmClient")
    def test_client_failure_is_generic(self, MockClient):
        MockClient.return_value.call.side_effect = ConnectionError("boom")

        with pytest.raises(RemoteConversionError, match="Failed to process") as exc_info:
            RemoteConverter().convert(SPEC_TEXT)
        assert str(exc_info.value) == FAILURE_MESSAGE
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @patch("openapi_llmtxt.generator.remote.LlmClient")
    def test_empty_response_fails(self, MockClient):
        MockClient.return_value.call.return_value = "   "

        with pytest.raises(RemoteConversionError):
            RemoteConverter().convert(SPEC_TEXT)
