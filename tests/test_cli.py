import json
from pathlib import Path
from unittest.mock import patch, MagicMock

from click.testing import CliRunner

from openapi_llmtxt.cli import main
from openapi_llmtxt.errors import RemoteConversionError

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliConvert:
    def test_convert_to_stdout(self):
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(FIXTURES / "petstore.json")])

        assert result.exit_code == 0
        assert result.output.startswith("# Swagger Petstore")
        assert "### GET /pets - List all pets" in result.output

    def test_convert_to_file(self, tmp_path):
        output_file = tmp_path / "out" / "llm.txt"
        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "petstore.json"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        assert output_file.exists()
        assert output_file.read_text(encoding="utf-8").startswith("# Swagger Petstore")

    def test_convert_yaml(self):
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(FIXTURES / "petstore.yaml")])

        assert result.exit_code == 0
        assert "**Response 200: A list of pets**" in result.output

    def test_base_url_from_env(self):
        runner = CliRunner()
        result = runner.invoke(
            main,
            ["convert", str(FIXTURES / "petstore.json")],
            env={"LLMTXT_BASE_URL": "http://localhost:9000"},
        )

        assert result.exit_code == 0
        assert "--url http://localhost:9000/pets" in result.output

    def test_invalid_json_fails_without_output(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        output_file = tmp_path / "llm.txt"

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(bad), "-o", str(output_file)])

        assert result.exit_code == 1
        assert "Invalid JSON format" in result.output
        assert not output_file.exists()


class TestCliRemote:
    @patch("openapi_llmtxt.cli.RemoteConverter")
    def test_remote_convert(self, MockConverter):
        mock_converter = MagicMock()
        mock_converter.convert.return_value = "# Remote Petstore"
        MockConverter.return_value = mock_converter

        runner = CliRunner()
        result = runner.invoke(main, [
            "convert", str(FIXTURES / "petstore.json"),
            "--remote", "--model", "gpt-4o",
        ])

        assert result.exit_code == 0
        assert "# Remote Petstore" in result.output
        MockConverter.assert_called_once_with(model="gpt-4o")
        mock_converter.convert.assert_called_once()

    @patch("openapi_llmtxt.cli.RemoteConverter")
    def test_remote_failure(self, MockConverter):
        MockConverter.return_value.convert.side_effect = RemoteConversionError("Failed to process the OpenAPI spec.")

        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(FIXTURES / "petstore.json"), "--remote"])

        assert result.exit_code == 1
        assert "Failed to process the OpenAPI spec." in result.output

    @patch("openapi_llmtxt.cli.RemoteConverter")
    def test_remote_rejects_yaml(self, MockConverter):
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(FIXTURES / "petstore.yaml"), "--remote"])

        assert result.exit_code == 2
        MockConverter.assert_not_called()


class TestCliExample:
    def test_component_schema_example(self):
        runner = CliRunner()
        result = runner.invoke(main, ["example", str(FIXTURES / "petstore.json"), "Error"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"code": 0, "message": "string"}

    def test_required_only(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "example", str(FIXTURES / "petstore.json"), "NewPet", "--required-only",
        ])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "Fido"}

    def test_swagger2_definition(self):
        runner = CliRunner()
        result = runner.invoke(main, ["example", str(FIXTURES / "swagger2.json"), "User"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"id": 0, "email": "string"}

    def test_unknown_schema(self):
        runner = CliRunner()
        result = runner.invoke(main, ["example", str(FIXTURES / "petstore.json"), "Nope"])

        assert result.exit_code == 1
        assert "not found" in result.output
