"""Tests for the generation wire contracts."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from core.generator.models import (
    CodeGenerationOptions,
    GeneratedFile,
    GenerationProgress,
    GenerationRequest,
    GenerationResult,
)


class TestGenerationRequest:

    def test_camel_case_input(self):
        request = GenerationRequest.model_validate({
            "processId": "p1",
            "config": {"projectName": "Orders", "namespace": "Orders", "enableNullable": False},
            "options": {"classPrefix": "Acme", "useValueTask": True},
            "dependencies": [{"packageId": "Serilog", "version": "4.0.0"}],
        })

        assert request.process_id == "p1"
        assert request.config.project_name == "Orders"
        assert request.config.enable_nullable is False
        assert request.options.class_prefix == "Acme"
        assert request.options.use_value_task is True
        assert request.dependencies[0].package_id == "Serilog"
        assert request.dependencies[0].is_required is False

    def test_snake_case_input(self):
        request = GenerationRequest(process_id="p1", options={"generate_readme": True})

        assert request.options.generate_readme is True
        assert request.template == "standard"

    def test_dump_uses_camel_case(self):
        dumped = GenerationRequest(process_id="p1").model_dump(by_alias=True)

        assert "processId" in dumped
        assert "projectName" in dumped["config"]
        assert "generateAsyncMethods" in dumped["options"]

    def test_option_defaults(self):
        options = CodeGenerationOptions()

        assert options.naming_style == "pascalCase"
        assert options.generate_async_methods is True
        assert options.use_value_task is False
        assert options.generate_readme is False
        assert options.include_examples is False

    def test_unknown_naming_style(self):
        with pytest.raises(ValidationError):
            CodeGenerationOptions(naming_style="kebab")


class TestGeneratedFile:

    def test_counts(self):
        generated = GeneratedFile(path="Workflows/OrdersWorkflow.cs", content="a\nb\nc")

        assert generated.line_count == 3
        assert generated.size == 5
        assert generated.folder == "Workflows"

    def test_size_is_utf8_bytes(self):
        assert GeneratedFile(path="README.md", content="é\n").size == 3

    def test_empty_content(self):
        assert GeneratedFile(path="a.cs", content="").line_count == 0

    def test_root_folder(self):
        assert GeneratedFile(path="Program.cs", content="").folder == ""

    def test_computed_fields_are_dumped(self):
        dumped = GeneratedFile(path="Program.cs", content="x\n").model_dump(by_alias=True)

        assert dumped["lineCount"] == 1
        assert dumped["size"] == 2


class TestGenerationResult:

    def test_file_lookup(self):
        result = GenerationResult(
            success=True,
            files=(GeneratedFile(path="Program.cs", content="x"),),
            total_lines=1,
            duration=timedelta(milliseconds=5),
        )

        assert result.file("Program.cs").content == "x"
        assert result.file("Missing.cs") is None

    def test_dump_keys(self):
        dumped = GenerationResult(success=False, error="boom", error_code="emission_error").model_dump(by_alias=True)

        assert {"success", "error", "errorCode", "cancelled", "files", "totalLines", "duration", "projectPath"} <= set(dumped)


class TestGenerationProgress:

    def test_bounds(self):
        with pytest.raises(ValidationError):
            GenerationProgress(percentage=101, message="too far")
        with pytest.raises(ValidationError):
            GenerationProgress(percentage=-1, message="too early")
