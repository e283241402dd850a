import pytest
from rich.console import Console

from tracker.cli._shared import ExitCode, exit_with_error, format_json, parse_fields, records_table
from tracker.exceptions import SchemaError


class TestParseFields:
    def test_plain_text_fields(self) -> None:
        record = parse_fields("ideas", ["name=CLI", "topic=Tooling"], 2)

        assert record == {"name": "CLI", "topic": "Tooling"}

    def test_text_fields_are_not_type_inferred(self) -> None:
        record = parse_fields("tasks", ["name=42", "id=007"], 2)

        assert record == {"name": "42", "id": "007"}

    def test_array_fields_accept_comma_lists(self) -> None:
        record = parse_fields("ideas", ["taskIds=task_001, task_002"], 2)

        assert record == {"taskIds": ["task_001", "task_002"]}

    def test_array_fields_accept_json(self) -> None:
        record = parse_fields("ideas", ['keywords=["a,b", "c"]'], 2)

        assert record == {"keywords": ["a,b", "c"]}

    def test_empty_array(self) -> None:
        assert parse_fields("ideas", ["taskIds="], 2) == {"taskIds": []}

    def test_untyped_fields_are_inferred(self) -> None:
        assert parse_fields("events", ["duration=90"], 2) == {"duration": 90}

    def test_unknown_fields_pass_through_for_validation(self) -> None:
        assert parse_fields("ideas", ["color=blue"], 2) == {"color": "blue"}

    def test_rejects_token_without_equals(self) -> None:
        with pytest.raises(SchemaError, match="Expected key=value"):
            parse_fields("ideas", ["name"], 2)


class TestOutput:
    def test_format_json_indents(self) -> None:
        assert format_json({"a": [1]}) == '{\n  "a": [\n    1\n  ]\n}'

    def test_records_table_lists_ids(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = Console(width=200, no_color=True)
        table = records_table("tasks", [{"id": "task_001", "name": "Write", "subtaskIds": ["subtask_001"]}])

        console.print(table)

        out = capsys.readouterr().out
        assert "task_001" in out
        assert "subtask_001" in out
        assert "tasks (1)" in out

    def test_exit_with_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = Console(no_color=True)

        with pytest.raises(SystemExit) as exc_info:
            exit_with_error("boom", console=console)

        assert exc_info.value.code == ExitCode.ERROR
        assert "Error: boom" in capsys.readouterr().out
