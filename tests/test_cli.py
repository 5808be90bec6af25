"""Tests for the command line interface."""
import json

import pytest
from typer.testing import CliRunner

from herochat.cli import app as cli_app
from herochat.llm import HerokuProvider, Tool
from herochat.memory.json_file import encode_records

from helpers import sse_body

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every command from an empty directory with a known key."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("INFERENCE_KEY", "test-key")
    for name in ("INFERENCE_URL", "INFERENCE_MODEL", "INFERENCE_TIMEOUT", "HEROCHAT_STORE", "HEROCHAT_HISTORY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mock_llm(monkeypatch, streaming_transport):
    """Point the CLI at a mock endpoint answering with the given pieces."""

    def _install(*contents: str, status_code: int = 200):
        transport = streaming_transport(sse_body(*contents), status_code=status_code)

        def get_llm(settings, tools=None):
            return HerokuProvider(
                api_key=settings.api_key,
                base_url=settings.base_url,
                model=settings.model,
                tools=[Tool(name=name) for name in tools or []],
                transport=transport,
            )

        monkeypatch.setattr(cli_app, "get_llm", get_llm)

    return _install


@pytest.fixture
def saved_history(history_file, sample_records):
    history_file.write_text(encode_records(sample_records))
    return history_file


class TestChatCommand:
    """Tests for sending a prompt."""

    def test_tag_and_prompt_route_to_chat(self, mock_llm, history_file):
        mock_llm("Hi ", "there")

        result = runner.invoke(cli_app.app, ["greet", "hello", "world", "-p", str(history_file)])

        assert result.exit_code == 0, result.output
        assert "Response: Hi there" in result.output
        assert "Conversation 1 saved with tag 'greet'" in result.output

        document = json.loads(history_file.read_text())
        assert document[0]["prompt"] == "hello world"
        assert document[0]["response"] == "Hi there"
        assert document[0]["tag"] == "greet"

    def test_explicit_chat_command(self, mock_llm, history_file):
        mock_llm("ok")

        result = runner.invoke(cli_app.app, ["chat", "T", "hi", "-p", str(history_file)])

        assert result.exit_code == 0, result.output
        assert "Conversation 1 saved with tag 'T'" in result.output

    def test_second_turn_replays_first(self, mock_llm, history_file, recorded_requests):
        mock_llm("answer")

        runner.invoke(cli_app.app, ["T", "first", "-p", str(history_file)])
        result = runner.invoke(cli_app.app, ["T", "second", "-p", str(history_file)])

        assert result.exit_code == 0, result.output
        assert "Conversation 2 saved with tag 'T'" in result.output
        messages = json.loads(recorded_requests[1].content)["messages"]
        assert [m["content"] for m in messages] == ["first", "answer", "second"]

    def test_live_output(self, mock_llm, history_file):
        mock_llm("str", "eam")

        result = runner.invoke(cli_app.app, ["T", "hi", "--live", "-p", str(history_file)])

        assert result.exit_code == 0, result.output
        assert "stream" in result.output
        assert "Response:" not in result.output

    def test_tools_are_forwarded(self, mock_llm, history_file, recorded_requests):
        mock_llm("ok")

        runner.invoke(cli_app.app, ["T", "hi", "-t", "code_exec_python", "-p", str(history_file)])

        body = json.loads(recorded_requests[0].content)
        assert body["tools"] == [{"type": "mcp", "name": "code_exec_python"}]

    def test_missing_key_fails_without_request(self, monkeypatch, mock_llm, history_file, recorded_requests):
        monkeypatch.delenv("INFERENCE_KEY")
        mock_llm("unused")

        result = runner.invoke(cli_app.app, ["T", "hi", "-p", str(history_file)])

        assert result.exit_code == 1
        assert "INFERENCE_KEY not configured" in result.output
        assert recorded_requests == []
        assert not history_file.exists()

    def test_empty_response_is_not_saved(self, mock_llm, history_file):
        mock_llm()

        result = runner.invoke(cli_app.app, ["T", "hi", "-p", str(history_file)])

        assert result.exit_code == 1
        assert "Empty response from model" in result.output
        assert not history_file.exists()

    def test_upstream_error_is_reported(self, mock_llm, saved_history):
        before = saved_history.read_bytes()
        mock_llm(status_code=500)

        result = runner.invoke(cli_app.app, ["T", "hi", "-p", str(saved_history)])

        assert result.exit_code == 1
        assert "Response status 500" in result.output
        assert saved_history.read_bytes() == before

    def test_save_failure_is_reported_after_response(self, mock_llm, tmp_path):
        mock_llm("kept on screen")
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = runner.invoke(cli_app.app, ["T", "hi", "-p", str(blocker / "conversations.json")])

        assert result.exit_code == 1
        assert "Response: kept on screen" in result.output
        assert "Error saving conversation" in result.output
        assert result.output.index("Response:") < result.output.index("Error saving conversation")

    def test_leading_option_routes_to_chat(self, mock_llm, history_file):
        mock_llm("ok")

        result = runner.invoke(cli_app.app, ["-p", str(history_file), "T", "hi"])

        assert result.exit_code == 0, result.output
        assert "Conversation 1 saved with tag 'T'" in result.output

    def test_help_is_not_routed_to_chat(self):
        result = runner.invoke(cli_app.app, ["--help"])

        assert result.exit_code == 0
        assert "navigate" in result.output

    def test_unknown_context_strategy(self, mock_llm, history_file):
        mock_llm("ok")

        result = runner.invoke(cli_app.app, ["T", "hi", "-c", "summary", "-p", str(history_file)])

        assert result.exit_code == 1
        assert "Unsupported context strategy" in result.output

    def test_sqlite_backend(self, mock_llm, tmp_path):
        mock_llm("ok")
        db_path = tmp_path / "history.db"

        result = runner.invoke(cli_app.app, ["T", "hi", "-s", "sqlite", "-p", str(db_path)])

        assert result.exit_code == 0, result.output
        assert db_path.exists()


class TestHistoryCommand:
    """Tests for listing the history."""

    def test_lists_everything(self, saved_history):
        result = runner.invoke(cli_app.app, ["history", "-p", str(saved_history)])

        assert result.exit_code == 0, result.output
        for record_id in (1, 2, 3):
            assert f"Conversation {record_id} (" in result.output

    def test_filters_by_tag(self, saved_history):
        result = runner.invoke(cli_app.app, ["history", "T", "-p", str(saved_history)])

        assert "Conversation 1 (" in result.output
        assert "Conversation 3 (" in result.output
        assert "Conversation 2 (" not in result.output

    def test_unknown_tag(self, saved_history):
        result = runner.invoke(cli_app.app, ["history", "zzz", "-p", str(saved_history)])

        assert result.exit_code == 0
        assert "No conversations found with tag 'zzz'." in result.output

    def test_no_history(self, history_file):
        result = runner.invoke(cli_app.app, ["history", "T", "-p", str(history_file)])

        assert result.exit_code == 0
        assert "No history found." in result.output

    def test_history_path_from_environment(self, monkeypatch, saved_history):
        monkeypatch.setenv("HEROCHAT_HISTORY", str(saved_history))

        result = runner.invoke(cli_app.app, ["history"])

        assert "Conversation 3 (" in result.output

    def test_corrupt_history(self, history_file):
        history_file.write_text("not json")

        result = runner.invoke(cli_app.app, ["history", "-p", str(history_file)])

        assert result.exit_code == 1
        assert "Error displaying history" in result.output


class TestNavigateCommand:
    """Tests for interactive navigation."""

    def test_back_exits(self, saved_history):
        result = runner.invoke(cli_app.app, ["navigate", "T", "-p", str(saved_history)], input="back\n")

        assert result.exit_code == 0, result.output
        assert "Current Conversation 3 (" in result.output

    def test_previous_then_end_of_input(self, saved_history):
        result = runner.invoke(cli_app.app, ["navigate", "T", "-p", str(saved_history)], input="previous\n")

        assert result.exit_code == 0, result.output
        assert "Current Conversation 1 (" in result.output

    def test_nothing_to_navigate(self, history_file):
        result = runner.invoke(cli_app.app, ["navigate", "-p", str(history_file)])

        assert result.exit_code == 0
        assert "No history found." in result.output
