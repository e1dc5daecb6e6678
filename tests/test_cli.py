"""Tests for the command-line entry point."""

from click.testing import CliRunner

from conftest import ScriptedModelClient
from selenium_mcp import cli
from selenium_mcp.config import DEFAULT_PROMPT
from selenium_mcp.errors import ModelClientError
from selenium_mcp.executor import ToolExecutor
from selenium_mcp.model_client import ModelResponse
from selenium_mcp.orchestrator import ToolLoop
from selenium_mcp.registry import ToolRegistry
from selenium_mcp.transcript import TextBlock, ToolCallRequest


def _patch(monkeypatch, config, client):
    monkeypatch.setattr(cli, "get_config", lambda: config)
    monkeypatch.setattr(
        cli,
        "build_loop",
        lambda cfg: ToolLoop(client, ToolRegistry(), ToolExecutor(cfg)),
    )


def test_prints_final_answer(monkeypatch, config):
    client = ScriptedModelClient([ModelResponse(blocks=(TextBlock("Three tests found."),), stop_reason="end_turn")])
    _patch(monkeypatch, config, client)

    result = CliRunner().invoke(cli.main, ["How many tests?"])

    assert result.exit_code == 0, result.output
    assert "Three tests found." in result.output
    assert client.requests[0]["messages"][0]["content"] == "How many tests?"


def test_default_prompt(monkeypatch, config):
    client = ScriptedModelClient([ModelResponse(blocks=(TextBlock("ok"),), stop_reason="end_turn")])
    _patch(monkeypatch, config, client)

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    assert client.requests[0]["messages"][0]["content"] == DEFAULT_PROMPT


def test_model_failure_surfaces_to_operator(monkeypatch, config):
    class BrokenClient:
        async def create(self, messages, tools, max_tokens):
            raise ModelClientError("Model request failed: connection refused")

    _patch(monkeypatch, config, BrokenClient())

    result = CliRunner().invoke(cli.main, ["hi"])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_spawn_failure_surfaces_to_operator(monkeypatch, config):
    broken = config.model_copy(update={
        "maven": config.maven.model_copy(update={"executable": str(config.project.root / "no-such-mvn")}),
    })
    client = ScriptedModelClient([
        ModelResponse(
            blocks=(ToolCallRequest(id="call-1", name="run_tests", arguments={}),),
            stop_reason="tool_use",
        ),
    ])
    _patch(monkeypatch, broken, client)

    result = CliRunner().invoke(cli.main, ["run everything"])

    assert result.exit_code == 1
    assert "Tool execution failed" in result.output
    assert not isinstance(result.exception, OSError)
