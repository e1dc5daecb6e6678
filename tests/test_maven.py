"""Tests for the Maven runner, using a shell script in place of mvn."""

import asyncio

import pytest

from selenium_mcp.config import MavenConfig
from selenium_mcp.framework.maven import MavenRunner, tail


def test_tail_keeps_end():
    assert tail("abcdef", 3) == "def"
    assert tail("ab", 10) == "ab"
    assert tail("abc", 0) == ""


def test_build_command_quiet_by_default(project_root):
    runner = MavenRunner(project_root, MavenConfig(executable="mvn"))

    assert runner.build_command() == ["mvn", "test", "-q"]
    assert runner.build_command("HomePageTest#testTitle", verbose=True) == [
        "mvn", "test", "-Dtest=HomePageTest#testTitle",
    ]


@pytest.mark.asyncio
async def test_successful_run(config, monkeypatch):
    monkeypatch.setenv("FAKE_MVN_EXIT", "0")
    runner = MavenRunner(config.project.root, config.maven)

    result = await runner.run_tests()

    assert result.success is True
    assert result.exit_code == 0
    assert "mvn test -q" in result.output
    assert "stderr line" in result.error


@pytest.mark.asyncio
async def test_failing_run_is_data(config, monkeypatch):
    monkeypatch.setenv("FAKE_MVN_EXIT", "1")
    runner = MavenRunner(config.project.root, config.maven)

    result = await runner.run_tests("HomePageTest")

    assert result.success is False
    assert result.exit_code == 1
    assert "-Dtest=HomePageTest" in result.output


@pytest.mark.asyncio
async def test_repeated_runs_are_idempotent(config, monkeypatch):
    monkeypatch.setenv("FAKE_MVN_EXIT", "0")
    runner = MavenRunner(config.project.root, config.maven)

    first = await runner.run_tests()
    second = await runner.run_tests()

    assert first == second


@pytest.mark.asyncio
async def test_output_truncated_to_tail(config, monkeypatch):
    monkeypatch.setenv("FAKE_MVN_EXIT", "0")
    maven = config.maven.model_copy(update={"output_tail_chars": 5, "error_tail_chars": 4})
    runner = MavenRunner(config.project.root, maven)

    result = await runner.run_tests()

    assert result.output == "t -q\n"
    assert result.error == "ine\n"


@pytest.mark.asyncio
async def test_timeout_kills_process(tmp_path, project_root):
    script = tmp_path / "slow_mvn"
    script.write_text("#!/bin/sh\nexec sleep 5\n")
    script.chmod(0o755)
    runner = MavenRunner(project_root, MavenConfig(executable=str(script), timeout=0.2))

    result = await runner.run_tests()

    assert result.success is False
    assert result.timed_out is True
    assert "Timed out" in result.error


@pytest.mark.asyncio
async def test_missing_executable_raises(project_root):
    runner = MavenRunner(project_root, MavenConfig(executable=str(project_root / "no-such-mvn")))

    with pytest.raises(OSError):
        await runner.run_tests()


@pytest.mark.asyncio
async def test_cancelled_run_kills_process(tmp_path, project_root, monkeypatch):
    script = tmp_path / "slow_mvn"
    script.write_text("#!/bin/sh\nexec sleep 30\n")
    script.chmod(0o755)
    runner = MavenRunner(project_root, MavenConfig(executable=str(script), timeout=60))

    spawned = []
    create = asyncio.create_subprocess_exec

    async def spawn(*args, **kwargs):
        process = await create(*args, **kwargs)
        spawned.append(process)
        return process

    monkeypatch.setattr(asyncio, "create_subprocess_exec", spawn)

    task = asyncio.create_task(runner.run_tests())
    for _ in range(100):
        if spawned:
            break
        await asyncio.sleep(0.05)
    assert spawned

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert spawned[0].returncode is not None
