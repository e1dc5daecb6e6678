"""
Maven test runner.

Runs ``mvn test`` as an asyncio subprocess in the project root so a long run
does not block other tool executions in the same batch.
"""

import asyncio
import logging
import shlex
from pathlib import Path
from typing import List, Optional

from selenium_mcp.config import MavenConfig
from selenium_mcp.models import TestRunResult

logger = logging.getLogger(__name__)


def tail(text: str, limit: int) -> str:
    """Keep the last ``limit`` characters of ``text``."""
    if limit <= 0:
        return ""
    return text[-limit:]


class MavenRunner:
    """Invokes the Maven build to run tests."""

    def __init__(self, project_root: Path, config: MavenConfig):
        self.project_root = Path(project_root)
        self.config = config

    def build_command(self, test_name: Optional[str] = None, verbose: bool = False) -> List[str]:
        """Build the Maven argv for a test run."""
        command = [self.config.executable, "test"]
        if test_name:
            command.append(f"-Dtest={test_name}")
        if not verbose:
            command.append("-q")
        return command

    async def run_tests(self, test_name: Optional[str] = None, verbose: bool = False) -> TestRunResult:
        """
        Run tests and wait for Maven to exit.

        Args:
            test_name: Optional selector passed as -Dtest
            verbose: Keep Maven's normal output instead of -q

        Returns:
            TestRunResult; a failing build is reported with success=False

        Raises:
            OSError: If the Maven process cannot be started
        """
        command = self.build_command(test_name, verbose)
        command_line = " ".join(shlex.quote(part) for part in command)
        logger.info(f"Executing: {command_line} (cwd={self.project_root})")

        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(self.project_root),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.config.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"Maven run exceeded {self.config.timeout}s, killing process {process.pid}")
            process.kill()
            stdout, stderr = await process.communicate()
            return TestRunResult(
                success=False,
                exit_code=process.returncode,
                output=tail(stdout.decode(errors="replace"), self.config.output_tail_chars),
                error=tail(
                    stderr.decode(errors="replace") + f"\nTimed out after {self.config.timeout}s",
                    self.config.error_tail_chars,
                ),
                command=command_line,
                timed_out=True,
            )
        except asyncio.CancelledError:
            if process.returncode is None:
                logger.warning(f"Maven run cancelled, killing process {process.pid}")
                process.kill()
                await process.wait()
            raise

        exit_code = process.returncode
        logger.info(f"Maven exited with code {exit_code}")
        return TestRunResult(
            success=exit_code == 0,
            exit_code=exit_code,
            output=tail(stdout.decode(errors="replace"), self.config.output_tail_chars),
            error=tail(stderr.decode(errors="replace"), self.config.error_tail_chars),
            command=command_line,
        )
