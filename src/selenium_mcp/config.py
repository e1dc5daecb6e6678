"""
Configuration management for the Selenium MCP bridge.

Uses pydantic-settings for environment variable loading, with an optional
.env file loaded through python-dotenv.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROMPT = "What tests are available in the framework and what was the last test run result?"


class ModelConfig(BaseSettings):
    """Language model connection settings."""

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    api_key: str = Field(default="", description="Anthropic API key")
    model: str = Field(default="claude-3-5-sonnet-latest", description="Model name")
    max_tokens: int = Field(default=4096, description="Token budget per model response")
    timeout: float = Field(default=120.0, description="Model request timeout in seconds")

    @property
    def is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.api_key)


class MavenConfig(BaseSettings):
    """Build tool invocation settings."""

    model_config = SettingsConfigDict(env_prefix="MAVEN_")

    executable: str = Field(default="mvn", description="Maven executable name or path")
    timeout: float = Field(default=1800.0, description="Test run timeout in seconds")
    output_tail_chars: int = Field(default=1000, ge=0, description="Characters of stdout kept (tail)")
    error_tail_chars: int = Field(default=500, ge=0, description="Characters of stderr kept (tail)")


class ProjectConfig(BaseSettings):
    """Layout of the Selenium test project."""

    model_config = SettingsConfigDict(env_prefix="SELENIUM_")

    project_root: Path = Field(default=Path("."), description="Maven project root")
    tests_dir: Path = Field(
        default=Path("src/test/java/com/selenium/tests/ui/prism"),
        description="Directory of test classes, relative to the project root",
    )
    reports_dir: Path = Field(default=Path("target/surefire-reports"), description="Surefire reports directory")
    results_file: str = Field(default="TEST-TestSuite.xml", description="Suite result file name")
    pom_file: str = Field(default="pom.xml", description="Project metadata file")
    readme_file: str = Field(default="README.md", description="Project readme file")

    def resolve(self, path: Path) -> Path:
        """Resolve a path against the project root."""
        if path.is_absolute():
            return path
        return (Path(self.project_root) / path).resolve()

    @property
    def root(self) -> Path:
        return Path(self.project_root).resolve()

    @property
    def tests_path(self) -> Path:
        return self.resolve(self.tests_dir)

    @property
    def reports_path(self) -> Path:
        return self.resolve(self.reports_dir)

    @property
    def pom_path(self) -> Path:
        return self.resolve(Path(self.pom_file))

    @property
    def readme_path(self) -> Path:
        return self.resolve(Path(self.readme_file))


class FrameworkConfig(BaseSettings):
    """Main configuration for the Selenium MCP bridge."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    model: ModelConfig = Field(default_factory=ModelConfig)
    maven: MavenConfig = Field(default_factory=MavenConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)

    max_iterations: int = Field(default=25, ge=1, description="Upper bound on model rounds per session")
    debug: bool = Field(default=False, description="Enable debug logging")
    default_prompt: str = Field(default=DEFAULT_PROMPT, description="Prompt used when none is given")

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "FrameworkConfig":
        """Load configuration from the environment.

        Args:
            env_file: Optional path to a .env file

        Returns:
            FrameworkConfig instance
        """
        if env_file and env_file.exists():
            load_dotenv(env_file, override=True)
        else:
            load_dotenv()
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (masking secrets)."""
        return {
            "model": {
                "model": self.model.model,
                "max_tokens": self.model.max_tokens,
                "timeout": self.model.timeout,
                "configured": self.model.is_configured,
            },
            "maven": self.maven.model_dump(),
            "project": {
                "project_root": str(self.project.root),
                "tests_dir": str(self.project.tests_path),
                "reports_dir": str(self.project.reports_path),
            },
            "max_iterations": self.max_iterations,
        }


# Global config instance (lazy loaded)
_config: Optional[FrameworkConfig] = None


def get_config() -> FrameworkConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = FrameworkConfig.from_env()
    return _config


def reload_config() -> FrameworkConfig:
    """Reload configuration from environment."""
    global _config
    _config = FrameworkConfig.from_env()
    return _config
