"""Configuration management for the completion provider."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    # LLM API
    llm_provider: str = "anthropic"  # "anthropic" or "openai"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    openai_base_url: str = ""  # empty uses the SDK default
    llm_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 50
    temperature: float = 0.2

    # Trigger behavior
    trigger_delay_ms: int = 1000

    # Context window
    context_lines: int = 3
    include_line_suffix: bool = False

    def __post_init__(self):
        if not self.anthropic_api_key:
            self.anthropic_api_key = os.environ.get("ANTHROPIC_API_KEY", "")
        if not self.openai_api_key:
            self.openai_api_key = os.environ.get("OPENAI_API_KEY", "")

    @property
    def trigger_delay(self) -> float:
        """Minimum seconds between completed round trips."""
        return self.trigger_delay_ms / 1000.0


def _load_dotenv() -> None:
    """Load .env file from the project root if it exists."""
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if not env_path.is_file():
        return
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            key = key.strip()
            value = value.strip().strip("\"'")
            if key and key not in os.environ:
                os.environ[key] = value


def load_config() -> Config:
    """Load configuration, using .env file, environment variables, and defaults."""
    _load_dotenv()
    config = Config(
        llm_provider=os.environ.get("HOLEFILLER_LLM_PROVIDER", "anthropic"),
        llm_model=os.environ.get(
            "HOLEFILLER_LLM_MODEL", "claude-sonnet-4-20250514"
        ),
        openai_base_url=os.environ.get("HOLEFILLER_OPENAI_BASE_URL", ""),
        trigger_delay_ms=int(
            os.environ.get("HOLEFILLER_TRIGGER_DELAY_MS", "1000")
        ),
    )
    return config
