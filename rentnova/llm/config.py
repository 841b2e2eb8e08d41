from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("RENTNOVA_SUMMARY_MODEL", "llama-3.3-70b-versatile")
    timeout: float = 10.0
    max_tokens: int = 200
    temperature: float = 0.7
    enabled: bool = _env_flag("RENTNOVA_AI_SUMMARY", True)


DEFAULT_LLM_CONFIG = LLMConfig()
