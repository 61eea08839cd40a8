from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = ""
    model: str = "llama-3.3-70b-versatile"
    base_url: str | None = None
    timeout: float = 30.0
    max_tokens: int = 512
    temperature: float = 0.3

    @classmethod
    def from_env(cls) -> LLMConfig:
        """Read the Groq settings from the environment at call time."""
        return cls(
            api_key=os.getenv("GROQ_API_KEY", ""),
            model=os.getenv("GROQ_MODEL", cls.model),
            base_url=os.getenv("GROQ_BASE_URL") or None,
            timeout=float(os.getenv("GROQ_TIMEOUT", str(cls.timeout))),
        )
