"""Prompt loading utilities for Dompet commentary panels."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

__all__ = ["PROMPT_NAMES", "PromptTemplate", "get_prompt_text", "load_prompt"]

PROMPTS_DIR = Path(__file__).resolve().parent
PROMPT_NAMES = ("trend", "budget", "category", "forecast")


@dataclass(frozen=True)
class PromptTemplate:
    """A system prompt for one dashboard panel."""

    name: str
    content: str


@lru_cache(maxsize=len(PROMPT_NAMES))
def load_prompt(name: str) -> PromptTemplate:
    """Load the ``<name>.txt`` template that ships next to this module."""

    if name not in PROMPT_NAMES:
        raise KeyError(f"Unknown prompt: {name}")

    path = PROMPTS_DIR / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt template not found: {path}")

    return PromptTemplate(name=name, content=path.read_text(encoding="utf-8").strip())


def get_prompt_text(name: str) -> str:
    return load_prompt(name).content
