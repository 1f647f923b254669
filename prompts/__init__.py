"""Prompt templates and loaders for Dompet."""

from .base import PROMPT_NAMES, PromptTemplate, get_prompt_text, load_prompt

__all__ = ["PROMPT_NAMES", "PromptTemplate", "get_prompt_text", "load_prompt"]
