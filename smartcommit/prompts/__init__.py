"""Prompt Construction Package"""

from smartcommit.prompts.builder import PromptBuilder, PromptConfig, build_refine_prompt, first_line

__all__ = ["PromptBuilder", "PromptConfig", "build_refine_prompt", "first_line"]
