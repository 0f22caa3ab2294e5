"""Prompt Builder - Ask the model for a single commit subject line."""

from dataclasses import dataclass

from smartcommit import COMMIT_TYPE_NAMES


@dataclass
class PromptConfig:
    """Caller-provided context that shapes the prompt."""
    details: str | None = None
    max_subject_length: int = 72


class PromptBuilder:
    """Builds the subject-refinement prompt around a verbatim diff."""

    def build(self, diff_text: str, config: PromptConfig | None = None) -> str:
        config = config or PromptConfig()
        sections = [
            self._build_instructions(config),
            self._build_ticket_section(),
            self._build_diff_section(diff_text),
            self._build_details_section(config),
        ]
        return "\n\n".join(filter(None, sections))

    def _build_instructions(self, config: PromptConfig) -> str:
        types = ", ".join(COMMIT_TYPE_NAMES)
        return (
            "You are a commit message assistant. Create a single concise commit subject line "
            f"(<= {config.max_subject_length} chars) using Conventional Commits style when appropriate ({types}).\n"
            "Return ONLY the subject line, no trailing punctuation."
        )

    def _build_ticket_section(self) -> str:
        return "If a ticket ID like ABC-123 is present in context, include it as [ABC-123] prefix when relevant."

    def _build_diff_section(self, diff_text: str) -> str:
        return f"Here is the unified git diff (staged + unstaged):\n{diff_text.strip()}"

    def _build_details_section(self, config: PromptConfig) -> str | None:
        if not config.details or not config.details.strip():
            return None
        return f"Human-readable summary:\n{config.details.strip()}"


def build_refine_prompt(diff_text: str, details: str | None = None, max_subject_length: int = 72) -> str:
    return PromptBuilder().build(diff_text, PromptConfig(details=details, max_subject_length=max_subject_length))


def first_line(text: str) -> str:
    """Keep only the first line of a model reply, trimmed.

    Anything after it is discarded rather than treated as body text.
    """
    stripped = text.strip()
    if not stripped:
        return ""
    return stripped.splitlines()[0].strip()
