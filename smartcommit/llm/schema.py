"""Request/response models for the Gemini generateContent endpoint.

Decoding is lenient: unknown keys are dropped, missing or null fields fall
back to empty values, so newer API responses never break parsing.
"""

from dataclasses import dataclass, field


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


@dataclass
class Part:
    text: str | None = None

    def to_dict(self) -> dict:
        return {"text": self.text} if self.text is not None else {}

    @classmethod
    def from_dict(cls, data) -> 'Part':
        text = _as_dict(data).get("text")
        return cls(text=text if isinstance(text, str) else None)


@dataclass
class Content:
    role: str = "user"
    parts: list[Part] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}

    @classmethod
    def from_dict(cls, data) -> 'Content':
        data = _as_dict(data)
        role = data.get("role")
        return cls(
            role=role if isinstance(role, str) else "",
            parts=[Part.from_dict(p) for p in _as_list(data.get("parts"))],
        )


@dataclass
class GenerateRequest:
    contents: list[Content]

    @classmethod
    def from_prompt(cls, prompt: str) -> 'GenerateRequest':
        """Single user turn, no history."""
        return cls(contents=[Content(role="user", parts=[Part(text=prompt)])])

    def to_dict(self) -> dict:
        return {"contents": [c.to_dict() for c in self.contents]}


@dataclass
class Candidate:
    content: Content | None = None

    @classmethod
    def from_dict(cls, data) -> 'Candidate':
        content = _as_dict(data).get("content")
        return cls(content=Content.from_dict(content) if isinstance(content, dict) else None)


@dataclass
class GenerateResponse:
    candidates: list[Candidate] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> 'GenerateResponse':
        return cls(candidates=[Candidate.from_dict(c) for c in _as_list(_as_dict(data).get("candidates"))])

    def first_text(self) -> str:
        """First non-empty text part of the first candidate, or ''."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        for part in self.candidates[0].content.parts:
            if part.text:
                return part.text
        return ""
