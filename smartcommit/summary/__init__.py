"""Diff Summary Package"""

from smartcommit.summary.classifier import (
    infer_type,
    extract_ticket,
    choose_verb,
    dominant_extension,
    build_subject,
    build_body,
)
from smartcommit.summary.summarizer import DiffSummary, ClassificationInput, classify, summarize

__all__ = [
    "infer_type",
    "extract_ticket",
    "choose_verb",
    "dominant_extension",
    "build_subject",
    "build_body",
    "DiffSummary",
    "ClassificationInput",
    "classify",
    "summarize",
]
