"""Classifier - Heuristics that turn file deltas into a commit type and text.

Everything here is a pure function over the parser's FileDelta records. The
order of the type rules matters: inputs that satisfy several rules take the
first one that fires.
"""

import re
from collections import Counter
from collections.abc import Sequence

from smartcommit.git.diff_parser import FileDelta

DOC_MARKERS = ('readme', 'changelog', 'docs/')
DOC_SUFFIXES = ('.md', '.adoc', '.rst')
BUILD_FILES = ('build.gradle', 'build.gradle.kts', 'pom.xml')
CONFIG_SUFFIXES = ('.yml', '.yaml', '.json', '.properties', '.toml')

CONFIG_SHARE = 0.6
REFACTOR_BALANCE = 0.2

MAX_EXTENSIONS_SHOWN = 6
MAX_FILES_SHOWN = 10

TICKET_RE = re.compile(r'([A-Z]{2,}-\d+)')


def is_doc_path(path: str) -> bool:
    lower = path.lower()
    return any(m in lower for m in DOC_MARKERS) or lower.endswith(DOC_SUFFIXES)


def is_test_path(path: str) -> bool:
    return '/test' in path.lower() or 'Test' in path


def is_build_path(path: str) -> bool:
    return path.endswith(BUILD_FILES) or '/gradle/' in path


def is_config_path(path: str) -> bool:
    return path.endswith(CONFIG_SUFFIXES)


def infer_type(files: Sequence[FileDelta], total_added: int, total_deleted: int) -> str:
    """Pick a Conventional Commit type. First matching rule wins."""
    paths = [f.path for f in files]

    if paths and all(is_doc_path(p) for p in paths):
        return 'docs'
    if paths and all(is_test_path(p) for p in paths):
        return 'test'
    if paths and all(is_build_path(p) for p in paths):
        return 'build'

    config_count = sum(1 for p in paths if is_config_path(p))
    if config_count >= max(1, len(paths)) * CONFIG_SHARE:
        return 'chore'

    churn = total_added + total_deleted
    if total_added > 0 and total_deleted > 0 and abs(total_added - total_deleted) < churn * REFACTOR_BALANCE:
        return 'refactor'

    if total_added >= total_deleted * 2:
        return 'feat'
    if total_deleted > total_added:
        return 'chore'
    # Anything left is a near-tie that missed the refactor band
    return 'feat'


def extract_ticket(branch: str | None) -> str | None:
    """Find an issue key like PROJ-123 anywhere in the branch name."""
    if not branch or not branch.strip():
        return None
    match = TICKET_RE.search(branch)
    return match.group(1) if match else None


def choose_verb(added: int, deleted: int) -> str:
    if added > 0 and deleted == 0:
        return 'Add'
    if added == 0 and deleted > 0:
        return 'Remove'
    if added > 0 and deleted > 0:
        return 'Update'
    return 'Change'


def extension_counts(files: Sequence[FileDelta]) -> list[tuple[str, int]]:
    """Extensions by descending count; ties keep first-seen order."""
    counts = Counter(f.extension for f in files)
    return sorted(counts.items(), key=lambda item: -item[1])


def dominant_extension(files: Sequence[FileDelta]) -> str | None:
    ranked = extension_counts(files)
    return ranked[0][0] if ranked else None


def build_subject(
    commit_type: str,
    verb: str,
    file_count: int,
    total_added: int,
    total_deleted: int,
    ticket: str | None = None,
    extension: str | None = None,
) -> str:
    parts = []
    if ticket:
        parts.append(f"[{ticket}] ")
    parts.append(f"{commit_type}: ")
    parts.append(f"{verb} ")
    if extension and extension.strip():
        parts.append(f"{extension} ")
    parts.append(f"files: {file_count}, +{total_added}/-{total_deleted}")
    return ''.join(parts)


def build_body(
    files: Sequence[FileDelta],
    total_added: int,
    total_deleted: int,
    ticket: str | None = None,
) -> str:
    lines = [
        "Summary:",
        f"- Files changed: {len(files)}",
        f"- Insertions: {total_added}",
        f"- Deletions: {total_deleted}",
    ]

    ranked_exts = extension_counts(files)
    if ranked_exts:
        lines.append("")
        lines.append("By file type:")
        for ext, count in ranked_exts[:MAX_EXTENSIONS_SHOWN]:
            lines.append(f"  - {ext or '(no ext)'}: {count}")

    # sorted() is stable, so equal churn keeps parse order
    top_files = sorted(files, key=lambda f: -f.total_changes)[:MAX_FILES_SHOWN]
    if top_files:
        lines.append("")
        lines.append("Top files:")
        for f in top_files:
            lines.append(f"  - {f.path}: +{f.added}/-{f.deleted}")

    if ticket:
        lines.append("")
        lines.append(f"Related: {ticket} (from branch)")

    return "\n".join(lines).rstrip()
