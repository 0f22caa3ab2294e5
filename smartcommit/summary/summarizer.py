"""Summarizer - Diff text in, draft commit subject and body out."""

from dataclasses import dataclass

from smartcommit.git.diff_parser import FileDelta, parse_diff
from smartcommit.summary import classifier


@dataclass(frozen=True)
class DiffSummary:
    """Draft commit message produced from one diff."""
    subject: str
    body: str

    def compose(self) -> str:
        """Subject, blank line, body - ready to paste as a commit message."""
        subject = self.subject.strip()
        body = self.body.strip()
        return f"{subject}\n\n{body}" if body else subject

    def with_subject(self, subject: str) -> 'DiffSummary':
        return DiffSummary(subject=subject, body=self.body)


@dataclass(frozen=True)
class ClassificationInput:
    """Parsed files plus the totals derived from them."""
    files: tuple[FileDelta, ...]
    total_added: int
    total_deleted: int
    branch: str | None = None

    @classmethod
    def from_files(cls, files: list[FileDelta], branch: str | None = None) -> 'ClassificationInput':
        return cls(
            files=tuple(files),
            total_added=sum(f.added for f in files),
            total_deleted=sum(f.deleted for f in files),
            branch=branch,
        )

    @property
    def file_count(self) -> int:
        return len(self.files)


def classify(data: ClassificationInput) -> DiffSummary:
    commit_type = classifier.infer_type(data.files, data.total_added, data.total_deleted)
    ticket = classifier.extract_ticket(data.branch)

    subject = classifier.build_subject(
        commit_type,
        classifier.choose_verb(data.total_added, data.total_deleted),
        data.file_count,
        data.total_added,
        data.total_deleted,
        ticket=ticket,
        extension=classifier.dominant_extension(data.files),
    )
    body = classifier.build_body(data.files, data.total_added, data.total_deleted, ticket=ticket)
    return DiffSummary(subject=subject, body=body)


def summarize(diff_text: str, branch: str | None = None) -> DiffSummary:
    """Parse and classify a unified diff. Same input, same output."""
    branch = branch.strip() if branch else None
    return classify(ClassificationInput.from_files(parse_diff(diff_text), branch))
