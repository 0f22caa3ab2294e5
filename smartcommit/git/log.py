"""Branch-scoped git log: query building and output parsing."""

from dataclasses import dataclass

FIELD_SEPARATOR = '|'
LOG_FORMAT = FIELD_SEPARATOR.join(['%H', '%an', '%ad', '%s'])


@dataclass(frozen=True)
class LogEntry:
    hash: str
    author: str
    date: str
    subject: str


@dataclass
class LogQuery:
    """Filters for a first-parent, no-merges log of one branch."""
    branch: str
    author: str | None = None
    since: str | None = None
    until: str | None = None
    path: str | None = None

    def to_args(self) -> list[str]:
        args = [
            'log', '--first-parent', self.branch,
            f'--pretty=format:{LOG_FORMAT}', '--date=iso',
            '--no-merges',
        ]
        if self.author and self.author.strip():
            args.append(f'--author={self.author.strip()}')
        if self.since and self.since.strip():
            args.append(f'--since={self.since.strip()}')
        if self.until and self.until.strip():
            args.append(f'--until={self.until.strip()}')
        if self.path and self.path.strip():
            args.extend(['--', self.path.strip()])
        return args


def parse_log(text: str) -> list[LogEntry]:
    """Parse '%H|%an|%ad|%s' lines.

    Hash, author and date never contain the separator; the subject may, so
    everything after the third separator is the subject.
    """
    entries = []
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) < 4:
            continue
        entries.append(LogEntry(
            hash=parts[0],
            author=parts[1],
            date=parts[2],
            subject=FIELD_SEPARATOR.join(parts[3:]),
        ))
    return entries
