"""Diff Parser - Turn unified diff text into per-file change counts."""

from dataclasses import dataclass

FILE_HEADER = 'diff --git '
METADATA_PREFIXES = ('+++', '---', 'index ', '@@')


@dataclass
class FileDelta:
    """Line counts for a single file in a diff."""
    path: str
    added: int = 0
    deleted: int = 0

    @property
    def total_changes(self) -> int:
        return self.added + self.deleted

    @property
    def extension(self) -> str:
        """Lower-cased suffix after the last '.', empty if the path has none."""
        _, dot, suffix = self.path.rpartition('.')
        return suffix.lower() if dot else ''


def _path_from_header(line: str) -> str:
    """Take the b-side path from a 'diff --git a/x b/x' header."""
    rest = line[len(FILE_HEADER):]
    parts = rest.split(' ')
    if len(parts) > 1 and parts[1]:
        return parts[1].removeprefix('b/')
    tokens = rest.split()
    if tokens:
        return tokens[-1].removeprefix('b/')
    return 'unknown'


def parse_diff(diff_text: str) -> list[FileDelta]:
    """Scan diff lines and count additions/deletions per file.

    Files come back in the order their headers appear. Content lines seen
    before the first header have no file to count against and are dropped.
    """
    files: list[FileDelta] = []
    current: FileDelta | None = None

    for line in diff_text.splitlines():
        if line.startswith(FILE_HEADER):
            current = FileDelta(path=_path_from_header(line))
            files.append(current)
        elif line.startswith(METADATA_PREFIXES):
            continue
        elif line.startswith('+'):
            if current is not None:
                current.added += 1
        elif line.startswith('-'):
            if current is not None:
                current.deleted += 1

    return files
