"""Git Runner - Raw git command execution for the commit pipeline."""

import logging
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

# stderr markers that mean "git can't help here", not "something crashed"
ENVIRONMENT_ERROR_MARKERS = (
    'not a git repository',
    'command not found',
    'is not recognized',
)


def is_environment_error(stderr: str) -> bool:
    """True when stderr says git is missing or the directory isn't a repo."""
    lowered = stderr.lower()
    return any(marker in lowered for marker in ENVIRONMENT_ERROR_MARKERS)


class GitRunner:
    """Runs git in a working directory and hands back (stdout, stderr).

    Never raises for git failures: callers inspect stderr instead.
    """

    def __init__(self, repo_path: str | Path | None = None):
        self.repo_path = Path(repo_path) if repo_path else Path.cwd()

    def run(self, *args: str) -> tuple[str, str]:
        """Run a git command and return its raw output streams."""
        logger.debug("git %s (cwd=%s)", ' '.join(args), self.repo_path)
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.repo_path,
            )
        except FileNotFoundError:
            return "", "git: command not found"
        except OSError as e:
            return "", f"git: {e}"
        return result.stdout or "", result.stderr or ""

    def current_branch(self) -> tuple[str, str]:
        return self.run('rev-parse', '--abbrev-ref', 'HEAD')

    def unstaged_diff(self) -> tuple[str, str]:
        return self.run('diff')

    def staged_diff(self) -> tuple[str, str]:
        return self.run('diff', '--staged')

    def log(self, query) -> tuple[str, str]:
        """Run a branch-scoped log query (see smartcommit.git.log.LogQuery)."""
        return self.run(*query.to_args())
