"""Git Operations Package"""

from smartcommit.git.diff_parser import FileDelta, parse_diff
from smartcommit.git.log import LogEntry, LogQuery, parse_log
from smartcommit.git.runner import GitRunner, is_environment_error

__all__ = [
    "FileDelta",
    "parse_diff",
    "LogEntry",
    "LogQuery",
    "parse_log",
    "GitRunner",
    "is_environment_error",
]
