"""Terminal rendering for drafts, notices and progress.

Color is decided per stream: a redirected stdout stays plain even when
stderr is still a terminal.
"""

import os
import re
import sys
import threading

from smartcommit.orchestrator import Notice, NoticeLevel

STYLES = {
    'reset': '\033[0m',
    'bold': '\033[1m',
    'dim': '\033[2m',
    'red': '\033[31m',
    'green': '\033[32m',
    'yellow': '\033[33m',
    'magenta': '\033[35m',
    'cyan': '\033[36m',
}

COMMIT_TYPE_COLORS = {
    'feat': 'green',
    'fix': 'red',
    'refactor': 'yellow',
    'docs': 'cyan',
    'test': 'magenta',
    'chore': 'dim',
    'build': 'cyan',
}

# level -> (symbol, ascii fallback, color)
NOTICE_MARKERS = {
    NoticeLevel.INFO: ('i', 'i', 'cyan'),
    NoticeLevel.WARNING: ('⚠', '!', 'yellow'),
    NoticeLevel.ERROR: ('✗', 'x', 'red'),
}

RULE_MAX_WIDTH = 100

# Optional "[PROJ-1] " ticket, then type, optional scope, optional "!", ":"
_TYPE_PREFIX_RE = re.compile(r'^(\[[^\]]+\]\s+)?(\w+)(\([^)]*\))?(!?:)')


def color_enabled(stream=None) -> bool:
    """NO_COLOR wins over FORCE_COLOR; otherwise only terminals get color."""
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    return hasattr(stream, 'isatty') and stream.isatty()


def paint(text: str, *styles: str, stream=None) -> str:
    if not styles or not color_enabled(stream):
        return text
    codes = ''.join(STYLES[s] for s in styles)
    return f"{codes}{text}{STYLES['reset']}"


def bold(text: str) -> str:
    return paint(text, 'bold')


def dim(text: str) -> str:
    return paint(text, 'dim')


def accent(text: str) -> str:
    return paint(text, 'cyan')


def _symbol(fancy: str, plain: str, stream) -> str:
    encoding = getattr(stream, 'encoding', None) or 'utf-8'
    try:
        fancy.encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return plain
    return fancy


def notice_stream(level: NoticeLevel, pipe: bool = False):
    """INFO goes to stdout unless stdout carries the message itself."""
    if level is NoticeLevel.INFO and not pipe:
        return sys.stdout
    return sys.stderr


def render_notice(notice: Notice | None, pipe: bool = False) -> None:
    if notice is None:
        return
    stream = notice_stream(notice.level, pipe)
    fancy, plain, color = NOTICE_MARKERS[notice.level]
    marker = paint(_symbol(fancy, plain, stream), color, stream=stream)
    text = notice.text if notice.level is NoticeLevel.INFO else paint(notice.text, color, stream=stream)
    print(f"{marker} {text}", file=stream)


def print_error(message: str) -> None:
    render_notice(Notice(NoticeLevel.ERROR, message))


def print_warning(message: str) -> None:
    render_notice(Notice(NoticeLevel.WARNING, message))


def print_success(message: str) -> None:
    print(f"{paint(_symbol('✓', '+', sys.stdout), 'green')} {message}")


def colorize_commit_type(message: str, stream=None) -> str:
    """Color the type prefix of the subject; a ticket prefix stays plain."""
    lines = message.split('\n')
    match = _TYPE_PREFIX_RE.match(lines[0])
    if not match or match.group(2) not in COMMIT_TYPE_COLORS:
        return message
    ticket = match.group(1) or ''
    prefix = match.group(0)[len(ticket):]
    color = COMMIT_TYPE_COLORS[match.group(2)]
    lines[0] = ticket + paint(prefix, 'bold', color, stream=stream) + lines[0][len(match.group(0)):]
    return '\n'.join(lines)


def render_draft(message: str) -> None:
    """Print a composed draft between two rules, subject in bold."""
    width = min(max((len(line) for line in message.split('\n')), default=40), RULE_MAX_WIDTH)
    rule = dim(_symbol('─', '-', sys.stdout) * width)
    subject, *body = colorize_commit_type(message).split('\n')
    print(f"\n{rule}")
    print(bold(subject))
    for line in body:
        print(line)
    print(rule)


def render_copy_result(copied: bool, reason: str = "") -> None:
    if copied:
        print_success("Copied to clipboard!")
        return
    print_warning(f"Could not copy to clipboard{': ' + reason if reason else ''}")
    print(dim("  Select the message above to copy manually."))


class Spinner:
    """Labelled spinner on stdout while a background task runs.

    Draws nothing unless stdout is a terminal.
    """
    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏'
    ASCII_FRAMES = '-\\|/'

    def __init__(self, label: str = ""):
        self.label = label
        self._stop = threading.Event()
        self._thread = None

    def _spin(self, frames: str) -> None:
        idx = 0
        while not self._stop.is_set():
            print(f"\r\033[K{paint(frames[idx % len(frames)], 'cyan')} {self.label}", end='', flush=True)
            idx += 1
            self._stop.wait(0.08)

    def __enter__(self):
        if sys.stdout.isatty():
            frames = self.FRAMES if _symbol(self.FRAMES, '', sys.stdout) else self.ASCII_FRAMES
            self._stop.clear()
            self._thread = threading.Thread(target=self._spin, args=(frames,), daemon=True)
            self._thread.start()
        return self

    def __exit__(self, *args):
        self._stop.set()
        if self._thread:
            self._thread.join()
            self._thread = None
            print('\r\033[K', end='', flush=True)


__all__ = [
    "STYLES", "COMMIT_TYPE_COLORS", "NOTICE_MARKERS",
    "color_enabled", "paint", "bold", "dim", "accent",
    "notice_stream", "render_notice", "print_error", "print_warning", "print_success",
    "colorize_commit_type", "render_draft", "render_copy_result", "Spinner",
]
