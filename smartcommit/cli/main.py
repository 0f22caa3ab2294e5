"""CLI Main Entry Point"""

import sys

from smartcommit.config import Config, load_config
from smartcommit.git import GitRunner
from smartcommit.keystore import KeyStore, default_key_store
from smartcommit.llm import get_client
from smartcommit.logging_config import setup_logging
from smartcommit.orchestrator import Orchestrator, State, NoticeLevel
from smartcommit.output import bold, dim, print_success, render_copy_result, render_draft, render_notice, Spinner

from smartcommit.cli.args import parse_args
from smartcommit.cli.commands import display_config, run_set_key, run_clear_key, run_log, run_install_completion
from smartcommit.cli.utils import copy_to_clipboard


def _wait(task, label: str | None) -> None:
    """Block the CLI until a background task finishes; spin when labelled."""
    if task is None or not hasattr(task, 'join'):
        return
    if label is None:
        task.join()
        return
    with Spinner(label):
        task.join()


def _copy_and_report(message: str, no_copy: bool) -> None:
    if no_copy:
        return
    copied, reason = copy_to_clipboard(message)
    render_copy_result(copied, reason)


def _handle_subcommands(args, key_store: KeyStore):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(key_store), True
    if args.set_key:
        return run_set_key(key_store), True
    if args.clear_key:
        return run_clear_key(key_store), True
    if args.log:
        return run_log(GitRunner(), args.branch, args.author, args.since, args.until, args.path), True
    return 0, False


def _refine(orchestrator: Orchestrator, hint: str | None, is_pipe: bool) -> None:
    before = orchestrator.state.summary.subject
    model = orchestrator.state.model
    _wait(orchestrator.refine(hint), None if is_pipe else f"Refining subject with {model}...")

    state = orchestrator.state
    if state.state is not State.REFINED:
        render_notice(state.notice, pipe=is_pipe)
    elif not is_pipe:
        if state.summary.subject != before:
            print_success(f"Subject refined with {bold(model)}")
        else:
            print(dim("No suggestion, kept draft subject"))


def _handle_interactive_action(orchestrator: Orchestrator) -> str:
    """Ask what to do with the draft. Returns 'refine', 'edit' or 'done'."""
    try:
        action = input(f"\n{dim('(r)efine with AI, (e)dit subject, or Enter to accept: ')}").strip().lower()
    except (KeyboardInterrupt, EOFError):
        return 'done'

    if action == 'r':
        return 'refine'
    if action == 'e':
        try:
            subject = input(f"{dim('  New subject (Enter to keep): ')}").strip()
        except (KeyboardInterrupt, EOFError):
            return 'done'
        if subject:
            orchestrator.edit(subject=subject)
        return 'edit'
    return 'done'


def run_flow(args, config: Config, key_store: KeyStore, runner=None, client=None) -> int:
    """Collect changes, show the draft, optionally refine, then copy.

    Returns:
        int: Exit code
    """
    is_pipe = not sys.stdout.isatty()
    is_interactive = sys.stdin.isatty() and not is_pipe

    models = list(config.models)
    model = args.model or config.model
    if model not in models:
        models.insert(0, model)

    orchestrator = Orchestrator(
        runner=runner or GitRunner(),
        client=client or get_client(config),
        key_store=key_store,
        models=models,
        model=model,
        max_subject_length=config.max_subject_length,
        include_diff_in_body=args.include_diff or config.include_diff_in_body,
    )

    try:
        _wait(orchestrator.fetch(), None if is_pipe else "Reading local changes...")
        state = orchestrator.state
        if not state.has_draft:
            render_notice(state.notice, pipe=is_pipe)
            level = state.notice.level if state.notice else NoticeLevel.ERROR
            return 0 if level is NoticeLevel.INFO else 1

        if args.refine:
            _refine(orchestrator, args.hint, is_pipe)

        if is_pipe:
            print(orchestrator.compose())
            return 0

        while True:
            render_draft(orchestrator.compose())
            if not is_interactive:
                break
            action = _handle_interactive_action(orchestrator)
            if action == 'refine':
                _refine(orchestrator, args.hint, is_pipe)
                continue
            if action == 'edit':
                continue
            break

        _copy_and_report(orchestrator.compose(), args.no_copy)
        return 0
    finally:
        orchestrator.close()


def main() -> int:
    """Main entry point for the CLI."""
    args = parse_args()
    setup_logging('DEBUG' if args.verbose else None)

    key_store = default_key_store()
    exit_code, should_exit = _handle_subcommands(args, key_store)
    if should_exit:
        return exit_code

    config = load_config()
    for message in config.apply_env():
        print(f"Config warning: {message}", file=sys.stderr)

    return run_flow(args, config, key_store)
