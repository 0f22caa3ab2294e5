"""CLI Commands"""

import getpass
import os
import sys

from smartcommit.config import load_config, get_config_path
from smartcommit.git import GitRunner, LogQuery, parse_log, is_environment_error
from smartcommit.keystore import KeyStore, ENV_VAR
from smartcommit.output import accent, bold, dim, print_success, print_error, print_warning
from smartcommit.cli.utils import format_log_table


def display_config(key_store: KeyStore) -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .smartcommitrc found)")

    env_model = os.environ.get('SMART_COMMIT_MODEL')
    env_timeout = os.environ.get('SMART_COMMIT_TIMEOUT')
    if env_model or env_timeout:
        print(f"  {dim('Environment overrides:')}")
        if env_model:
            print(f"    SMART_COMMIT_MODEL={env_model}")
        if env_timeout:
            print(f"    SMART_COMMIT_TIMEOUT={env_timeout}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    model:               {accent(config.model)}")
    print(f"    models:              {accent(', '.join(config.models))}")
    print(f"    api_base_url:        {accent(config.api_base_url)}")
    print(f"    api_version:         {accent(config.api_version)}")
    print(f"    timeout:             {accent(str(config.timeout))}s")
    print(f"    max_subject_length:  {accent(str(config.max_subject_length))}")
    print(f"    include_diff_in_body: {accent(str(config.include_diff_in_body).lower())}")
    # Never print the key itself
    print(f"    api key:             {accent('configured' if key_store.get() else 'not set')}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .smartcommitrc (in current directory)")
    print(f"    Global: ~/.smartcommitrc")
    print(f"\n  {dim('Run')} smart-commit --set-key {dim('to store a Gemini API key')}\n")

    return 0


def run_set_key(key_store: KeyStore) -> int:
    """Prompt for the API key without echoing it and store it."""
    try:
        key = getpass.getpass("Gemini API key: ").strip()
    except (KeyboardInterrupt, EOFError):
        print()
        return 1
    if not key:
        print_error("No key entered")
        return 1
    try:
        key_store.save(key)
    except OSError as e:
        print_error(f"Could not save key: {e}")
        return 1
    print_success("API key saved")
    return 0


def run_clear_key(key_store: KeyStore) -> int:
    try:
        key_store.clear()
    except OSError as e:
        print_error(f"Could not clear key: {e}")
        return 1
    print_success("API key cleared")
    if os.environ.get(ENV_VAR):
        print_warning(f"{ENV_VAR} is still set in your shell environment")
    return 0


def run_log(runner: GitRunner, branch: str | None, author: str | None,
            since: str | None, until: str | None, path: str | None) -> int:
    """Print first-parent, no-merges history of one branch."""
    if not branch:
        out, err = runner.current_branch()
        if is_environment_error(err):
            print_warning("Git not available or project is not a repository.")
            return 1
        branch = out.strip()
    if not branch or branch == 'HEAD':
        print_warning("No checked-out branch detected.")
        return 1

    query = LogQuery(branch=branch, author=author, since=since, until=until, path=path)
    out, err = runner.log(query)
    if err.strip() and not out.strip():
        if is_environment_error(err):
            print_warning("Git not available or project is not a repository.")
        else:
            print_error(f"Git log failed:\n{err.strip()}")
        return 1

    entries = parse_log(out)
    print(f"{bold('Branch:')} {branch}")
    if not entries:
        print(dim("  No commits match these filters."))
        return 0
    print(format_log_table(entries))
    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete smart-commit)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell smart-commit | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish smart-commit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
