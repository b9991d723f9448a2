"""CLI Commands"""

import os
import sys

from forjex.config import Config, get_config_path
from forjex.output import bold, dim, info


def display_config(config: Config) -> int:
    """Display current configuration."""
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .forjexrc found)")

    env_branch = os.environ.get('FORJEX_BRANCH')
    env_timeout = os.environ.get('FORJEX_GIT_TIMEOUT')
    if env_branch or env_timeout:
        print(f"  {dim('Environment overrides:')}")
        if env_branch:
            print(f"    FORJEX_BRANCH={env_branch}")
        if env_timeout:
            print(f"    FORJEX_GIT_TIMEOUT={env_timeout}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    branch:             {info(config.branch)}")
    print(f"    remote:             {info(config.remote)}")
    print(f"    initial_message:    {info(config.initial_message)}")
    print(f"    fallback_message:   {info(config.fallback_message)}")
    print(f"    min_content_length: {info(str(config.min_content_length))}")
    print(f"    max_names:          {info(str(config.max_names))}")
    print(f"    git_timeout:        {info(str(config.git_timeout) if config.git_timeout else 'none')}")
    print(f"    github_api_url:     {info(config.github_api_url)}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .forjexrc (in current directory)")
    print(f"    Global: ~/.forjexrc\n")

    return 0


def run_install_completion() -> int:
    """Print shell tab completion setup."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete forjex)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell forjex | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish forjex | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
