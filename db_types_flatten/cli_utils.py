"""
CLI utilities for command line reconstruction and the generation comment.
"""

import shlex
from pathlib import Path

import click

COMMAND_NAME = "db_types_flatten"


def _display_value(value) -> str:
    """Show existing paths by file name only."""
    text = str(value)
    path = Path(text)
    return path.name if path.exists() else text


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the invocation from the active click context.

    Positional arguments come first, then every option that differs from its
    default. Without an active context only the command name is returned.
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return COMMAND_NAME

    positional: list[str] = []
    options: list[str] = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value is False or value == param.default:
            continue
        if isinstance(param, click.Argument):
            positional.append(_display_value(value))
        elif param.is_flag:
            options.append(param.opts[0])
        else:
            options += [param.opts[0], _display_value(value)]

    return shlex.join([COMMAND_NAME, *positional, *options])


def generation_comment(version: str, command_line: str) -> str:
    """Header prepended to generated files."""
    return f"// Generated by {COMMAND_NAME} {version}\n// Command: {command_line}\n\n"
