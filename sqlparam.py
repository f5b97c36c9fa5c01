#!/usr/bin/env python3
"""
sqlparam - edit the filter literals of a stored SQL snippet
"""
import json
import sys
import os
import shutil
import click
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.traceback import install

from config import Config
from logger import setup_logger, get_logger
from exceptions import ConfigurationError, ValidationError, SnippetFileError
from constants import APP_NAME, APP_VERSION, APP_DESCRIPTION, BACKUP_SUFFIX
from snippet import SnippetEditor
from interactive import ParameterEditor

# Install rich traceback handler
install(show_locals=False)

console = Console()
logger = get_logger('cli')


def read_snippet(path: str) -> str:
    """Read a snippet from a file, or from stdin when path is '-'"""
    if path == '-':
        return sys.stdin.read()
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except OSError as e:
        raise SnippetFileError(f"Could not read snippet {path}: {e}")


def write_snippet(path: str, text: str, backup: bool = False):
    """Write a snippet back to its file, optionally keeping a .bak copy"""
    if path == '-':
        raise SnippetFileError("Cannot write in place to stdin")
    try:
        if backup and os.path.exists(path):
            shutil.copyfile(path, path + BACKUP_SUFFIX)
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
        logger.info(f"Wrote snippet to {path}")
    except OSError as e:
        raise SnippetFileError(f"Could not write snippet {path}: {e}")


def emit_result(ctx, path: str, text: str, in_place: bool):
    """Send the rewritten buffer to its file or to stdout"""
    if in_place:
        write_snippet(path, text, backup=ctx.obj['config'].get('editor.backup_on_save', True))
        console.print(f"[green]✓ Updated {path}[/green]")
    else:
        click.echo(text, nl=False)


@click.group()
@click.option('--config', '-c', help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config, verbose, debug):
    """sqlparam - re-parameterize SQL snippets without hand-editing them"""

    # Ensure that ctx.obj exists and is a dict
    ctx.ensure_object(dict)

    try:
        cfg = Config(config)
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(1)

    cfg.update_from_cli(**{'output.verbose': verbose or None})

    # Setup logging level based on options
    log_level = 'DEBUG' if debug else ('INFO' if verbose else cfg.get('logging.level', 'WARNING'))
    setup_logger('sqlparam', level=log_level)

    ctx.obj['config'] = cfg
    ctx.obj['debug'] = debug
    ctx.obj['editor'] = SnippetEditor()


@cli.command()
@click.argument('path')
@click.option('--json', 'as_json', is_flag=True, help='Print controls as JSON instead of a table')
@click.pass_context
def params(ctx, path, as_json):
    """List the editable parameters of a snippet"""
    editor = ctx.obj['editor']

    try:
        text = read_snippet(path)
    except SnippetFileError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    controls = editor.controls(text)
    if as_json:
        click.echo(json.dumps([c.to_dict() for c in controls], indent=2))
        return

    editor.renderer.print_controls(console, controls)


@cli.command(name='set')
@click.argument('path')
@click.argument('index', type=int)
@click.argument('value')
@click.option('--in-place', '-i', is_flag=True, help='Write the result back to the snippet file')
@click.pass_context
def set_value(ctx, path, index, value, in_place):
    """Set the value of parameter INDEX"""
    editor = ctx.obj['editor']

    try:
        text = read_snippet(path)
        updated = editor.set_value(text, index, value)
        emit_result(ctx, path, updated, in_place)
    except (ValidationError, SnippetFileError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument('path')
@click.argument('index', type=int)
@click.option('--in-place', '-i', is_flag=True, help='Write the result back to the snippet file')
@click.pass_context
def toggle(ctx, path, index, in_place):
    """Comment or uncomment the line holding parameter INDEX"""
    editor = ctx.obj['editor']

    try:
        text = read_snippet(path)
        updated = editor.toggle(text, index)
        emit_result(ctx, path, updated, in_place)
    except (ValidationError, SnippetFileError) as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


@cli.command()
@click.argument('path')
@click.pass_context
def edit(ctx, path):
    """Interactively edit a snippet's parameters"""
    config = ctx.obj['config']

    try:
        text = read_snippet(path)
    except SnippetFileError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    session = ParameterEditor(console, ctx.obj['editor'],
                              show_preview=config.get('output.show_preview', True))
    result = session.run(text)

    if result is None:
        console.print("[yellow]Edit cancelled[/yellow]")
        return
    if result == text:
        console.print("[dim]No changes[/dim]")
        return

    if path == '-':
        click.echo(result, nl=False)
        return

    if config.get('editor.confirm_save', True) and not click.confirm(f"Save changes to {path}?", default=True):
        console.print("[yellow]Changes discarded[/yellow]")
        return

    try:
        write_snippet(path, result, backup=config.get('editor.backup_on_save', True))
        console.print(f"[green]✓ Saved {path}[/green]")
    except SnippetFileError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


@cli.command()
@click.pass_context
def config_show(ctx):
    """Show current configuration"""
    config = ctx.obj['config']

    config_text = yaml.dump(config.config, default_flow_style=False, indent=2)

    console.print(Panel(
        config_text,
        title=f"Configuration ({config.config_file})",
        expand=False
    ))


@cli.command()
@click.pass_context
def config_init(ctx):
    """Initialize default configuration file"""
    config = ctx.obj['config']
    try:
        config_path = config.create_default_config()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    console.print(f"[green]Created default configuration at: {config_path}[/green]")
    console.print("Edit this file to customize your settings.")


@cli.command()
@click.option('--key', required=True, help='Configuration key (use dot notation, e.g., editor.backup_on_save)')
@click.option('--value', required=True, help='Configuration value')
@click.pass_context
def config_set(ctx, key, value):
    """Set a configuration value"""
    config = ctx.obj['config']

    # Try to convert value to appropriate type
    if value.lower() in ('true', 'false'):
        value = value.lower() == 'true'
    elif value.isdigit():
        value = int(value)

    config.update_from_cli(**{key: value})
    try:
        config.save()
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)
    console.print(f"[green]Set {key} = {value}[/green]")


@cli.command()
def version():
    """Show version information"""
    console.print(f"[bold blue]{APP_NAME}[/bold blue]")
    console.print(f"Version: {APP_VERSION}")
    console.print(f"Description: {APP_DESCRIPTION}")


if __name__ == '__main__':
    cli()
