import functools
import logging
import traceback

import click

from .builder import Builder, DockerBuilder
from .config import ToolConfig
from .io import DiskFileSystem
from .scaffold import create_manifest
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    PorterBuilderError,
    ConfigurationError,
    BuildError,
    PorterIOError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) if log_levels else None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def handle_errors(func):
    """Decorator to turn application errors into a logged message and an aborted command"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            _report("Manifest error", e)
        except BuildError as e:
            _report("Build error", e)
        except PorterIOError as e:
            _report("File error", e)
        except PorterBuilderError as e:
            _report("An unexpected application error occurred", e)
        except FileNotFoundError as e:
            _report("A required file was not found", e)
        except Exception as e:
            _report("An unexpected error occurred", e)
    return wrapper


def _report(kind: str, error: Exception):
    logging.error(f"{kind}: {error}")
    ctx = click.get_current_context()
    if ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


@handle_errors
def do_build(workdir: str, home: str):
    """Execute build command"""
    fs = DiskFileSystem(root=workdir)
    logging.info(f"Using working directory '{fs.root}'")
    builder = Builder(
        fs,
        image_builder=DockerBuilder(str(fs.root)),
        tool=ToolConfig.load(home),
    )
    builder.run()


@handle_errors
def do_create(workdir: str, force: bool):
    """Execute create command"""
    fs = DiskFileSystem(root=workdir)
    path = create_manifest(fs, force=force)
    click.echo(f"Created {path} in {fs.root}")


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'gen=DEBUG,conv=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='porterbuilder')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """Porter Builder - Package an application manifest into a bundle

    \b
    Examples:
      porterb create              Write a starter porter.yaml
      porterb build               Build the bundle in the current directory
      porterb build -w ./app      Build the bundle in ./app
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@click.option('-w', '--workdir', default='.', show_default=True, help='Working directory containing porter.yaml')
@click.option('--home', help='Home directory holding porter-runtime and mixins (default: ~/.porter)')
@click.option('--debug', is_flag=True, help='Enable debug logging for this command')
@click.pass_context
def build(ctx, workdir, home, debug):
    """Build the invocation image and write bundle.json

    \b
    This command will:
      1. Copy the runtime and mixins into cnab/
      2. Generate the Dockerfile
      3. Build the invocation image with Docker
      4. Write bundle.json
    """
    if debug and not ctx.obj.get('debug'):
        ctx.obj['debug'] = True
        setup_logging(debug=True)
    do_build(workdir, home)


@cli.command()
@click.option('-w', '--workdir', default='.', show_default=True, help='Directory to create porter.yaml in')
@click.option('--force', is_flag=True, help='Overwrite an existing porter.yaml')
@click.pass_context
def create(ctx, workdir, force):
    """Create a starter porter.yaml"""
    do_create(workdir, force)
