"""Command-line interface for the Cadence-JSON codec."""

import logging
import sys
from pathlib import Path
from typing import IO, Optional

import click

from . import __version__
from .cadence_json import CadenceJSON
from .types import CadenceError


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging on stderr')
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """Cadence-JSON codec - convert between plain JSON and Cadence-JSON."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CadenceJSON()


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.pass_obj
def decode(codec: CadenceJSON, input_file: IO, output: Optional[Path], pretty: bool):
    """Decode Cadence-JSON into plain JSON."""
    try:
        value = codec.loads(input_file.read())
        plain = codec.bridge.to_plain(value)
        text = codec.parser.serialize(plain, indent=codec.indent if pretty else None,
                                      ensure_ascii=codec.ensure_ascii)
    except CadenceError as e:
        _fail(codec, e)
    _emit(text, output)


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.option('--pretty', '-p', is_flag=True, help='Indent the output')
@click.pass_obj
def encode(codec: CadenceJSON, input_file: IO, output: Optional[Path], pretty: bool):
    """Encode plain JSON into Cadence-JSON, inferring kinds."""
    try:
        text = codec.dumps(codec.loads(input_file.read()), pretty=pretty)
    except CadenceError as e:
        _fail(codec, e)
    _emit(text, output)


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.pass_obj
def validate(codec: CadenceJSON, input_file: IO):
    """Check that a document is valid Cadence-JSON."""
    result = codec.error_handler.validate_input(input_file.read())

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}", err=True)

    if result.is_valid:
        click.echo("✅ Valid Cadence-JSON")
        return

    click.echo("❌ Invalid Cadence-JSON:")
    for error in result.errors:
        click.echo(f"   • [{error.type.value}] {error.message} ({error.location})")
        response = codec.error_handler.handle_cadence_error(CadenceError(error.message, error.type))
        click.echo(f"   💡 {response.suggested_action}")
    sys.exit(1)


@main.command(name='format')
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path), help='Output JSON file path')
@click.option('--pretty/--compact', default=True, help='Indented (default) or compact output')
@click.pass_obj
def format_command(codec: CadenceJSON, input_file: IO, output: Optional[Path], pretty: bool):
    """Re-emit a Cadence-JSON document in canonical form."""
    try:
        text = codec.dumps(codec.loads(input_file.read()), pretty=pretty)
    except CadenceError as e:
        _fail(codec, e)
    _emit(text, output)


def _emit(text: str, output: Optional[Path]):
    if output:
        output.write_text(text + "\n", encoding='utf-8')
        click.echo(f"✅ Wrote {output}")
    else:
        click.echo(text)


def _fail(codec: CadenceJSON, error: CadenceError):
    response = codec.error_handler.handle_cadence_error(error)
    click.echo(f"❌ Error: {error}", err=True)
    click.echo(f"💡 {response.suggested_action}", err=True)
    sys.exit(1)


if __name__ == '__main__':
    main()
