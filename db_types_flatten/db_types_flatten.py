import json
import logging
from pathlib import Path

import click

from . import __version__
from .cli_utils import generation_comment, reconstruct_command_line
from .pipeline import AtomicWriter, FlattenConfig, OutputMode, TransformError, TypesFlattener
from .pipeline.schema_ast import SchemaParser
from .utils import NAMING_STYLES

STYLE_CHOICE = click.Choice(list(NAMING_STYLES))

logger = logging.getLogger(__name__)


def load_config(config_path: str | None) -> FlattenConfig:
    """Load a JSON config file, reporting malformed files as click errors."""
    if config_path is None:
        return FlattenConfig()
    try:
        with open(config_path, encoding="utf-8") as f:
            return FlattenConfig.from_dict(json.load(f))
    except ValueError as e:
        # JSONDecodeError included
        raise click.ClickException(f"Invalid config file {config_path}: {e}") from e


@click.command()
@click.option("--schema", "-s", default=None, type=str, help="Schema to extract (default: public)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--relationships", is_flag=True, default=False, help="Emit Relationships declarations")
@click.option("--inserts", is_flag=True, default=False, help="Emit Insert declarations")
@click.option("--updates", is_flag=True, default=False, help="Emit Update declarations")
@click.option("--deletes", is_flag=True, default=False, help="Emit Delete declarations")
@click.option("--enum-style", default=None, type=STYLE_CHOICE)
@click.option("--composite-style", default=None, type=STYLE_CHOICE)
@click.option("--table-style", default=None, type=STYLE_CHOICE)
@click.option("--function-style", default=None, type=STYLE_CHOICE)
@click.option("--force", is_flag=True, default=False, help="Overwrite OUTPUT if it exists")
@click.option("--no-generation-comment", is_flag=True, default=False, help="Omit the generated-by header")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(dir_okay=False, resolve_path=True))
def db_types_flatten(
    schema,
    config,
    relationships,
    inserts,
    updates,
    deletes,
    enum_style,
    composite_style,
    table_style,
    function_style,
    force,
    no_generation_comment,
    verbose,
    path,
    output,
):
    """Flatten the Database type in PATH into standalone type declarations."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = load_config(config)

    # CLI values override the config file when set
    if schema is not None:
        config.schema = schema
    config.relationships = config.relationships or relationships
    config.inserts = config.inserts or inserts
    config.updates = config.updates or updates
    config.deletes = config.deletes or deletes
    if enum_style is not None:
        config.naming.enum = enum_style
    if composite_style is not None:
        config.naming.composite_type = composite_style
    if table_style is not None:
        config.naming.table_or_view = table_style
    if function_style is not None:
        config.naming.function = function_style
    if force:
        config.output.mode = OutputMode.FORCE
    if no_generation_comment:
        config.add_generation_comment = False

    logger.debug("Effective config: %s", config.to_dict())

    with open(path, encoding="utf-8") as f:
        source_text = f.read()

    try:
        options = config.to_options(source_text)
        out = TypesFlattener(options).generate()
    except (TransformError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if config.add_generation_comment:
        out = generation_comment(__version__, reconstruct_command_line(db_types_flatten)) + out

    if output is None:
        click.echo(out)
        return

    output_path = Path(output)
    validate = config.output.validate_before_write
    try:
        if config.output.atomic_write:
            writer = AtomicWriter()
            if config.output.mode == OutputMode.ERROR_IF_EXISTS:
                writer.write_if_not_exists(output_path, out, validate)
            else:
                writer.write(output_path, out, validate)
        else:
            if config.output.mode == OutputMode.ERROR_IF_EXISTS and output_path.exists():
                raise FileExistsError(f"Output file already exists: {output_path}. Use force mode to overwrite.")
            if validate:
                SchemaParser().parse(out)
            with open(output_path, "w", encoding="utf-8") as f:
                f.write(out)
    except (TransformError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
