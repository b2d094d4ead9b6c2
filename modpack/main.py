import logging

import click
from click.core import ParameterSource

from modpack.archive import packed_message, write_archive
from modpack.build import run_build
from modpack.catalog import Catalog
from modpack.collect import collect_assets_and_include, collect_sources
from modpack.common import (
    DEFAULT_ASSETS,
    DEFAULT_BUILD,
    DEFAULT_CONFIG_FILE,
    DEFAULT_INCLUDE,
    DEFAULT_SOURCE_EXTENSIONS,
    DEFAULT_SOURCES,
    trim_indent,
)
from modpack.config import load_config
from modpack.output import resolve_output_path

logger = logging.getLogger(__name__)


def load_defaults(ctx: click.Context, param: click.Parameter, value: str):
    if ctx.get_parameter_source(param.name) != ParameterSource.DEFAULT:
        # An explicitly named file has to exist.
        click.Path(exists=True, dir_okay=False).convert(value, param, ctx)
    defaults = load_config(value)
    if defaults:
        ctx.default_map = {**(ctx.default_map or {}), **defaults}
    return value


@click.command(name="modpack", help=trim_indent("""
               |Pack a mod's assets and build outputs (or its sources) into a zip archive.
               |Project defaults may be stored in the [modpack] table of modpack.toml."""),
               context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--config", type=click.Path(dir_okay=False), default=DEFAULT_CONFIG_FILE, show_default=True,
              is_eager=True, expose_value=False, callback=load_defaults,
              help="Project file supplying default values for the options below.")
@click.option("--assets", multiple=True, default=DEFAULT_ASSETS, show_default=True,
              help="Asset directories to be included in the package.")
@click.option("--build", type=str, default=DEFAULT_BUILD, show_default=True,
              help="The command used to build the project.")
@click.option("--compile", "-c", is_flag=True, default=False,
              help="Whether to build binary.")
@click.option("--include", multiple=True, default=DEFAULT_INCLUDE, show_default=True,
              help="Additional files or directories to include.")
@click.option("--output", "-o", type=str, default=None,
              help="The final output path of the packed zip file. Defaults to bin/Mod/<name>-<version>.zip.")
@click.option("--pdb/--no-pdb", default=True, show_default=True,
              help="Whether to include PDB files.")
@click.option("--sources", multiple=True, default=DEFAULT_SOURCES, show_default=True,
              help="Source code directories, packed when not compiling.")
@click.option("--source-extensions", multiple=True, default=DEFAULT_SOURCE_EXTENSIONS, show_default=True,
              help="File extensions treated as source code.")
@click.option("--log-level", "-l", type=click.Choice(["DEBUG", "INFO", "WARNING"]), default="WARNING",
              show_default=True)
@click.version_option(package_name="modpack")
def cli(assets, build, compile, include, output, pdb, sources, source_extensions, log_level):
    match log_level:
        case "DEBUG":
            logging.basicConfig(level=logging.DEBUG)
        case "INFO":
            logging.basicConfig(level=logging.INFO)
        case "WARNING":
            logging.basicConfig(level=logging.WARNING)
        case _:
            raise ValueError(f"Invalid log level: {log_level}")

    catalog: Catalog = []
    collect_assets_and_include(assets, include, catalog)
    logger.info(f"Collected {len(catalog)} asset and include entries")

    output_path = resolve_output_path(output, catalog)

    if compile:
        run_build(build, pdb, catalog)
    else:
        collect_sources(sources, catalog, source_extensions)

    write_archive(output_path, catalog)
    click.echo(packed_message(output_path))


if __name__ == "__main__":
    cli()
