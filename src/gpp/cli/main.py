# topmark:header:start
#
#   project      : GPP
#   file         : main.py
#   file_relpath : src/gpp/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The ``gpp`` command.

Key ideas:
- Verbosity and color are resolved once and placed into ``ctx.obj`` together
  with the console, so errors raised later are shown consistently.
- Configuration is layered: defaults, then the config file, then CLI flags.
- All inputs share one `Context`; output is emitted only once every input has
  been preprocessed, so a failing run writes nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from gpp.cli.console import ClickConsole
from gpp.cli.errors import (
    GppConfigError,
    GppIOCliError,
    GppProcessingError,
    error_for_gpp_error,
)
from gpp.cli.io import InputSource, process_input, resolve_input
from gpp.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from gpp.config.io import ConfigLoadError
from gpp.config.keys import Toml
from gpp.config.logging import get_logger, resolve_env_log_level, setup_logging
from gpp.config.model import MutableConfig
from gpp.constants import GPP_VERSION, STDIN_FILENAME
from gpp.core.errors import GppError

if TYPE_CHECKING:
    from gpp.config.logging import GppLogger
    from gpp.config.model import Config

logger: GppLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> ClickConsole:
    """Initialize shared state (verbosity, logging, color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (str | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.

    Returns:
        ClickConsole: The console stored in ``ctx.obj["console"]``.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = level_cli

    # Internal logging is driven by the environment, not by -v/-q.
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_mode: ColorMode = (
        ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO.value)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    console = ClickConsole(enable_color=enable_color, verbosity_level=level_cli)
    ctx.obj["console"] = console
    return console


def build_config(
    *,
    allow_exec: bool,
    output: str | None,
    defines: tuple[str, ...],
    config_path: Path | None,
    no_config: bool,
) -> Config:
    """Merge defaults, the config file and CLI flags into a frozen `Config`.

    Raises:
        GppConfigError: If a config file cannot be loaded.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            config_path=config_path, no_config=no_config
        )
    except ConfigLoadError as exc:
        raise GppConfigError(str(exc)) from exc
    draft.apply_args(
        {
            Toml.KEY_ALLOW_EXEC: allow_exec,
            Toml.KEY_OUTPUT: output,
            Toml.SECTION_DEFINES: defines,
        }
    )
    return draft.freeze()


def write_result(text: str, config: Config, console: ClickConsole) -> None:
    """Write the preprocessed text to the configured output file or STDOUT.

    Raises:
        GppIOCliError: If the output file cannot be written.
    """
    if config.output is None:
        console.write_output(text)
        return
    try:
        config.output.write_text(text, encoding="utf-8", newline="")
    except OSError as exc:
        raise GppIOCliError(f"Cannot write {config.output}: {exc}") from exc
    console.info(f"Wrote {config.output}")


@click.command(
    name="gpp",
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Preprocess FILES and write the concatenated result to STDOUT. "
        "Use '-' for STDIN (the default) and ':TEXT' to preprocess TEXT itself."
    ),
)
@click.argument("files", nargs=-1, metavar="[FILES]...")
@click.option(
    "-e",
    "--allow-exec",
    "allow_exec",
    is_flag=True,
    help="Enable the #exec, #in and #endin directives (runs shell commands).",
)
@click.option(
    "-o",
    "--output",
    "output",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write output to this file instead of STDOUT.",
)
@click.option(
    "-D",
    "--define",
    "defines",
    multiple=True,
    metavar="NAME[=VALUE]",
    help="Define a macro before processing (repeatable).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use this config file instead of discovering gpp.toml/pyproject.toml.",
)
@click.option(
    "--no-config",
    "no_config",
    is_flag=True,
    help="Do not discover a config file in the working directory.",
)
@common_verbose_options
@common_color_options
@click.version_option(GPP_VERSION, "--version", prog_name="gpp")
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    allow_exec: bool,
    output: str | None,
    defines: tuple[str, ...],
    config_path: Path | None,
    no_config: bool,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the GPP CLI."""
    console: ClickConsole = init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )

    config: Config = build_config(
        allow_exec=allow_exec,
        output=output,
        defines=defines,
        config_path=config_path,
        no_config=no_config,
    )
    for config_file in config.config_files:
        console.info(f"Using config {config_file}")
    for diagnostic in config.diagnostics:
        console.warn(diagnostic.render())

    sources: list[InputSource] = [resolve_input(arg) for arg in files or (STDIN_FILENAME,)]
    chunks: list[str] = []
    try:
        with config.new_context() as context:
            for source in sources:
                console.info(f"Processing {source.label}")
                chunks.append(process_input(source, context))
    except GppError as exc:
        logger.debug("Preprocessing failed: %r", exc)
        raise error_for_gpp_error(exc) from exc
    except RecursionError as exc:
        # Self-including files, or #include chains deeper than the interpreter allows.
        raise GppProcessingError("Maximum #include nesting depth exceeded") from exc

    write_result("".join(chunks), config, console)


if __name__ == "__main__":
    cli()
