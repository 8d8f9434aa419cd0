"""``dson`` command: convert JSON to DSON.

Also runnable as ``python -m dson_core``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, TextIO

import click

from .convert import dumps
from .errors import DsonCoreError
from .logging import TRACE_LEVEL, get_logger, resolve_env_log_level, setup_logging
from .settings import WriterSettings, load_settings
from .vocabulary import VOCABULARIES

logger = get_logger(__name__)


def _resolve_log_level(verbose: int) -> int | None:
    if verbose <= 0:
        return resolve_env_log_level()
    if verbose == 1:
        return logging.INFO
    if verbose == 2:
        return logging.DEBUG
    return TRACE_LEVEL


def _build_settings(config_path: Path | None, overrides: dict[str, Any]) -> WriterSettings:
    """Settings from the config file (if any) with command-line options on top."""
    settings = load_settings(config_path) if config_path else WriterSettings()
    return settings.merged(**{k: v for k, v in overrides.items() if v is not None})


@click.command(name="dson", context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--indent/--compact",
    "indented",
    default=None,
    help="Write one property or element per line (default: compact).",
)
@click.option("--indent-size", type=int, help="Indent characters per level (default: 2).")
@click.option("--indent-char", help="Character used for indenting (default: space).")
@click.option(
    "--vocabulary",
    type=click.Choice(sorted(VOCABULARIES), case_sensitive=False),
    help="Word set to write with.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file with a [dson] (or [tool.dson]) table.",
)
@click.option("-v", "--verbose", count=True, help="Increase log output (repeatable).")
def main(
    input_file: TextIO,
    indented: bool | None,
    indent_size: int | None,
    indent_char: str | None,
    vocabulary: str | None,
    config_path: Path | None,
    verbose: int,
) -> None:
    """Read JSON from INPUT_FILE (or stdin) and print it as DSON."""
    setup_logging(_resolve_log_level(verbose))

    try:
        data = json.load(input_file)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"Invalid JSON in {input_file.name}: {exc}") from exc

    overrides: dict[str, Any] = {
        "formatting": None if indented is None else ("indented" if indented else "compact"),
        "indent_size": indent_size,
        "indent_char": indent_char,
        "vocabulary": vocabulary,
    }
    try:
        settings = _build_settings(config_path, overrides)
        logger.info("Writing %s DSON", settings.formatting.value)
        click.echo(dumps(data, settings))
    except DsonCoreError as exc:
        raise click.ClickException(str(exc)) from exc


if __name__ == "__main__":
    main()
