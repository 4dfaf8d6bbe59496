import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer
import yaml

from .aggregate import aggregate, print_folder_tree
from .config import CONFIG_FILENAME, AnalyzeConfig
from .models import DirectorySummary
from .report import export_to_yaml, load_report

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

logger: logging.Logger = logging.getLogger(__name__)


def installed_version() -> str:
    try:
        return version(distribution_name="dirsummary")
    except PackageNotFoundError:
        return "unknown (package not installed)"


app: typer.Typer = typer.Typer(
    help=f"dirsummary — summarize directory sizes into a YAML report\n\nVersion: {installed_version()}",
)


def print_version(is_version: bool) -> None:
    """
    Callback for the global --version / -V option.

    Returns immediately when the flag is absent so the subcommand runs.
    Otherwise prints the installed version and stops with `typer.Exit()`.
    """
    if not is_version:
        return

    typer.echo(installed_version())
    raise typer.Exit()


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )


def echo_summary_tree(summary: DirectorySummary, depth: int = 0) -> None:
    typer.echo(
        f"{'  ' * depth}{summary.directory} ({summary.file_count} files, {summary.total_size:,} bytes)"
    )
    for subdir in summary.subdirectories:
        echo_summary_tree(subdir, depth + 1)


def run_analysis(cfg: AnalyzeConfig) -> DirectorySummary:
    """Aggregate the configured directory and write the report."""
    summary: DirectorySummary = aggregate(
        cfg.directory,
        cfg.skip_folders,
        cfg.directory,
        on_enter=print_folder_tree if cfg.show_tree else None,
    )
    logger.debug("Found %s files, %s bytes in %s", summary.file_count, summary.total_size, cfg.directory)

    export_to_yaml([summary], cfg.output)

    return summary


@app.command()
def init(
    skip: Annotated[list[str] | None, typer.Option("--skip", help="Folder name to skip, repeatable.")] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Default report file.")] = None,
    force: Annotated[bool, typer.Option()] = False,
) -> None:
    """
    Write a defaults file to the current directory.

    The file is picked up by `analyze` unless another one is given with
    --config.
    """
    if CONFIG_FILENAME.exists() and not force:
        typer.echo("Config file already exists. Use --force to overwrite.")
        raise typer.Exit(code=1)

    cfg: AnalyzeConfig = AnalyzeConfig(
        directory=Path("."),
        output=output,
        skip_folders=skip or [],
    )

    cfg.save(CONFIG_FILENAME)
    typer.echo(f"Config written to {CONFIG_FILENAME}")


@app.command()
def analyze(
    directory: Annotated[
        Path,
        typer.Option(
            "--directory",
            "-d",
            help="The directory path to analyze.",
            exists=True,
            file_okay=False,
            dir_okay=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="The path of the YAML file to save the results."),
    ] = None,
    skip: Annotated[
        list[str] | None,
        typer.Option("--skip", help="Folder name to skip (e.g. target, .git), repeatable."),
    ] = None,
    config: Annotated[Path | None, typer.Option("--config", help="Defaults file to use.")] = None,
    quiet: Annotated[bool, typer.Option(help="Do not print the folder tree.")] = False,
    debug: Annotated[bool, typer.Option(help="Enable debug logging.")] = False,
) -> None:
    """Analyze a directory tree and write the results as YAML."""
    configure_logging(debug)

    try:
        cfg: AnalyzeConfig = AnalyzeConfig.build(
            directory=directory,
            output=output,
            skip_folders=skip or [],
            quiet=quiet,
            config_path=config if config is not None else CONFIG_FILENAME,
        )
    except OSError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: invalid config: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        run_analysis(cfg)
    except OSError as e:
        logger.debug("Analysis aborted", exc_info=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo("Analysis complete!")
    if cfg.output is not None:
        typer.echo(f"Data saved in file: {cfg.output}")
    else:
        typer.echo("Data displayed in the terminal.")


@app.command()
def show(report: Path) -> None:
    """Print the directory tree stored in a saved report."""
    try:
        summaries: list[DirectorySummary] = load_report(report)
    except (OSError, TypeError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"Error: cannot read report {report}: {e}", err=True)
        raise typer.Exit(code=1)

    for summary in summaries:
        echo_summary_tree(summary)


@app.command(name="version")
def version_cmd() -> None:
    """Print the installed version of dirsummary."""
    print_version(True)


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """
    Global options for dirsummary. All subcommands run after this callback
    unless --version is used.
    """
    return


if __name__ == "__main__":
    app()
