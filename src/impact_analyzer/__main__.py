"""CLI entry point for the impact analyzer.

Provides commands for analyzing a change set across repositories,
validating configuration and creating a starter config.
"""

import asyncio
from pathlib import Path
from typing import Literal

import click

from impact_analyzer import __version__


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Cross-repository impact analyzer.

    Detects which components a change touches in each configured
    repository and which components in related repositories may be
    affected as a consequence.
    """
    pass


def _resolve_config(config: Path | None) -> Path:
    from impact_analyzer.config.loader import find_config

    if config is not None:
        return config

    found = find_config()
    if found is None:
        raise click.ClickException(
            "No config file found. Run 'impact init' to create one or pass --config."
        )
    return found


def _load_or_exit(config_path: Path):  # type: ignore[no-untyped-def]
    from impact_analyzer.config.loader import load_config
    from impact_analyzer.errors import ConfigurationError

    try:
        return load_config(config_path)
    except ConfigurationError as e:
        click.echo(f"Config validation failed: {e}", err=True)
        for error in e.errors:
            click.echo(f"  - {error}", err=True)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"Failed to load config: {e}", err=True)
    raise SystemExit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Path to configuration file",
)
@click.option("--base", "-b", default="origin/develop", show_default=True, help="Base git ref")
@click.option("--head", default="HEAD", show_default=True, help="Head git ref")
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (defaults to output.directory from config)",
)
@click.option(
    "--format",
    "-f",
    "formats",
    help="Comma separated output formats: json, markdown, github",
)
def analyze(
    config: Path | None,
    base: str,
    head: str,
    output: Path | None,
    formats: str | None,
) -> None:
    """Analyze the impact of changes between two git refs."""
    from impact_analyzer.reporting import write_reports
    from impact_analyzer.services.pipeline import AnalysisPipeline
    from impact_analyzer.utils.logging import configure_logging

    config_path = _resolve_config(config)
    cfg = _load_or_exit(config_path)
    configure_logging(cfg.logging)

    requested = (
        [f.strip() for f in formats.split(",") if f.strip()] if formats else cfg.output.formats
    )
    output_dir = output or cfg.output.directory

    click.echo(f"Loaded config from {config_path}")
    click.echo(f"Analyzing {len(cfg.repos)} repositories ({base}...{head})")

    result = asyncio.run(AnalysisPipeline(cfg).run(base, head))

    for repo in result.repos:
        status = "[WARN]" if repo.errors else "[OK]"
        click.echo(
            f"  {status} {repo.name}: {repo.changed_files} changed files, "
            f"{len(repo.impacts)} impacts"
        )
        for error in repo.errors:
            click.echo(f"         {error}")

    click.echo(f"Cross-repo impacts: {len(result.cross_repo_impacts)}")

    try:
        written = write_reports(result, output_dir, requested)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    for path in written:
        click.echo(f"Wrote {path}")

    summary = result.summary
    click.echo("")
    click.echo("Analysis complete")
    click.echo(f"  Total changed files: {summary.total_changed_files}")
    click.echo(f"  Total impacted components: {summary.total_impacted_components}")
    if summary.has_breaking_changes:
        click.echo("  Breaking changes detected")


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    help="Path to configuration file",
)
def validate(config: Path | None) -> None:
    """Validate a configuration file."""
    config_path = _resolve_config(config)
    cfg = _load_or_exit(config_path)

    click.echo(f"Config is valid: {config_path}")
    click.echo(f"  Repositories: {len(cfg.repos)}")
    click.echo(f"  Relations: {len(cfg.relations)}")

    for repo in cfg.repos:
        if repo.path.exists():
            click.echo(f"  [OK] Repository '{repo.name}' at {repo.path}")
        else:
            click.echo(f"  [WARN] Repository '{repo.name}' path not found: {repo.path}")


@cli.command()
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    show_default=True,
    help="Config file format",
)
def init(fmt: Literal["yaml", "json"]) -> None:
    """Create a starter configuration file in the current directory."""
    from impact_analyzer.config.template import render_template, template_filename

    path = Path(template_filename(fmt))
    if path.exists():
        click.echo(f"{path} already exists", err=True)
        raise SystemExit(1)

    path.write_text(render_template(fmt))
    click.echo(f"Created {path}")
    click.echo("Edit the config file to match your repository structure.")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
