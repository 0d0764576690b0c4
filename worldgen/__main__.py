#!/usr/bin/env python3
"""
worldgen CLI
Generate worlds and attribute/skill suggestions from the terminal.
"""
import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

import click


def setup_logging(debug: bool = False, logs_dir: Path | None = None) -> Path:
    """Configure logging to both console and file.

    Returns:
        Path to the log file
    """
    if logs_dir is None:
        logs_dir = Path.cwd() / "logs" / "worldgen"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file = logs_dir / f"worldgen_{timestamp}.log"

    # File handler - always verbose
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    ))

    # Console handler - stderr, so stdout stays clean JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Keep third-party clients quiet
    logging.getLogger("litellm").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--logs-dir', type=click.Path(file_okay=False, path_type=Path),
              default=None, help='Directory for log files')
def main(debug: bool, logs_dir: Path | None):
    """Generate RPG worlds and attribute/skill suggestions."""
    log_file = setup_logging(debug=debug, logs_dir=logs_dir)
    logger = logging.getLogger(__name__)
    logger.info(f"worldgen starting (debug={debug}, log file={log_file})")


@main.command()
@click.argument('reference', required=False)
@click.option('--relationship', type=click.Choice(['set_in', 'based_on']),
              default='set_in', show_default=True,
              help='Whether the world lives inside the reference or is inspired by it')
@click.option('--existing', 'existing_names', multiple=True,
              help='Existing world name to avoid (repeatable)')
@click.option('--name', 'suggested_name', default=None, help='Name to give the world')
def world(reference: str | None, relationship: str, existing_names: tuple[str, ...],
          suggested_name: str | None):
    """Generate a world set in or based on REFERENCE (original if omitted)."""
    from worldgen.generation.pipeline import WorldGenerationPipeline

    pipeline = WorldGenerationPipeline()
    result = asyncio.run(pipeline.generate_world(
        reference,
        relationship if reference else None,
        list(existing_names),
        suggested_name,
    ))
    click.echo(result.model_dump_json(indent=2))


@main.command()
@click.argument('description')
def analyze(description: str):
    """Suggest attributes and skills for a world DESCRIPTION."""
    from worldgen.generation.pipeline import WorldGenerationPipeline

    result = asyncio.run(WorldGenerationPipeline().analyze_description(description))
    click.echo(result.model_dump_json(indent=2))


@main.command()
def universes():
    """List reference universes with known genres."""
    from worldgen.generation.universes import UNIVERSE_CONTEXTS

    for name, context in UNIVERSE_CONTEXTS.items():
        click.echo(f"{name}: {context.genre}")


if __name__ == "__main__":
    main()
