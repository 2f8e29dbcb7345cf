"""CLI commands for the decision registry.

The registry lives only for the duration of a command: each invocation
builds it from the configured seed tags, so these commands are for
inspecting configuration and checking questions against it.
"""

import json
import logging
import sys
from typing import Tuple

import click

from decision_registry.errors import UsesNonExistentTags
from decision_registry.registry import Registry
from models.config import Config, load_config
from models.schema import Question

logger = logging.getLogger(__name__)


def _setup_logging(config: Config) -> None:
    logging.basicConfig(
        level=config.logging.level,
        format=config.logging.format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@click.group()
def registry():
    """Decision registry commands."""
    pass


@registry.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    default="config.yaml",
    help="Path to registry configuration file",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def tags(config_path: str, format: str) -> None:
    """List the tags a freshly created registry starts with.

    Example:
        decision-registry tags --config config.yaml
    """
    try:
        config = load_config(config_path)
        _setup_logging(config)
        seeded = sorted(Registry.from_config(config.registry).get_tags())

        if format == "json":
            click.echo(json.dumps({"count": len(seeded), "tags": seeded}, indent=2))
        else:
            for tag in seeded:
                click.echo(tag)

    except Exception as e:
        logger.error(f"Error in tags: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@registry.command()
@click.option(
    "--tag",
    "-t",
    "question_tags",
    multiple=True,
    help="Tag the question would be filed under (repeatable)",
)
@click.option(
    "--content",
    default="Untitled question",
    help="Question text",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    default="config.yaml",
    help="Path to registry configuration file",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def check(
    question_tags: Tuple[str, ...], content: str, config_path: str, format: str
) -> None:
    """Check whether a question with these tags would be admitted.

    Exits with status 1 when any tag is unknown.

    Example:
        decision-registry check --tag ProjectA --tag ProjectB
    """
    try:
        config = load_config(config_path)
        _setup_logging(config)
        store = Registry.from_config(config.registry)
        question = Question.create(content, tags=question_tags)
    except Exception as e:
        logger.error(f"Error in check: {e}", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        store.add_question(question)
        missing = []
    except UsesNonExistentTags as e:
        missing = e.tags

    if format == "json":
        click.echo(json.dumps({"valid": not missing, "missing": missing}, indent=2))
    elif missing:
        click.echo(f"Unknown tags: {', '.join(missing)}")
    else:
        click.echo("All tags registered")

    if missing:
        sys.exit(1)


if __name__ == "__main__":
    registry()
