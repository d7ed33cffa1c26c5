"""Command-line interface for manipgraph."""

import logging
import sys
from typing import NoReturn

import click

from .graph.builder import build_graph, build_obstacles, build_path
from .graph.errors import ClassificationFailure, ConstraintGraphError
from .output.formatter import format_path_validation, format_validation_result
from .path_validation.discretized import DiscretizedCollisionValidation
from .path_validation.graph_path_validation import CrossingPolicy, GraphPathValidation
from .schema.errors import SchemaLoadError, SchemaValidationError
from .schema.loader import parse_graph_model, parse_path_model
from .validators.runner import validate_graph_file


def _schema_error(e: Exception) -> NoReturn:
    """Report a file or schema error and exit with code 2."""
    if isinstance(e, SchemaValidationError):
        click.echo(f"Schema validation error: {e}", err=True)
        for line in e.lines():
            click.echo(f"  - {line}", err=True)
    else:
        click.echo(f"Error loading file: {e}", err=True)
    sys.exit(2)


def _load_graph(graph_file: str, max_iterations: int | None, error_threshold: float | None):
    try:
        model = parse_graph_model(graph_file)
        graph = build_graph(model)
    except (SchemaLoadError, SchemaValidationError, ConstraintGraphError) as e:
        _schema_error(e)

    if max_iterations is not None:
        graph.max_iterations = max_iterations
    if error_threshold is not None:
        graph.error_threshold = error_threshold
    return model, graph


_max_iterations_option = click.option(
    "--max-iterations",
    type=click.IntRange(min=1),
    envvar="MANIPGRAPH_MAX_ITERATIONS",
    default=None,
    help="Override the projector iteration bound of the graph file",
)
_error_threshold_option = click.option(
    "--error-threshold",
    type=click.FloatRange(min=0, min_open=True),
    envvar="MANIPGRAPH_ERROR_THRESHOLD",
    default=None,
    help="Override the projector error threshold of the graph file",
)


@click.group()
@click.version_option(package_name="manipgraph")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug messages")
def main(verbose: bool):
    """manipgraph: constraint graphs for manipulation path validation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def check(graph_file: str, output_format: str, strict: bool):
    """Check the structure of a constraint graph file.

    GRAPH_FILE is the path to a YAML graph file.

    Exit codes:
      0 - Check passed
      1 - Check failed (errors found)
      2 - File or schema error
    """
    try:
        result = validate_graph_file(graph_file)
    except (SchemaLoadError, SchemaValidationError) as e:
        _schema_error(e)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors:
        sys.exit(1)
    elif strict and result.has_warnings:
        sys.exit(1)
    else:
        sys.exit(0)


@main.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.argument("configuration", nargs=-1, type=float, required=True)
@_max_iterations_option
@_error_threshold_option
def classify(
    graph_file: str,
    configuration: tuple[float, ...],
    max_iterations: int | None,
    error_threshold: float | None,
):
    """Print the state of a configuration.

    GRAPH_FILE is the path to a YAML graph file; CONFIGURATION is the list
    of configuration values.

    Exit codes:
      0 - A state contains the configuration
      1 - No state contains the configuration
      2 - File, schema or configuration size error
    """
    _, graph = _load_graph(graph_file, max_iterations, error_threshold)

    try:
        state = graph.get_state(configuration)
    except ValueError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(2)
    except ClassificationFailure as e:
        click.echo(f"Classification failed: {e}", err=True)
        sys.exit(1)

    click.echo(state.name)


@main.command("validate-path")
@click.argument("graph_file", type=click.Path(exists=True))
@click.argument("path_file", type=click.Path(exists=True))
@click.option("--reverse", is_flag=True, default=False, help="Validate from the end")
@click.option(
    "--keep-valid-part",
    is_flag=True,
    default=False,
    help="Keep the collision-free part of segments that end in another state",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@_max_iterations_option
@_error_threshold_option
def validate_path(
    graph_file: str,
    path_file: str,
    reverse: bool,
    keep_valid_part: bool,
    output_format: str,
    max_iterations: int | None,
    error_threshold: float | None,
):
    """Validate a path against a constraint graph.

    GRAPH_FILE is the path to a YAML graph file and PATH_FILE the path to a
    YAML path file.

    Exit codes:
      0 - The whole path is valid
      1 - Only part of the path is valid
      2 - File or schema error
    """
    model, graph = _load_graph(graph_file, max_iterations, error_threshold)

    try:
        path = build_path(parse_path_model(path_file), graph)
        obstacles = build_obstacles(model, graph.robot)
    except (SchemaLoadError, SchemaValidationError, ConstraintGraphError) as e:
        _schema_error(e)

    validation = GraphPathValidation(
        DiscretizedCollisionValidation(model.parameters.validation_step),
        graph,
        CrossingPolicy.KEEP_VALID_PART if keep_valid_part else CrossingPolicy.ZERO_LENGTH,
    )
    for obstacle in obstacles:
        validation.add_obstacle(obstacle)

    success, valid_part, report = validation.validate_with_report(path, reverse)
    click.echo(
        format_path_validation(path, success, valid_part, report, output_format)  # type: ignore
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
