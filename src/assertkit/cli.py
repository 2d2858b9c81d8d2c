from __future__ import annotations

import json
from pathlib import Path

import typer

app = typer.Typer(name="assertkit", help="Validate and run declarative assertion trees")


def _load(config: str, allow_unknown_keys: bool, expand_env: bool):
    from assertkit.config import ValidatorSettings, load_tree

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    settings = ValidatorSettings(reject_unknown_keys=not allow_unknown_keys)
    return load_tree(config_path, settings=settings, expand_env=expand_env)


def _parse_value(raw: str):
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        # bare words are taken as plain strings
        return raw


@app.command()
def validate(
    config: str = typer.Argument(help="Path to an assertion tree YAML/JSON file"),
    allow_unknown_keys: bool = typer.Option(
        False, "--allow-unknown-keys", help="Accept keys outside the node key set"
    ),
    expand_env: bool = typer.Option(
        False, "--expand-env", help="Expand ${VAR} references in string values"
    ),
):
    """Check that an assertion tree document is valid."""
    import yaml

    from assertkit.errors import ConfigurationError

    try:
        _load(config, allow_unknown_keys, expand_env)
    except (ConfigurationError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo("OK")


@app.command()
def run(
    config: str = typer.Argument(help="Path to an assertion tree YAML/JSON file"),
    value: str | None = typer.Option(
        None, "--value", help="Right-hand value as JSON (bare words are strings)"
    ),
    allow_unknown_keys: bool = typer.Option(
        False, "--allow-unknown-keys", help="Accept keys outside the node key set"
    ),
    expand_env: bool = typer.Option(
        False, "--expand-env", help="Expand ${VAR} references in string values"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    log_file: str | None = typer.Option(None, help="Write debug log to this file"),
):
    """Run an assertion tree and print the result as JSON."""
    import yaml

    from assertkit.errors import AssertkitError
    from assertkit.predicates import UNSET
    from assertkit.tree import TreeExecutor
    from assertkit.verbose import setup_logger

    logger = setup_logger(
        Path(log_file) if log_file else None, verbose=verbose, logger_name="assertkit"
    )

    try:
        node = _load(config, allow_unknown_keys, expand_env)
        executor = TreeExecutor(logger=logger.getChild("tree"))
        result = executor.run(node, _parse_value(value) if value is not None else UNSET)
    except (AssertkitError, yaml.YAMLError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(json.dumps(result.model_dump(), indent=2, default=str))
    if not result.succeeded:
        raise typer.Exit(1)


@app.command()
def types():
    """List registered assertion types and the properties they accept."""
    from assertkit.registry import default_registry

    for descriptor in default_registry:
        names = ", ".join(sorted(descriptor.property_names))
        typer.echo(f"{descriptor.name}: {names}")


@app.command()
def schema(
    out: str = typer.Option(
        "assertkit.schema.json", "--out", help="Output path for the JSON Schema"
    ),
):
    """Write the JSON Schema of assertion tree documents."""
    from assertkit.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")


if __name__ == "__main__":
    app()
