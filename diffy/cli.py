"""diffy CLI - Command-line interface for attribute-level diffs."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from diffy import __version__
from diffy.attributes.resolver import MappingAttributeResolver, ReflectionAttributeResolver
from diffy.config.loader import ProfileLoader, resolve_target
from diffy.config.models import DiffProfile
from diffy.diff.factory import DiffComparatorFactory
from diffy.exceptions import DiffyError, InvalidArgumentError
from diffy.reporters.diff import DiffReporter

console = Console()
error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__, prog_name="diffy")
def main() -> None:
    """diffy - attribute-level differences between two records.

    Compares a first and a last version of a record and lists the
    attributes whose values differ.
    """
    pass


@main.command()
@click.argument("first", type=click.Path(exists=True, dir_okay=False))
@click.argument("last", type=click.Path(exists=True, dir_okay=False))
@click.option("--profile", "-p", type=click.Path(), help="Comparison profile (YAML)")
@click.option("--target", "-t", help="Type to compare as, 'module:Class'")
@click.option(
    "--include", "-i", multiple=True, help="Only compare these attributes (comma-separated)"
)
@click.option(
    "--exclude", "-x", multiple=True, help="Never compare these attributes (comma-separated)"
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["console", "json", "markdown"]),
    default="console",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Write report to file")
@click.option("--fail-on-diff", is_flag=True, help="Exit 1 if any attribute differs")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def diff(
    first: str,
    last: str,
    profile: str | None,
    target: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    output_format: str,
    output: str | None,
    fail_on_diff: bool,
    verbose: bool,
) -> None:
    """Compare two JSON or YAML documents attribute by attribute.

    With a target type both documents are turned into instances of it;
    without one they are compared key by key.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        diff_profile = ProfileLoader(profile).profile if profile else DiffProfile()
        target_path = target or diff_profile.target

        first_data = _load_document(Path(first))
        last_data = _load_document(Path(last))

        if target_path:
            target_type = resolve_target(target_path)
            first_record = _build_instance(target_type, first_data, first)
            last_record = _build_instance(target_type, last_data, last)
            resolver = None
        else:
            target_type = dict
            first_record, last_record = first_data, last_data
            resolver = MappingAttributeResolver.from_documents(first_data, last_data)

        diff_comparator = DiffComparatorFactory.from_profile(
            diff_profile, target_type=target_type, resolver=resolver
        )
        if include:
            diff_comparator.include_properties(_split_names(include))
        if exclude:
            diff_comparator.exclude_properties(_split_names(exclude))

        diff_result = diff_comparator.diff_report(first_record, last_record)

        reporter = DiffReporter()
        if output_format == "json":
            report = reporter.generate_json_report(diff_result)
        elif output_format == "markdown":
            report = reporter.generate_markdown_report(diff_result)
        else:
            report = reporter.generate_console_report(diff_result)

        if output:
            Path(output).write_text(report, encoding="utf-8")
            console.print(f"[green]✓[/green] Report written to {output}")
        else:
            click.echo(report)

        if fail_on_diff and diff_result.has_differences():
            sys.exit(1)

    except DiffyError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)


@main.command()
@click.argument("target")
def properties(target: str) -> None:
    """List the attributes diffy compares for TARGET ('module:Class')."""
    try:
        target_type = resolve_target(target)
        descriptors = ReflectionAttributeResolver().resolve(target_type)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Property")
        table.add_column("Kind", style="cyan")
        table.add_column("Element")
        table.add_column("Declared In", style="dim")

        for d in descriptors:
            info = d.to_dict()
            table.add_row(
                info["name"],
                info["kind"],
                info["element_kind"] or "-",
                info["owner"] or "-",
            )

        console.print(f"[bold]{target_type.__qualname__}[/bold]: {len(descriptors)} properties")
        console.print(table)

    except DiffyError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)


@main.command()
@click.argument("profile_path", type=click.Path(exists=True, dir_okay=False))
def validate(profile_path: str) -> None:
    """Validate a comparison profile.

    Checks the YAML against the profile schema and, when the profile names
    a target type, that the type can be imported.
    """
    try:
        loader = ProfileLoader(profile_path)
        diff_profile = loader.profile
        target_type = loader.target_type

        console.print(f"[green]✓[/green] Profile is valid: [bold]{profile_path}[/bold]")
        console.print()

        table = Table(show_header=False, box=None)
        table.add_column("Key", style="dim")
        table.add_column("Value")

        table.add_row("Target", diff_profile.target or "(documents)")
        if target_type is not None:
            count = len(ReflectionAttributeResolver().resolve(target_type))
            table.add_row("Attributes", str(count))
        table.add_row("Nulls First", str(diff_profile.nulls_first))
        table.add_row("Include", ", ".join(diff_profile.include) or "(all)")
        table.add_row("Exclude", ", ".join(diff_profile.exclude) or "(none)")
        table.add_row("Overrides", ", ".join(diff_profile.properties) or "(none)")

        console.print(table)

    except DiffyError as e:
        error_console.print(f"[red]✗ Validation failed:[/red] {e}")
        sys.exit(1)


def _split_names(values: tuple[str, ...]) -> list[str]:
    """Split repeated, comma-separated option values into names."""
    return [name.strip() for value in values for name in value.split(",") if name.strip()]


def _load_document(path: Path) -> dict[str, Any]:
    """Load a JSON or YAML document as a mapping.

    Raises:
        InvalidArgumentError: If the document cannot be parsed or is not a mapping
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidArgumentError(f"Cannot parse {path}: {e}") from e
    except OSError as e:
        raise InvalidArgumentError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidArgumentError(f"{path} must contain a mapping")
    return data


def _build_instance(target_type: type, data: dict[str, Any], source: str) -> Any:
    """Turn a document into an instance of the target type.

    Raises:
        InvalidArgumentError: If the document does not fit the type
    """
    if hasattr(target_type, "model_validate"):
        try:
            return target_type.model_validate(data)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"{source} is not a valid {target_type.__name__}: {e}"
            ) from e

    try:
        return target_type(**data)
    except TypeError as e:
        raise InvalidArgumentError(
            f"Cannot build {target_type.__name__} from {source}: {e}"
        ) from e


if __name__ == "__main__":
    main()
