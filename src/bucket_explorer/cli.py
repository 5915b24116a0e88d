"""Command-line interface for bucket-explorer.

Commands:
    - list: List folders and objects at a prefix of the configured bucket

Bucket, region, credentials and link base are read from the environment
(BUCKET_NAME, AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, BASE_URL,
and optionally EXCLUDE_PATTERN).
"""

import json
from typing import Annotated, Optional

import typer

from . import __version__
from .explorer import get_listing
from .navigation import breadcrumbs, heading, sanitize_prefix
from .objectstorage import QueryResult
from .schemas import load_explorer_config

app = typer.Typer(
    name="bucket-explorer",
    help="Browse an S3 bucket as a folder hierarchy.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-explorer {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Bucket Explorer: browse folders and objects of an S3 bucket.
    """
    pass


def format_size(size: Optional[int]) -> str:
    """Human readable size, '-' when unknown."""
    if size is None:
        return "-"
    if size >= 1024**3:
        return f"{size / (1024**3):.2f} GB"
    elif size >= 1024**2:
        return f"{size / (1024**2):.2f} MB"
    elif size >= 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size} bytes"


def _render_table(result: QueryResult) -> list[str]:
    rows = [(folder.name, "-", "-") for folder in result.folders]
    for obj in result.objects:
        modified = (
            obj.last_modified.isoformat(sep=" ", timespec="seconds")
            if obj.last_modified is not None
            else "-"
        )
        rows.append((obj.name, modified, format_size(obj.size)))

    header = ("Name", "Last modified", "Size")
    name_width = max(len(row[0]) for row in [header, *rows])
    date_width = max(len(row[1]) for row in [header, *rows])
    return [
        f"{name:<{name_width}}  {modified:<{date_width}}  {size:>12}"
        for name, modified, size in [header, *rows]
    ]


@app.command("list")
def list_cmd(
    prefix: Annotated[
        Optional[str],
        typer.Argument(help="Prefix to list; the bucket root when omitted"),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the listing as JSON")
    ] = False,
) -> None:
    """
    List folders and objects at a prefix.

    Examples:
        bucket-explorer list
        bucket-explorer list data/2024
        bucket-explorer list data/2024/ --json
    """
    try:
        config = load_explorer_config()
        current = sanitize_prefix(prefix)
        result = get_listing(current, config)

        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2))
            return

        trail = [config.bucket_name] + [crumb.name for crumb in breadcrumbs(current)]
        typer.echo(" > ".join(trail))
        typer.echo(heading(current, config.bucket_name))

        if result.folders or result.objects:
            for line in _render_table(result):
                typer.echo(f"  {line}")
        else:
            typer.echo("No folders or objects found.")

    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
