"""Command-line interface for gitcredit."""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from gitcredit.extraction import FileInfoExtractor, GitChecker
from gitcredit.identity import AuthorRegistry
from gitcredit.log_config import configure_logging
from gitcredit.models import RepositoryConfig, Settings, StandaloneAuthor

app = typer.Typer(
    name="gitcredit",
    help="Attribute surviving repository content to canonical authors",
    add_completion=False,
)
console = Console()


def load_authors(path: Path) -> AuthorRegistry:
    """Load a JSON list of author descriptions into a registry.

    Args:
        path: JSON file holding a list of author objects

    Returns:
        AuthorRegistry with every author validated and merged

    Raises:
        ValueError: If the file is malformed or an author is invalid
    """
    with open(path, "r") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of authors in {path}")

    return AuthorRegistry.from_standalone_authors(StandaloneAuthor(**item) for item in data)


@app.command()
def extract(
    repo_path: Path = typer.Argument(..., help="Path to Git repository"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to analyze"),
    since: Optional[datetime] = typer.Option(None, "--since", help="Start of the analysis window"),
    until: Optional[datetime] = typer.Option(None, "--until", help="End of the analysis window (inclusive)"),
    authors_file: Optional[Path] = typer.Option(None, "--authors", "-a", help="JSON file with author definitions"),
    ignore_glob: Optional[List[str]] = typer.Option(None, "--ignore-glob", "-i", help="Glob of files to skip"),
    file_format: Optional[List[str]] = typer.Option(None, "--format", "-f", help="File extension to analyze"),
    contents: bool = typer.Option(False, "--contents", "-c", help="Read surviving file contents"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """List the files that changed up to the until-date and still exist."""
    settings = Settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    try:
        config = RepositoryConfig(
            repo_root=repo_path,
            branch=branch or settings.default_branch,
            since_date=since,
            until_date=until,
            ignore_glob_list=ignore_glob or [],
            file_formats=file_format or [],
        )
        registry = load_authors(authors_file) if authors_file else AuthorRegistry()
        extractor = FileInfoExtractor(GitChecker(timeout=settings.git_timeout), read_contents=contents)

        console.print(f"[bold green]Extracting files from:[/bold green] {repo_path}")
        console.print(f"[bold blue]Branch:[/bold blue] {config.branch}")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Checking out and diffing...", total=None)
            records = extractor.extract_file_infos(config)
            progress.update(task, completed=True)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("File", style="cyan")
    table.add_column("Changed Lines", justify="right", style="yellow")
    table.add_column("Ignored By", style="green")

    results = []
    for record in records:
        ignored_by = [
            author.git_id for author in registry.authors if author.is_ignoring_file(record.file_path)
        ]
        table.add_row(record.file_path, str(len(record.changed_lines)), ", ".join(ignored_by))
        results.append({**record.model_dump(mode="json"), "ignored_by": ignored_by})

    console.print(table)
    console.print(f"\n[bold green]✓[/bold green] Found {len(records)} surviving files")

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            json.dump(results, f, indent=2, default=str)
        console.print(f"[bold green]✓[/bold green] Saved to {output}")


@app.command()
def authors(
    authors_file: Path = typer.Argument(..., help="JSON file with author definitions"),
) -> None:
    """Validate author definitions and show the merged identities."""
    try:
        registry = load_authors(authors_file)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Git ID", style="cyan")
    table.add_column("Display Name", style="green")
    table.add_column("Emails", style="white")
    table.add_column("Aliases", style="blue")
    table.add_column("Ignore Globs", style="yellow")

    for author in registry.authors:
        table.add_row(
            author.git_id,
            author.display_name,
            "\n".join(author.emails),
            ", ".join(author.author_aliases),
            ", ".join(author.ignore_glob_list),
        )

    console.print(table)
    console.print(f"\n[bold green]✓[/bold green] {len(registry)} authors")


@app.command()
def version() -> None:
    """Show version information."""
    from gitcredit import __version__

    console.print(f"[bold]gitcredit[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
