"""Command-line interface for commitsync."""

from contextlib import ExitStack
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from commitsync import __version__
from commitsync.errors import CommitSyncError, ReplayFailed
from commitsync.extraction import GitClient
from commitsync.log import configure_logging
from commitsync.models import CommitRecord, ReconciliationReport, Settings, load_profile
from commitsync.pipeline import parse_patterns, reconcile_branches
from commitsync.tickets import TicketStatusEnricher, build_provider

app = typer.Typer(
    name="commitsync",
    help="Compare git branches by commit message and cherry-pick the difference",
    add_completion=False,
)
console = Console()


def _setup(verbose: bool) -> Settings:
    settings = Settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    return settings


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


def render_commits(branch: str, commits: List[CommitRecord], show_status: bool, show_replayed: bool) -> Table:
    """Build the table of commits unique to one branch."""
    table = Table(
        title=f"Commit messages unique on {escape(branch)}",
        title_justify="left",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Hash", style="cyan", width=10)
    if show_status:
        table.add_column("Status", style="yellow")
    table.add_column("Message", style="white")
    if show_replayed:
        table.add_column("Picked", justify="center", style="green")

    total = len(commits)
    for position, commit in enumerate(commits):
        row = [str(total - position), commit.hash]
        if show_status:
            row.append(Text(commit.ticket_status or ""))
        row.append(Text(commit.message))
        if show_replayed:
            row.append("✓" if commit.was_replayed else "")
        table.add_row(*row)

    return table


def print_report(report: ReconciliationReport) -> None:
    show_replayed = report.replay is not None
    for branch, commits in (
        (report.source_branch, report.unique_to_source),
        (report.target_branch, report.unique_to_target),
    ):
        console.print()
        console.print(
            render_commits(branch, commits, report.ticket_status_enabled, show_replayed)
        )


@app.command(name="diff-message")
def diff_message(
    source: str = typer.Argument(..., help="Source branch"),
    target: str = typer.Argument(..., help="Target branch (must be checked out to cherry-pick)"),
    cherry_picks: Optional[str] = typer.Option(
        None,
        "--cherry-picks",
        "-c",
        help="Cherry-pick source-only commits whose message contains any of these comma-separated strings",
    ),
    ticket_status: bool = typer.Option(False, "--ticket-status", "-t", help="Fetch ticket status from the project management tool"),
    repo_path: Path = typer.Option(Path("."), "--repo", "-r", help="Path to Git repository"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Compare two branches by commit messages."""
    settings = _setup(verbose)
    patterns = parse_patterns(cherry_picks)

    try:
        git_client = GitClient(repo_path, timeout=settings.git_timeout)
        git_client.version()
        git_client.validate_repository()

        with ExitStack() as stack:
            enricher = None
            if ticket_status:
                profile = load_profile(settings.profile_path)
                pm = profile.require_project_management()
                provider = stack.enter_context(build_provider(pm, timeout=settings.http_timeout))
                enricher = TicketStatusEnricher(pm.ticket_pattern(), provider)

            if patterns:
                console.print(f"[bold green]Cherry picking[/bold green] {escape(', '.join(patterns))}...")

            report = reconcile_branches(
                git_client,
                source,
                target,
                replay_patterns=patterns,
                enricher=enricher,
            )
    except ReplayFailed as e:
        if e.report is not None and e.report.rolled_back_to:
            console.print(f"[yellow]Reset to commit hash {e.report.rolled_back_to}[/yellow]")
        _fail(e)
    except CommitSyncError as e:
        _fail(e)

    if report.replay is not None:
        for hash_ in report.replay.replayed_hashes:
            console.print(f"[bold green]✓[/bold green] Cherry picked {hash_}")

    print_report(report)


@app.command()
def update(
    branches: List[str] = typer.Argument(..., help="Branches to check out and pull"),
    repo_path: Path = typer.Option(Path("."), "--repo", "-r", help="Path to Git repository"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Run `git fetch --all --prune --tags` and `git pull` on each branch."""
    settings = _setup(verbose)

    try:
        git_client = GitClient(repo_path, timeout=settings.git_timeout)
        git_client.version()
        git_client.validate_repository()

        console.print("[bold green]Fetching all...[/bold green]")
        output = git_client.fetch_all()
        if verbose and output:
            console.print(escape(output))

        for branch in branches:
            console.print(f"[bold blue]Updating[/bold blue] {escape(branch)}")
            output = git_client.checkout(branch)
            if verbose and output:
                console.print(escape(output))
            output = git_client.pull()
            if verbose and output:
                console.print(escape(output))
    except CommitSyncError as e:
        _fail(e)

    console.print(f"\n[bold green]✓[/bold green] Updated {len(branches)} branch(es)")


@app.command()
def diagnostic(
    repo_path: Path = typer.Option(Path("."), "--repo", "-r", help="Path to Git repository"),
) -> None:
    """Check that git, the repository and the profile file are usable."""
    settings = _setup(False)
    git_client = GitClient(repo_path, timeout=settings.git_timeout)

    try:
        git_client.version()
        console.print("[green]✓[/green] Git is installed.")
        git_client.validate_repository()
        console.print("[green]✓[/green] Git repository is valid.")
        load_profile(settings.profile_path)
        console.print("[green]✓[/green] Config file is valid.")
    except CommitSyncError as e:
        _fail(e)

    console.print("Diagnostic done.")


@app.command()
def version() -> None:
    """Print the commitsync version."""
    console.print(f"commitsync {__version__}")


# Short aliases
app.command(name="dm", hidden=True)(diff_message)
app.command(name="u", hidden=True)(update)
app.command(name="dia", hidden=True)(diagnostic)
app.command(name="v", hidden=True)(version)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
