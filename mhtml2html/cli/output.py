"""Rich console output formatting."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mhtml2html.models.archive import BatchResult, ConversionResult, ParsedArchive


class RichOutput:
    """Rich console output formatting."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with Rich console.

        Args:
            console: Rich Console instance.
        """
        self.console = console or Console()

    def print_archive(self, archive: ParsedArchive, limit: int = 50) -> None:
        """Display the parts of a parsed archive as a table.

        Args:
            archive: Parsed archive.
            limit: Maximum rows to show.
        """
        table = Table(title="Archive Parts", show_lines=False)

        table.add_column("Location", style="cyan", max_width=50)
        table.add_column("ID", style="green", max_width=30)
        table.add_column("Type")
        table.add_column("Encoding", style="magenta")
        table.add_column("Size", justify="right", style="yellow")

        assets = archive.assets
        for asset in assets[:limit]:
            location = self._truncate(asset.location or "-", 50)
            if asset.location == archive.index:
                location = f"[bold]{location}[/bold]"
            table.add_row(
                location,
                self._truncate(asset.id or "-", 30),
                asset.mime_type,
                asset.transfer_encoding,
                self._format_size(asset.size),
            )

        self.console.print(table)

        if len(assets) > limit:
            self.console.print(f"\n[dim]... and {len(assets) - limit} more parts[/dim]")

        if archive.duplicates:
            self.console.print("\n[bold]Ignored duplicate parts:[/bold]")
            for location in archive.duplicates:
                self.console.print(f"  {location}")

    def print_conversion(self, result: ConversionResult) -> None:
        """Display the outcome of one conversion.

        Args:
            result: Conversion result.
        """
        if result.success:
            self.console.print(
                f"[green]OK[/green] {result.source} -> {result.output} "
                f"[dim]({result.assets} assets)[/dim]"
            )
        else:
            self.console.print(f"[red]FAILED[/red] {result.source}: {result.error}")

    def print_batch_result(self, result: BatchResult) -> None:
        """Display batch conversion summary.

        Args:
            result: Batch result.
        """
        status_color = "green" if result.failed == 0 else "yellow"

        panel_content = f"""
[bold]Archives:[/bold] {len(result.results)}
[bold]Converted:[/bold] [{status_color}]{result.successful}[/{status_color}]
[bold]Failed:[/bold] [red]{result.failed}[/red]
[bold]Success rate:[/bold] {result.success_rate:.0f}%
[bold]Duration:[/bold] {result.duration_seconds:.1f} seconds
"""
        self.console.print(Panel(panel_content, title="Conversion Complete"))

    def print_error(self, message: str, details: str | None = None) -> None:
        """Display error message.

        Args:
            message: Error message.
            details: Optional additional details.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")
        if details:
            self.console.print(f"[dim]{details}[/dim]")

    def print_success(self, message: str) -> None:
        """Display success message."""
        self.console.print(f"[bold green]Success:[/bold green] {message}")

    def print_warning(self, message: str) -> None:
        """Display warning message."""
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {message}")

    def _truncate(self, text: str, max_length: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_length:
            return text
        return text[: max_length - 3] + "..."

    def _format_size(self, size: int) -> str:
        """Format size in human-readable form."""
        if size < 1024:
            return f"{size} B"
        elif size < 1024 * 1024:
            return f"{size / 1024:.1f} KB"
        else:
            return f"{size / (1024 * 1024):.1f} MB"
