"""Console rendering for the content-intel CLI."""

from collections.abc import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import AdPlacement, Article, LocationTag, RelevanceScore


class ConsoleUI:
    """Human-readable output for engine results."""

    def __init__(self, verbose: bool = False, console: Console | None = None):
        self.verbose = verbose
        self.console = console or Console()

    def _message(self, label: str, message: str, color: str) -> None:
        styled_message = Text()
        styled_message.append("▸ ", style=f"bold {color}")
        styled_message.append(label, style=f"bold black on {color}")
        styled_message.append(" ◂ ", style=f"bold {color}")
        styled_message.append(message, style=color)
        self.console.print(styled_message)

    def info(self, message: str):
        self._message("INFO", message, "bright_cyan")

    def success(self, message: str):
        self._message("SUCCESS", message, "bright_green")

    def warning(self, message: str):
        self._message("WARNING", message, "bright_yellow")

    def error(self, message: str):
        self._message("ERROR", message, "bright_red")

    def verbose_log(self, message: str):
        """Print a debug line in verbose mode only."""
        if self.verbose:
            verbose_text = Text()
            verbose_text.append("   ◦ DEBUG: ", style="dim bright_blue")
            verbose_text.append(message, style="dim bright_cyan")
            self.console.print(verbose_text)

    def show_related(self, target: Article, scores: Sequence[RelevanceScore],
                     articles: dict[str, Article]):
        """Table of related articles with their reasons."""
        if not scores:
            self.warning(f"No related articles for {target.id}")
            return

        table = Table(
            title=f"Related to: {target.title or target.id}",
            show_header=True,
            header_style="bold cyan",
            box=box.SIMPLE,
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Article")
        table.add_column("Score", justify="right")
        table.add_column("Reasons", style="dim")

        for rank, result in enumerate(scores, start=1):
            article = articles.get(result.article_id)
            title = article.title if article and article.title else result.article_id
            table.add_row(
                str(rank),
                title,
                f"{result.score:.3f}",
                ", ".join(result.reason_messages),
            )

        self.console.print(table)

    def show_location(self, location: LocationTag):
        """Panel with the classified location."""
        summary_table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
        summary_table.add_column("Field", style="dim blue")
        summary_table.add_column("Value", style="bold bright_blue")

        summary_table.add_row("Country", location.country.value)
        summary_table.add_row("City", location.city or "-")
        summary_table.add_row("Region", location.region or "-")
        summary_table.add_row("Confidence", "low (default market)" if location.low_confidence else "matched")

        self.console.print(Panel(
            summary_table,
            title="[bold cyan]Location[/bold cyan]",
            box=box.ROUNDED,
            border_style="bright_blue",
        ))

    def show_placements(self, placements: Sequence[AdPlacement]):
        """Table of planned ad placements."""
        if not placements:
            self.warning("No placement satisfies the spacing rules")
            return

        table = Table(show_header=True, header_style="bold cyan", box=box.SIMPLE)
        table.add_column("Block", justify="right")
        table.add_column("Position")
        table.add_column("Bucket", justify="center")

        for placement in placements:
            table.add_row(
                str(placement.block_index),
                placement.position_kind.value,
                placement.bucket.value,
            )

        self.console.print(table)
