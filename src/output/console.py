"""Rich console rendering of the scan inventory and release notes."""

from __future__ import annotations

import sys
from typing import Callable, Iterable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from versioning.models import ProviderRef, ProviderReport, ResolvedProvider
from .highlight import StyleMode, style_body


def _default_pause(console: Console) -> None:
    console.input("[dim]Press Enter to continue...[/dim]")


class ConsoleRenderer:
    """Draws tables for each stage of a run.

    Args:
        console: Target rich console.
        style_mode: How relevant release-note lines are emphasized.
        show_all: When False, wait for Enter after each outdated provider.
        pause: Callable invoked to wait; defaults to reading stdin.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        style_mode: StyleMode = StyleMode.DEFAULT,
        show_all: bool = False,
        pause: Optional[Callable[[Console], None]] = None,
    ):
        self.console = console or Console()
        self.style_mode = style_mode
        self.show_all = show_all
        self._pause = pause
        self._shown = 0

    def _should_pause(self) -> bool:
        if self.show_all:
            return False
        if self._pause is not None:
            return True
        return sys.stdin.isatty() and self.console.is_terminal

    def terraform_files(self, paths: Sequence[str]) -> None:
        table = Table()
        table.add_column(f"{len(paths)} Terraform Files Found:")
        for path in paths:
            table.add_row(escape(path))
        self.console.print(table)

    def providers(self, refs: Sequence[ProviderRef]) -> None:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Vendor")
        table.add_column("Provider")
        table.add_column("Version")
        table.add_column("Registry Link")
        for ref in refs:
            table.add_row(
                escape(ref.vendor),
                escape(ref.name),
                escape(ref.pinned_version),
                f"[link={ref.registry_url}]{escape(ref.registry_url)}[/link]",
            )
        self.console.print(table)

    def resource_types(self, identifiers: Sequence[str]) -> None:
        table = Table()
        table.add_column(f"{len(identifiers)} Resource Types Found:")
        for ident in identifiers:
            table.add_row(escape(ident))
        self.console.print(table)

    def repositories(self, resolved: Sequence[ResolvedProvider]) -> None:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Provider")
        table.add_column("GitHub Org")
        table.add_column("GitHub Repo")
        for provider in resolved:
            table.add_row(escape(provider.name), escape(provider.repo_org), escape(provider.repo_name))
        self.console.print(table)

    def release_notes_table(self, report: ProviderReport) -> Table:
        table = Table(show_lines=True)
        table.add_column(f"{escape(report.provider.name)} Version number", no_wrap=True)
        table.add_column("Published", no_wrap=True)
        table.add_column("Release Notes")
        for item in report.releases:
            published = item.release.created_at.strftime("%Y-%m-%d") if item.release.created_at else ""
            table.add_row(
                escape(str(item.release.version)),
                published,
                style_body(item.lines, self.style_mode),
            )
        return table

    def report(self, report: ProviderReport) -> None:
        """Render one provider; skipped providers are reported by the caller."""
        if report.skipped:
            return
        if report.up_to_date:
            self.console.print(f"[green]Provider '{escape(report.provider.name)}' is up to date![/green]")
            return
        if self._shown and self._should_pause():
            (self._pause or _default_pause)(self.console)
        self.console.print(self.release_notes_table(report))
        self._shown += 1

    def summary(self, reports: Iterable[ProviderReport]) -> None:
        items: List[ProviderReport] = list(reports)
        outdated = [r for r in items if not r.skipped and not r.up_to_date]
        skipped = [r for r in items if r.skipped]
        relevant = sum(rel.relevant_count for r in outdated for rel in r.releases)
        self.console.print(
            f"\n[bold]{len(outdated)}[/bold] provider(s) behind, "
            f"[bold]{len(items) - len(outdated) - len(skipped)}[/bold] up to date, "
            f"[bold]{len(skipped)}[/bold] skipped; "
            f"[bold yellow]{relevant}[/bold yellow] release-note line(s) mention your resources."
        )
