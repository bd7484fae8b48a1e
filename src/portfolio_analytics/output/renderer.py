from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from portfolio_analytics.models.derived import DashboardView, GroupWeight
from portfolio_analytics.output.formatters import (
    delta_color,
    direction_color,
    flag_description,
    fmt_amount,
    fmt_number,
    fmt_pct,
    fmt_signed_amount,
    fmt_weight,
    progress_bar,
)


class DashboardRenderer:
    def __init__(
        self, console: Console | None = None, scale_cap: float = 100.0
    ) -> None:
        self.console = console or Console()
        self.scale_cap = scale_cap

    def render(self, view: DashboardView) -> None:
        self._render_header(view)
        self._render_holdings(view)
        self._render_groups("Sector Allocation", view.sectors)
        self._render_groups("Region Allocation", view.regions)
        self._render_groups("Asset Type Allocation", view.asset_types)
        self._render_risk(view)
        self._render_benchmarks(view)
        self._render_flags(view)
        self._render_reconciliation(view)

    def _render_header(self, view: DashboardView) -> None:
        s = view.summary
        updated = s.last_updated.isoformat() if s.last_updated else "N/A"
        lines = [
            f"Total investment  [bold]{fmt_amount(s.total_investment)}[/bold]",
            f"Total profit      [bold]{fmt_signed_amount(s.total_profit)}[/bold]",
            f"Total return      [bold]{fmt_pct(s.total_return, 1)}[/bold]",
            f"USD/KRW           {fmt_number(s.exchange_rate)}",
        ]
        self.console.print()
        self.console.print(
            Panel(
                "\n".join(lines),
                title="Portfolio Analytics",
                subtitle=f"as of {updated}",
                style="cyan",
            )
        )

    def _render_holdings(self, view: DashboardView) -> None:
        if not view.holdings:
            self.console.print("[yellow]No holdings[/yellow]")
            return
        table = Table(title="Holdings", show_header=True)
        table.add_column("Symbol", style="cyan")
        table.add_column("Name")
        table.add_column("Value", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("Return", justify="right")

        for h in view.holdings:
            table.add_row(
                Text(h.symbol),
                Text(h.name),
                fmt_amount(h.current_value),
                fmt_weight(h.weight),
                Text(fmt_pct(h.return_rate, 1), style=direction_color(h.direction)),
            )
        self.console.print(table)

    def _render_groups(self, title: str, groups: list[GroupWeight]) -> None:
        if not groups:
            return
        table = Table(title=title, show_header=True)
        table.add_column("Label", style="cyan")
        table.add_column("Value", justify="right")
        table.add_column("Weight", justify="right")
        table.add_column("", no_wrap=True)

        for g in groups:
            bar_width = (g.weight or 0.0) * self.scale_cap
            table.add_row(
                Text(g.label),
                fmt_amount(g.total_value),
                fmt_weight(g.weight),
                progress_bar(bar_width, self.scale_cap),
            )
        self.console.print(table)

    def _render_risk(self, view: DashboardView) -> None:
        table = Table(title="Risk Profile", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Raw", justify="right")
        table.add_column("Score", justify="right")

        for r in view.radar:
            table.add_row(Text(r.label), fmt_number(r.raw), fmt_number(r.score, 1))
        self.console.print(table)

        if view.top_correlations:
            corr = Table(title="Top Correlations", show_header=True)
            corr.add_column("Pair", style="cyan")
            corr.add_column("Coefficient", justify="right")
            for c in view.top_correlations:
                corr.add_row(Text(c.pair), fmt_number(c.coefficient))
            self.console.print(corr)

    def _render_benchmarks(self, view: DashboardView) -> None:
        table = Table(title="Benchmark Comparison", show_header=True)
        table.add_column("Name", style="cyan")
        table.add_column("Return", justify="right")
        table.add_column("Delta", justify="right")
        table.add_column("", no_wrap=True)

        p = view.portfolio_bar
        table.add_row(
            Text(p.label, style="bold"),
            fmt_pct(p.return_rate, 1),
            "",
            progress_bar(p.width, self.scale_cap),
        )
        for bar, d in zip(view.benchmark_bars, view.benchmark_deltas):
            table.add_row(
                Text(bar.label),
                fmt_pct(bar.return_rate, 1),
                Text(fmt_pct(d.delta, 1), style=delta_color(d.delta)),
                progress_bar(bar.width, self.scale_cap),
            )
        self.console.print(table)

    def _render_flags(self, view: DashboardView) -> None:
        if not view.flags:
            self.console.print("[green]No concentration warnings[/green]")
            return
        for f in view.flags:
            self.console.print(
                f"[yellow]⚠ {flag_description(f.kind)}:[/yellow] "
                f"{escape(f.label)} at {fmt_weight(f.weight)} "
                f"(limit {fmt_weight(f.threshold, 0)})"
            )

    def _render_reconciliation(self, view: DashboardView) -> None:
        r = view.reconciliation
        if r.reconciled:
            return
        self.console.print(
            f"[dim]Summary differs from holdings: profit gap "
            f"{fmt_signed_amount(r.profit_gap)}, investment gap "
            f"{fmt_signed_amount(r.investment_gap)}[/dim]"
        )
