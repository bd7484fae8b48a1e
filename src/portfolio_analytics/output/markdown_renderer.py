from __future__ import annotations

from portfolio_analytics.models.derived import DashboardView, GroupWeight
from portfolio_analytics.output.formatters import (
    flag_description,
    fmt_amount,
    fmt_number,
    fmt_pct,
    fmt_signed_amount,
    fmt_weight,
    progress_bar,
)


def md_cell(text: str) -> str:
    return text.replace("|", "\\|")


class MarkdownRenderer:
    def __init__(self, scale_cap: float = 100.0) -> None:
        self.scale_cap = scale_cap

    def render(self, view: DashboardView) -> str:
        sections: list[str] = []
        sections.append(self._render_header(view))
        sections.append(self._render_holdings(view))
        sections.append(self._render_groups("Sector Allocation", view.sectors))
        sections.append(self._render_groups("Region Allocation", view.regions))
        sections.append(self._render_groups("Asset Type Allocation", view.asset_types))
        sections.append(self._render_risk(view))
        sections.append(self._render_benchmarks(view))
        if view.flags:
            sections.append(self._render_flags(view))
        if not view.reconciliation.reconciled:
            sections.append(self._render_reconciliation(view))
        return "\n".join(s for s in sections if s)

    def _render_header(self, view: DashboardView) -> str:
        s = view.summary
        updated = s.last_updated.isoformat() if s.last_updated else "N/A"
        return "\n".join(
            [
                "# Portfolio Analytics",
                "",
                f"*As of {updated}*",
                "",
                "| Total Investment | Total Profit | Total Return | USD/KRW |",
                "|---:|---:|---:|---:|",
                f"| {fmt_amount(s.total_investment)} "
                f"| {fmt_signed_amount(s.total_profit)} "
                f"| {fmt_pct(s.total_return, 1)} "
                f"| {fmt_number(s.exchange_rate)} |",
                "",
            ]
        )

    def _render_holdings(self, view: DashboardView) -> str:
        if not view.holdings:
            return "## Holdings\n\nNo holdings.\n"
        lines = [
            "## Holdings",
            "",
            "| Symbol | Name | Value | Weight | Return |",
            "|---|---|---:|---:|---:|",
        ]
        for h in view.holdings:
            lines.append(
                f"| {md_cell(h.symbol)} | {md_cell(h.name)} "
                f"| {fmt_amount(h.current_value)} "
                f"| {fmt_weight(h.weight)} | {fmt_pct(h.return_rate, 1)} |"
            )
        lines.append("")
        return "\n".join(lines)

    def _render_groups(self, title: str, groups: list[GroupWeight]) -> str:
        if not groups:
            return ""
        lines = [
            f"## {title}",
            "",
            "| Label | Value | Weight | |",
            "|---|---:|---:|---|",
        ]
        for g in groups:
            bar = progress_bar((g.weight or 0.0) * self.scale_cap, self.scale_cap)
            lines.append(
                f"| {md_cell(g.label)} | {fmt_amount(g.total_value)} "
                f"| {fmt_weight(g.weight)} | `{bar}` |"
            )
        lines.append("")
        return "\n".join(lines)

    def _render_risk(self, view: DashboardView) -> str:
        lines = [
            "## Risk Profile",
            "",
            "| Metric | Raw | Score |",
            "|---|---:|---:|",
        ]
        for r in view.radar:
            lines.append(
                f"| {md_cell(r.label)} | {fmt_number(r.raw)} "
                f"| {fmt_number(r.score, 1)} |"
            )
        lines.append("")

        if view.top_correlations:
            lines.extend(["### Top Correlations", ""])
            for c in view.top_correlations:
                lines.append(f"- **{c.pair}**: {fmt_number(c.coefficient)}")
            lines.append("")
        return "\n".join(lines)

    def _render_benchmarks(self, view: DashboardView) -> str:
        p = view.portfolio_bar
        lines = [
            "## Benchmark Comparison",
            "",
            "| Name | Return | Delta | |",
            "|---|---:|---:|---|",
            f"| **{p.label}** | {fmt_pct(p.return_rate, 1)} | "
            f"| `{progress_bar(p.width, self.scale_cap)}` |",
        ]
        for bar, d in zip(view.benchmark_bars, view.benchmark_deltas):
            bar_text = progress_bar(bar.width, self.scale_cap)
            lines.append(
                f"| {md_cell(bar.label)} | {fmt_pct(bar.return_rate, 1)} "
                f"| {fmt_pct(d.delta, 1)} | `{bar_text}` |"
            )
        lines.append("")
        return "\n".join(lines)

    def _render_flags(self, view: DashboardView) -> str:
        lines = ["## Concentration Warnings", ""]
        for f in view.flags:
            lines.append(
                f"- **{flag_description(f.kind)}**: {f.label} at "
                f"{fmt_weight(f.weight)} (limit {fmt_weight(f.threshold, 0)})"
            )
        lines.append("")
        return "\n".join(lines)

    def _render_reconciliation(self, view: DashboardView) -> str:
        r = view.reconciliation
        return "\n".join(
            [
                "## Reconciliation",
                "",
                f"- Profit gap: {fmt_signed_amount(r.profit_gap)}",
                f"- Investment gap: {fmt_signed_amount(r.investment_gap)}",
                "",
            ]
        )
