import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from portfolio_analytics.analysis.dashboard import build_dashboard
from portfolio_analytics.config import AnalyticsConfig, DisplayConfig, ZeroTotalPolicy
from portfolio_analytics.data.feed import load_feed
from portfolio_analytics.data.sample import sample_feed
from portfolio_analytics.models.derived import DashboardView
from portfolio_analytics.output.renderer import DashboardRenderer

logger = logging.getLogger(__name__)
console = Console()

COMMANDS = ("show", "export")


def _add_common_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--feed",
        type=Path,
        default=None,
        help="Path to a portfolio feed JSON (defaults to the bundled sample)",
    )
    p.add_argument(
        "--scale-factor",
        type=float,
        default=8.0,
        help="Multiplier from return percent to bar width",
    )
    p.add_argument(
        "--scale-cap",
        type=float,
        default=100.0,
        help="Maximum bar width",
    )
    p.add_argument(
        "--zero-weight",
        choices=[z.value for z in ZeroTotalPolicy],
        default=ZeroTotalPolicy.UNDEFINED.value,
        help="How weights resolve when the portfolio total is zero",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="portfolio-analytics",
        description="Portfolio aggregation and dashboard views",
    )
    sub = p.add_subparsers(dest="command")

    # --- show (default) ---
    show = sub.add_parser("show", help="Render the dashboard in the terminal")
    _add_common_options(show)

    # --- export ---
    export = sub.add_parser("export", help="Export the dashboard view")
    _add_common_options(export)
    export.add_argument(
        "--format",
        choices=["markdown", "json"],
        default="markdown",
        help="Output format",
    )
    export.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write to this file instead of stdout",
    )

    return p


def config_from_args(args: argparse.Namespace) -> AnalyticsConfig:
    return AnalyticsConfig(
        display=DisplayConfig(
            scale_factor=args.scale_factor,
            scale_cap=args.scale_cap,
        ),
        zero_weight=ZeroTotalPolicy(args.zero_weight),
    )


def build_view(args: argparse.Namespace) -> tuple[DashboardView, AnalyticsConfig]:
    config = config_from_args(args)
    feed = load_feed(args.feed) if args.feed else sample_feed()
    return build_dashboard(feed, config), config


def _run_show(args: argparse.Namespace) -> None:
    """Execute the show subcommand."""
    view, config = build_view(args)
    renderer = DashboardRenderer(console=console, scale_cap=config.display.scale_cap)
    renderer.render(view)


def _run_export(args: argparse.Namespace) -> None:
    """Execute the export subcommand."""
    view, config = build_view(args)

    if args.format == "json":
        content = view.model_dump_json(indent=2)
    else:
        from portfolio_analytics.output.markdown_renderer import MarkdownRenderer

        content = MarkdownRenderer(scale_cap=config.display.scale_cap).render(view)

    if args.output is None:
        sys.stdout.write(content + "\n")
        return

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(content, encoding="utf-8")
    console.print(f"[green]Dashboard saved to {args.output}[/green]")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)

    # No subcommand given: treat the arguments as options for show
    if not argv or argv[0] not in (*COMMANDS, "-h", "--help"):
        argv.insert(0, "show")

    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        if args.command == "show":
            _run_show(args)
        elif args.command == "export":
            _run_export(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
