from portfolio_analytics.models.derived import Direction, FlagKind


def fmt_pct(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.{decimals}f}%"


def fmt_weight(value: float | None, decimals: int = 1) -> str:
    if value is None:
        return "N/A"
    return f"{value * 100:.{decimals}f}%"


def fmt_number(value: float | None, decimals: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:,.{decimals}f}"


def fmt_amount(value: float | None, currency: str = "KRW") -> str:
    if value is None:
        return "N/A"
    return f"{value:,.0f} {currency}"


def fmt_signed_amount(value: float | None, currency: str = "KRW") -> str:
    if value is None:
        return "N/A"
    return f"{value:+,.0f} {currency}"


def direction_color(direction: Direction) -> str:
    return "green" if direction is Direction.GAIN else "red"


def delta_color(delta: float) -> str:
    if delta > 0:
        return "green"
    if delta < 0:
        return "red"
    return "yellow"


def flag_description(kind: FlagKind) -> str:
    descriptions = {
        FlagKind.POSITION: "Single position over limit",
        FlagKind.STOCK: "Individual stock over limit",
        FlagKind.REGION: "Region concentration",
    }
    return descriptions.get(kind, str(kind))


def progress_bar(width: float, cap: float = 100.0, cells: int = 20) -> str:
    """Render a clamped display width as a fixed-size text bar."""
    if cap <= 0:
        return "░" * cells
    filled = round(min(max(width, 0.0), cap) / cap * cells)
    return "█" * filled + "░" * (cells - filled)
