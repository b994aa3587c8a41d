"""Rich tables for optimization outcomes and batch summaries."""

from rich.table import Table
from rich.text import Text

from src.core.models import BatchSummary, OptimizationAction, OptimizationOutcome


def _format_bps(bps: int) -> Text:
    """Format basis points as a percentage."""
    if bps is None:
        return Text("--", style="dim")
    return Text(f"{bps / 100:.2f}%")


def _format_ratio(ratio: int, target: int) -> Text:
    """Format a collateral ratio, coloured against its target."""
    text = f"{ratio / 100:.1f}%"
    if ratio >= target:
        style = "green"
    elif ratio >= target * 9 // 10:
        style = "yellow"
    else:
        style = "red bold"
    return Text(text, style=style)


def _format_action(outcome: OptimizationOutcome) -> Text:
    if outcome.action == OptimizationAction.NO_ACTION:
        return Text("HOLD", style="dim")
    if outcome.executed is False:
        return Text("SWAP FAILED", style="red bold")
    if outcome.executed:
        return Text("SWAPPED", style="green bold")
    return Text("SWAP", style="yellow bold")


def render_outcome(outcome: OptimizationOutcome) -> Table:
    """Two-column table comparing current and selected collateral."""
    table = Table(title=f"Position {outcome.position_id}", show_header=True)
    table.add_column("", style="bold")
    table.add_column("Current")
    table.add_column("Selected")

    current = outcome.current
    selected = outcome.selection.candidate

    table.add_row("Asset", current.asset, selected.asset)
    table.add_row("Amount", str(current.amount), str(selected.amount))
    table.add_row("Yield", _format_bps(current.yield_bps), _format_bps(selected.yield_bps))
    table.add_row("Volatility", str(current.volatility), str(selected.volatility))
    table.add_row(
        "Ratio",
        "",
        _format_ratio(outcome.selection.ratio, outcome.target_ratio),
    )
    table.add_row("Improvement", "", _format_bps(outcome.improvement_bps))
    table.add_row("Threshold", "", _format_bps(outcome.threshold_bps))
    table.add_row("Action", "", _format_action(outcome))
    return table


def render_batch_summary(summary: BatchSummary) -> Table:
    """One row per position, followed by totals in the caption."""
    table = Table(title="Collateral optimization batch", show_header=True)
    table.add_column("Position", style="bold")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Improvement", justify="right")
    table.add_column("Ratio", justify="right")
    table.add_column("Action")

    for outcome in summary.outcomes:
        table.add_row(
            outcome.position_id,
            outcome.current.asset,
            outcome.selection.asset,
            _format_bps(outcome.improvement_bps),
            _format_ratio(outcome.selection.ratio, outcome.target_ratio),
            _format_action(outcome),
        )

    for position_id, message in summary.errors.items():
        table.add_row(position_id, "--", "--", "--", "--", Text(f"SKIPPED: {message}", style="red"))

    table.caption = (
        f"{summary.processed} processed, {summary.acted} acted, "
        f"{summary.skipped} skipped, {summary.executed} executed"
    )
    return table
