"""Chart rendering for payoff projections."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import matplotlib.ticker as mticker  # noqa: E402

from .services.debts import SimulationResult  # noqa: E402


def _month_label(as_of: date, offset: int) -> str:
    month = as_of.month + offset
    year = as_of.year + (month - 1) // 12
    month = ((month - 1) % 12) + 1
    return f"{year}-{month:02d}"


def debt_payoff_chart_png(
    result: SimulationResult,
    *,
    as_of: Optional[date] = None,
    currency: str = "RM",
) -> Path:
    """Render remaining balance per month for a simulation and return the PNG path."""

    starting_debt = sum(entry.balance for entry in result.priority_order)
    totals = [starting_debt, *result.timeline] if result.timeline else []

    fig, ax = plt.subplots(figsize=(10, 6))

    if totals:
        x_vals = list(range(len(totals)))
        ax.plot(x_vals, totals, color="#4F46E5", linewidth=2.5)
        ax.fill_between(x_vals, totals, color="#E0E7FF", alpha=0.5)

        if starting_debt > 0:
            half_point = starting_debt / 2
            for i, total in enumerate(totals):
                if total <= half_point:
                    ax.axvline(x=i, color="#22C55E", linestyle="--", alpha=0.6, linewidth=1.5)
                    ax.annotate(
                        "50% Paid!",
                        (i, total),
                        xytext=(10, 30),
                        textcoords="offset points",
                        fontsize=9,
                        color="#22C55E",
                        fontweight="bold",
                        arrowprops=dict(arrowstyle="->", color="#22C55E", alpha=0.6),
                    )
                    break

        if result.debt_free:
            ax.scatter([x_vals[-1]], [0], s=200, c="gold", marker="*", zorder=5, edgecolors="#F59E0B")
            ax.annotate(
                "DEBT FREE!",
                (x_vals[-1], 0),
                xytext=(0, 25),
                textcoords="offset points",
                ha="center",
                fontsize=12,
                fontweight="bold",
                color="#16A34A",
            )

        ax.grid(True, linestyle="--", alpha=0.3)
        ax.set_axisbelow(True)

        ax.set_title(
            f"Debt Payoff Projection ({result.strategy.title()})",
            fontsize=14,
            fontweight="bold",
            pad=15,
        )
        ax.set_ylabel(f"Remaining Balance ({currency})", fontsize=11)
        ax.set_xlabel("Month", fontsize=11)

        # Set ticks before labels
        tick_step = max(1, len(x_vals) // 8)
        tick_positions = x_vals[::tick_step]
        ax.set_xticks(tick_positions)
        if as_of is not None:
            ax.set_xticklabels(
                [_month_label(as_of, pos) for pos in tick_positions], rotation=45, ha="right"
            )

        ax.yaxis.set_major_formatter(
            mticker.FuncFormatter(lambda x, p: f"{currency} {x:,.0f}")
        )

        months_label = str(result.total_months) if result.debt_free else f"{result.total_months}+"
        textstr = (
            f"Starting Debt: {currency} {starting_debt:,.0f}\n"
            f"Months to Payoff: {months_label}\n"
            f"Interest Paid: {currency} {result.total_interest_paid:,.2f}"
        )
        props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
        ax.text(0.02, 0.98, textstr, transform=ax.transAxes, fontsize=9,
                verticalalignment="top", bbox=props)
    else:
        ax.text(0.5, 0.5, "No payoff schedule", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()

    with NamedTemporaryFile(delete=False, suffix=".png") as tmp:
        fig.savefig(tmp.name, bbox_inches="tight", dpi=100)
        path = Path(tmp.name)
    plt.close(fig)
    return path
