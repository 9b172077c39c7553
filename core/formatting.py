"""Display formatting for money amounts and tracking statuses."""

from __future__ import annotations

from .schema import TrackingStatus

_STATUS_LABELS = {
    "on-track": "On Track",
    "behind": "Slightly Behind",
    "off-track": "Off Track",
}


def _grouped(value: float) -> str:
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_currency(value: float) -> str:
    """Abbreviate large amounts: $1.2M, $45.0K, otherwise $9,500."""
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 10_000:
        return f"${value / 1_000:.1f}K"
    return f"${_grouped(value)}"


def format_deal_size(value: float) -> str:
    """Chip label for a preset deal size: $5K, $2.5K, $500."""
    if value >= 1_000:
        decimals = 0 if value % 1_000 == 0 else 1
        return f"${value / 1_000:.{decimals}f}K"
    return f"${_grouped(value)}"


def status_label(status: TrackingStatus) -> str:
    return _STATUS_LABELS.get(status, "")
