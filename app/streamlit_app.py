"""
Revenue Simulator — Streamlit dashboard
=======================================

Close deals → see impact → steer your year.

  1. Pick a scenario slot (each slot is an independent plan)
  2. Enter starting recurring revenue and the monthly baseline
  3. Add recurring and one-off deals per month with the preset chips
  4. Set an annual goal and watch the grid, chart and strategy panel react

Run: streamlit run app/streamlit_app.py   (or the `revenue-simulator` command)
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import SimulatorConfig, load_config
from core.formatting import format_currency, format_deal_size, status_label
from core.logging_setup import configure_logging, get_logger
from core.schema import MONTHS, NUM_MONTHS, Scenario

from engine import ledger
from engine.goal import goal_pace_curve
from engine.runner import build_revenue_grid, grid_totals

from pm.aggregator import compare_scenarios
from pm.decisions import generate_strategy_report
from pm.metrics import compute_strategy_metrics

from store.scenario_store import ScenarioStore

logger = get_logger("revenue_simulator.app")

# Row labels of the grid table, in display order
GRID_ROWS: Dict[str, str] = {
    "starting_recurring": "Starting Recurring",
    "baseline": "Baseline",
    "new": "New This Month",
    "carryover": "Carryover",
    "added": "Added Recurring",
    "one_off": "One-Off Deals",
    "monthly_total": "Monthly Total",
    "running_total": "Running Total",
    "goal_pace": "Goal Pace",
}

STATUS_COLORS = {
    "on-track": "#0f9d58",
    "behind": "#f4b400",
    "off-track": "#db4437",
    "none": "#9e9e9e",
}


# ---------------------------------------------------------------------------
# Config / store (cached across reruns)
# ---------------------------------------------------------------------------
@st.cache_resource
def _config() -> SimulatorConfig:
    cfg = load_config(str(PROJECT_ROOT / "config.yaml"))
    configure_logging(cfg.log_level)
    return cfg


@st.cache_resource
def _store(path: str, names: tuple, version: int) -> ScenarioStore:
    return ScenarioStore(path, names=names, version=version)


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------
def _init_session(store: ScenarioStore) -> None:
    if "scenarios" not in st.session_state:
        st.session_state["scenarios"] = store.load()
        logger.info("session started scenarios=%d path=%s", len(st.session_state["scenarios"]), store.path)
        if not store.last_result.is_clean:
            st.session_state["_load_notice"] = store.last_result.summary()
    st.session_state.setdefault("active", 0)


def _scenarios() -> List[Scenario]:
    return st.session_state["scenarios"]


def _current() -> Scenario:
    scenarios = _scenarios()
    idx = st.session_state["active"]
    return scenarios[idx] if 0 <= idx < len(scenarios) else scenarios[0]


def _update(store: ScenarioStore, fn: Callable[..., Scenario], *args) -> None:
    """Apply an update to the active scenario and autosave."""
    idx = st.session_state["active"]
    new = fn(_scenarios()[idx], *args)
    st.session_state["scenarios"] = ledger.replace_scenario(_scenarios(), idx, new)
    store.save(st.session_state["scenarios"])


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------
def _fmt_cell(val: float, *, signed: bool = False) -> str:
    if pd.isna(val):
        return ""
    if val == 0:
        return "---"
    return f"+{format_currency(val)}" if signed and val > 0 else format_currency(val)


def _grid_table(grid: pd.DataFrame, totals: Dict[str, float], has_goal: bool) -> pd.DataFrame:
    """Transpose the grid into the month-column layout with a Year Total column."""
    signed = {"new", "added", "one_off"}
    rows = []
    for key, label in GRID_ROWS.items():
        if key == "goal_pace" and not has_goal:
            continue
        row = {"": label}
        for m in range(NUM_MONTHS):
            val = grid.at[m, key]
            if key in ("monthly_total", "running_total"):
                row[MONTHS[m]] = format_currency(val)
            elif key == "goal_pace":
                row[MONTHS[m]] = format_currency(round(val))
            else:
                row[MONTHS[m]] = _fmt_cell(val, signed=key in signed)
        total_key = {"monthly_total": "annual_total", "running_total": "annual_total",
                     "goal_pace": "goal"}.get(key, key)
        row["Year Total"] = _fmt_cell(totals[total_key], signed=key in signed)
        rows.append(row)
    if has_goal:
        status_row = {"": "Status"}
        for m in range(NUM_MONTHS):
            status_row[MONTHS[m]] = status_label(grid.at[m, "status"])
        status_row["Year Total"] = ""
        rows.append(status_row)
    return pd.DataFrame(rows)


def _plot_trajectory(grid: pd.DataFrame, goal, *, height: int = 320) -> None:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=list(MONTHS), y=grid["monthly_total"], name="Monthly Total",
        marker_color=[STATUS_COLORS[s] for s in grid["status"]],
        opacity=0.6,
    ))
    fig.add_trace(go.Scatter(
        x=list(MONTHS), y=grid["running_total"], name="Running Total",
        mode="lines+markers", line=dict(color="steelblue", width=2),
    ))
    pace = goal_pace_curve(goal)
    if pace is not None:
        fig.add_trace(go.Scatter(
            x=list(MONTHS), y=pace, name="Goal Pace",
            mode="lines", line=dict(color="gray", dash="dash"),
        ))
    fig.update_layout(
        title="Revenue Trajectory",
        height=height,
        yaxis=dict(tickformat="$,.0f"),
        legend=dict(orientation="h"),
        margin=dict(l=10, r=10, t=40, b=10),
    )
    st.plotly_chart(fig, use_container_width=True)


def _deal_chips(
    store: ScenarioStore,
    scenario: Scenario,
    *,
    kind: str,
    sizes,
) -> None:
    """One column per month; each preset size has an add chip and a remove chip."""
    deals = scenario.recurring if kind == "recurring" else scenario.one_offs
    add_fn = ledger.add_recurring_deal if kind == "recurring" else ledger.add_one_off_deal
    remove_fn = ledger.remove_last_recurring_deal if kind == "recurring" else ledger.remove_last_one_off_deal

    cols = st.columns(NUM_MONTHS)
    for m, col in enumerate(cols):
        with col:
            st.caption(MONTHS[m])
            for size in sizes:
                count = ledger.count_deals(deals, m, size)
                label = format_deal_size(size) + (f" ×{count}" if count else "")
                st.button(
                    label,
                    key=f"{kind}-add-{m}-{size}",
                    on_click=_update,
                    args=(store, add_fn, m, size),
                    type="primary" if count else "secondary",
                    use_container_width=True,
                )
                if count:
                    st.button(
                        "−",
                        key=f"{kind}-remove-{m}-{size}",
                        on_click=_update,
                        args=(store, remove_fn, m, size),
                        use_container_width=True,
                    )


def _strategy_panel(scenario: Scenario, current_month: int, cfg: SimulatorConfig) -> None:
    metrics = compute_strategy_metrics(scenario, current_month, cfg)
    report = generate_strategy_report(
        metrics,
        scenario_name=scenario.name,
        avg_deal_size=cfg.avg_deal_size,
        on_track_ratio=cfg.on_track_ratio,
        behind_ratio=cfg.behind_ratio,
    )

    if metrics.has_goal:
        text = f"**{status_label(metrics.status)}** · {report.headline}"
        if metrics.status == "on-track":
            st.success(text)
        elif metrics.status == "behind":
            st.warning(text)
        else:
            st.error(text)

    st.dataframe(report.to_dataframe(), use_container_width=True, hide_index=True)


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------
def render() -> None:
    st.set_page_config(page_title="Revenue Simulator", layout="wide")

    cfg = _config()
    storage_path = Path(cfg.storage_path)
    if not storage_path.is_absolute():
        storage_path = PROJECT_ROOT / storage_path
    store = _store(str(storage_path), cfg.scenario_names, cfg.storage_version)
    _init_session(store)

    notice = st.session_state.pop("_load_notice", None)
    if notice:
        st.info(notice)

    # The dashboard measures goal pace through the current calendar month.
    current_month = date.today().month - 1

    # --- Scenario tabs + reset ---
    tab_col, reset_col = st.columns([5, 1])
    with tab_col:
        st.session_state["active"] = st.radio(
            "Scenario",
            options=list(range(len(cfg.scenario_names))),
            format_func=lambda i: cfg.scenario_names[i],
            horizontal=True,
            index=st.session_state["active"],
            label_visibility="collapsed",
        )
    with reset_col:
        st.button("Reset", on_click=_update, args=(store, ledger.reset_scenario), use_container_width=True)

    scenario = _current()
    grid = build_revenue_grid(scenario, cfg)
    totals = grid_totals(grid, scenario)

    # --- Header ---
    st.title("Revenue Simulator")
    k1, k2, k3 = st.columns(3)
    k1.metric("Deals", scenario.deal_count)
    k2.metric("One-Off Deals", len(scenario.one_offs))
    k3.metric("Annual Revenue", format_currency(totals["annual_total"]))

    main_col, side_col = st.columns([4, 1], gap="large")

    with main_col:
        # --- Inputs ---
        with st.expander("Starting Recurring & Baseline", expanded=True):
            st.number_input(
                "Starting recurring (per month)",
                min_value=0, step=500,
                value=int(scenario.starting_recurring),
                key=f"starting-{scenario.name}",
                on_change=lambda: _update(
                    store, ledger.set_starting_recurring,
                    st.session_state[f"starting-{scenario.name}"],
                ),
            )
            base_cols = st.columns(NUM_MONTHS)
            for m, col in enumerate(base_cols):
                key = f"baseline-{scenario.name}-{m}"
                col.number_input(
                    MONTHS[m], step=500,
                    value=int(scenario.baseline[m]),
                    key=key,
                    on_change=_update,
                    args=(store, lambda s, month=m, k=key: ledger.set_baseline_month(s, month, st.session_state[k])),
                )

        st.markdown("**Recurring Deals**")
        _deal_chips(store, scenario, kind="recurring", sizes=cfg.deal_sizes)

        st.markdown("**One-Off Deals**")
        _deal_chips(store, scenario, kind="one_off", sizes=cfg.one_off_sizes)

        # --- Grid + chart ---
        st.divider()
        st.dataframe(
            _grid_table(grid, totals, scenario.has_goal),
            use_container_width=True,
            hide_index=True,
        )
        _plot_trajectory(grid, scenario.goal)

        with st.expander("Compare Scenarios", expanded=False):
            st.dataframe(
                compare_scenarios(_scenarios(), current_month, cfg),
                use_container_width=True,
                hide_index=True,
            )

    with side_col:
        st.markdown("**Goal**")
        goal_key = f"goal-{scenario.name}"
        st.number_input(
            "Annual goal ($)",
            min_value=0, step=10_000,
            value=int(scenario.goal) if scenario.has_goal else 0,
            key=goal_key,
            help="0 disables goal tracking",
            on_change=lambda: _update(
                store, ledger.set_goal,
                st.session_state[goal_key] or None,
            ),
        )
        st.divider()
        st.markdown("**Strategy Summary**")
        _strategy_panel(scenario, current_month, cfg)


def main() -> None:
    """Console entry point: launch the Streamlit server on this file."""
    from streamlit.web import cli as stcli

    sys.argv = ["streamlit", "run", str(Path(__file__).resolve())]
    sys.exit(stcli.main())


if __name__ == "__main__":
    render()
