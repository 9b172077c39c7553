import math

import pytest

from core.config import SimulatorConfig
from core.schema import Scenario
from pm import compare_scenarios, compute_strategy_metrics, generate_strategy_report


@pytest.fixture
def goal_scenario(deal):
    # annual total 50,000 (ten months of 5,000) against a 100,000 goal
    return Scenario(name="Scenario A", recurring=(deal(2, 5_000),), goal=100_000)


def test_metrics_basic(goal_scenario):
    m = compute_strategy_metrics(goal_scenario, current_month=5)
    assert m.annual_total == 50_000
    assert m.total_baseline == 0
    assert m.total_added == 50_000
    assert m.recurring_count == 1
    assert m.one_off_count == 0
    assert m.strongest_month == 2
    assert m.strongest_value == 5_000
    assert m.weakest_month == 0
    assert m.weakest_value == 0
    assert m.has_goal
    assert m.gap == 50_000


def test_deals_needed_rounds_up(goal_scenario):
    m = compute_strategy_metrics(goal_scenario, current_month=5)
    assert m.remaining_months == 7
    assert m.deals_needed == 10
    assert m.deals_per_month == 2


def test_remaining_months_never_below_one(goal_scenario):
    m = compute_strategy_metrics(goal_scenario, current_month=11)
    assert m.remaining_months == 1
    assert m.deals_per_month == m.deals_needed


def test_avg_deal_size_comes_from_config(goal_scenario):
    m = compute_strategy_metrics(goal_scenario, 0, SimulatorConfig(avg_deal_size=10_000))
    assert m.deals_needed == 5


def test_metrics_without_goal(march_deal_scenario):
    m = compute_strategy_metrics(march_deal_scenario, current_month=3)
    assert not m.has_goal
    assert m.goal is None
    assert m.gap == 0
    assert m.status == "none"
    assert m.deals_needed == 0 and m.deals_per_month == 0


def test_metrics_rejects_bad_month(goal_scenario):
    with pytest.raises(ValueError):
        compute_strategy_metrics(goal_scenario, current_month=12)


def test_report_flags_and_headline(goal_scenario):
    report = generate_strategy_report(
        compute_strategy_metrics(goal_scenario, 5), scenario_name="Scenario A"
    )
    assert report.headline == "$50.0K remaining to goal"
    assert any(f.startswith("GOAL_AT_RISK") for f in report.flags)
    assert not any(f.startswith("GOAL_ACHIEVED") for f in report.flags)


def test_report_goal_achieved():
    s = Scenario(name="A", baseline=[10_000] * 12, goal=60_000)
    report = generate_strategy_report(compute_strategy_metrics(s, 11))
    assert report.headline == "Goal achieved!"
    assert report.flags[0].startswith("GOAL_ACHIEVED")
    assert any(f.startswith("NO_NEW_REVENUE") for f in report.flags)


def test_report_behind_flag():
    s = Scenario(name="A", baseline=[800] * 12, goal=12_000)
    report = generate_strategy_report(compute_strategy_metrics(s, 0))
    assert any(f.startswith("GOAL_BEHIND") for f in report.flags)


def test_report_dataframe_rows(goal_scenario):
    report = generate_strategy_report(
        compute_strategy_metrics(goal_scenario, 5), scenario_name="Scenario A", avg_deal_size=5_000
    )
    df = report.to_dataframe()
    table = dict(zip(df["Metric"], df["Value"]))
    assert table["Scenario"] == "Scenario A"
    assert table["Annual Goal"] == "$100.0K"
    assert table["Annual Revenue"] == "$50.0K"
    assert table["New Revenue"] == "+$50.0K"
    assert table["Status"] == "Off Track"
    assert table["Revenue Gap"] == "$50.0K"
    assert table["Deals Needed (avg $5K)"] == "10"
    assert table["Deals/Month Remaining"] == "2/mo"
    assert table["Strongest Month"] == "Mar · $5,000"
    assert "FLAGS" in table


def test_report_dataframe_without_goal(march_deal_scenario):
    report = generate_strategy_report(compute_strategy_metrics(march_deal_scenario, 0))
    metrics = report.to_dataframe()["Metric"].tolist()
    assert report.headline == ""
    assert "Annual Goal" not in metrics
    assert "Revenue Gap" not in metrics
    assert "FLAGS" not in metrics


def test_compare_scenarios(goal_scenario, flat_scenario):
    df = compare_scenarios([goal_scenario, flat_scenario], current_month=5)
    assert df["scenario"].tolist() == ["Scenario A", "Scenario B"]
    assert df["annual_total"].tolist() == [50_000, 18_000]
    assert df.loc[0, "deals_needed"] == 10
    assert df.loc[0, "status"] == "off-track"
    assert math.isnan(df.loc[1, "goal"])
    assert df.loc[1, "status"] == "none"
    assert df.loc[0, "strongest_month"] == "Mar"
    assert df.loc[1, "strongest_month"] == "Jan"


def test_flag_text_uses_given_thresholds():
    s = Scenario(name="A", baseline=[800] * 12, goal=12_000)
    metrics = compute_strategy_metrics(s, 0, SimulatorConfig(on_track_ratio=0.9, behind_ratio=0.5))
    report = generate_strategy_report(metrics, on_track_ratio=0.9, behind_ratio=0.5)
    assert "GOAL_BEHIND: running total between 50% and 90% of goal pace" in report.flags

    default = generate_strategy_report(compute_strategy_metrics(s, 0))
    assert "GOAL_BEHIND: running total between 70% and 95% of goal pace" in default.flags
