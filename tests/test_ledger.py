import math

import pytest

from core.schema import DealRecord, Scenario
from engine import ledger


def test_add_deal_generates_unique_ids():
    led = ()
    for _ in range(5):
        led = ledger.add_deal(led, 3, 2_500)
    assert len(led) == 5
    assert len({d.id for d in led}) == 5
    assert all(d.month == 3 and d.value == 2_500 for d in led)


def test_add_deal_returns_new_ledger():
    original = ledger.add_deal((), 0, 1_500)
    updated = ledger.add_deal(original, 1, 5_000)
    assert len(original) == 1
    assert len(updated) == 2
    assert updated[0] is original[0]


@pytest.mark.parametrize("month", [-1, 12, 99])
def test_add_deal_rejects_out_of_range_month(month):
    with pytest.raises(ValueError):
        ledger.add_deal((), month, 1_500)


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_add_deal_rejects_non_finite_value(value):
    with pytest.raises(ValueError):
        ledger.add_deal((), 0, value)


def test_deal_record_is_immutable(deal):
    d = deal(1, 1_500)
    with pytest.raises(AttributeError):
        d.value = 10


def test_deal_record_coerces_value_to_float():
    d = DealRecord(month=4, value=2_500, id="x")
    assert isinstance(d.value, float)


def test_remove_deal_by_id(deal):
    a, b, c = deal(0, 1_500), deal(0, 1_500), deal(5, 5_000)
    led = (a, b, c)
    assert ledger.remove_deal(led, b.id) == (a, c)
    assert ledger.remove_deal(led, "missing") == led


def test_remove_last_deal_takes_most_recent_match(deal):
    a, b, c = deal(2, 2_500), deal(2, 2_500), deal(2, 5_000)
    led = (a, b, c)
    assert ledger.remove_last_deal(led, 2, 2_500) == (a, c)
    assert ledger.remove_last_deal(led, 3, 2_500) == led
    assert ledger.count_deals(led, 2, 2_500) == 2
    assert ledger.count_deals(led, 2, 10_000) == 0


def test_create_scenarios_one_per_slot():
    scenarios = ledger.create_scenarios(["Scenario A", "Scenario B", "Scenario C"])
    assert [s.name for s in scenarios] == ["Scenario A", "Scenario B", "Scenario C"]
    for s in scenarios:
        assert s.baseline == (0.0,) * 12
        assert s.recurring == () and s.one_offs == ()
        assert s.goal is None
        assert s.starting_recurring == 0


def test_scenario_updates_do_not_mutate_input():
    s = Scenario(name="A")
    s2 = ledger.add_recurring_deal(s, 1, 5_000)
    s3 = ledger.add_one_off_deal(s2, 1, 1_000)
    s4 = ledger.set_baseline_month(s3, 11, 2_000)
    s5 = ledger.set_starting_recurring(s4, 750)
    s6 = ledger.set_goal(s5, 100_000)

    assert s.recurring == () and s.one_offs == ()
    assert len(s6.recurring) == 1 and len(s6.one_offs) == 1
    assert s6.baseline[11] == 2_000 and s4.baseline[11] == 2_000 and s3.baseline[11] == 0
    assert s6.starting_recurring == 750
    assert s6.goal == 100_000
    assert s5.goal is None


def test_remove_scenario_deals():
    s = ledger.add_recurring_deal(Scenario(name="A"), 0, 1_500)
    s = ledger.add_one_off_deal(s, 0, 500)
    s = ledger.remove_recurring_deal(s, s.recurring[0].id)
    s = ledger.remove_one_off_deal(s, s.one_offs[0].id)
    assert s.recurring == () and s.one_offs == ()


def test_recurring_and_one_off_ledgers_are_independent():
    s = ledger.add_recurring_deal(Scenario(name="A"), 0, 1_500)
    s = ledger.remove_one_off_deal(s, s.recurring[0].id)
    assert len(s.recurring) == 1


@pytest.mark.parametrize("raw, expected", [(None, None), ("abc", None), (math.inf, None), ("25000", 25_000.0)])
def test_set_goal_normalizes_input(raw, expected):
    assert ledger.set_goal(Scenario(name="A"), raw).goal == expected


def test_set_baseline_month_validates_month():
    with pytest.raises(ValueError):
        ledger.set_baseline_month(Scenario(name="A"), 12, 100)


def test_set_baseline_coerces_garbage_to_zero():
    s = ledger.set_baseline_month(Scenario(name="A", baseline=[5] * 12), 0, "abc")
    assert s.baseline[0] == 0


def test_reset_scenario_keeps_name_only():
    s = Scenario(name="Scenario B", baseline=[10] * 12, starting_recurring=300, goal=5_000)
    s = ledger.add_recurring_deal(s, 2, 5_000)
    s = ledger.add_one_off_deal(s, 2, 1_000)
    reset = ledger.reset_scenario(s)
    assert reset == Scenario(name="Scenario B")


def test_replace_scenario():
    scenarios = ledger.create_scenarios(["A", "B"])
    new_b = ledger.set_goal(scenarios[1], 10)
    out = ledger.replace_scenario(scenarios, 1, new_b)
    assert out[0] is scenarios[0]
    assert out[1].goal == 10
    assert scenarios[1].goal is None
    with pytest.raises(IndexError):
        ledger.replace_scenario(scenarios, 2, new_b)


def test_set_starting_recurring_clamps_negative():
    s = ledger.set_starting_recurring(Scenario(name="A"), -500)
    assert s.starting_recurring == 0
    assert ledger.set_starting_recurring(s, 1_200).starting_recurring == 1_200


def test_remove_last_scenario_deal_per_ledger():
    s = ledger.add_recurring_deal(Scenario(name="A"), 4, 2_500)
    s = ledger.add_recurring_deal(s, 4, 2_500)
    s = ledger.add_one_off_deal(s, 4, 2_500)
    first_id = s.recurring[0].id

    s = ledger.remove_last_recurring_deal(s, 4, 2_500)
    assert [d.id for d in s.recurring] == [first_id]
    assert len(s.one_offs) == 1

    s = ledger.remove_last_one_off_deal(s, 4, 2_500)
    assert s.one_offs == ()
    assert ledger.remove_last_one_off_deal(s, 4, 2_500) == s
