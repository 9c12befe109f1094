from capital_projection.data_model import IncomeChange, LumpSum
from capital_projection.engine.scheduler import AdjustmentCursor, effective_month_index, schedule_adjustments


def test_effective_month_index_counts_from_simulation_start():
    assert effective_month_index(0, 1) == 0
    assert effective_month_index(0, 12) == 11
    assert effective_month_index(1, 1) == 12
    assert effective_month_index(3, 7) == 42


def test_schedule_sorts_by_effective_month_and_keeps_input_order_on_ties():
    items = [LumpSum(100.0, 1, 1), LumpSum(200.0, 0, 3), LumpSum(300.0, 1, 1)]

    scheduled = schedule_adjustments(items)

    assert [entry.effective_month for entry in scheduled] == [2, 12, 12]
    assert [entry.adjustment.amount for entry in scheduled] == [200.0, 100.0, 300.0]


def test_schedule_accepts_missing_list():
    assert schedule_adjustments(None) == []
    assert schedule_adjustments([]) == []


def test_cursor_releases_each_adjustment_once_in_its_month():
    cursor = AdjustmentCursor(
        schedule_adjustments([IncomeChange(10.0, 0, 2), IncomeChange(20.0, 0, 2), IncomeChange(30.0, 0, 4)])
    )

    released = {month: [c.amount for c in cursor.due(month)] for month in range(5)}

    assert released == {0: [], 1: [10.0, 20.0], 2: [], 3: [30.0], 4: []}
