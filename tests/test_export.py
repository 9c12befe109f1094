import pytest

from capital_projection.data_model import LumpSum
from capital_projection.engine import aggregate_period, csv_rows, export_csv, results_to_frame, simulate_monthly


def test_results_to_frame_uses_record_fields(make_records):
    frame = results_to_frame(make_records([100.0, 200.0]), scenario="Base")

    assert list(frame.columns[:4]) == ["Scenario", "MonthIndex", "Year", "MonthInYear"]
    assert frame["Capital"].tolist() == [100.0, 200.0]
    assert set(frame["Scenario"]) == {"Base"}


def test_yearly_roll_up_sums_flows_and_keeps_closing_capital(make_input):
    data = make_input(initial_monthly_income=1000.0, lump_sums=[LumpSum(500.0, 1, 3)])
    frame = results_to_frame(simulate_monthly(data, max_months=24))

    yearly = aggregate_period(frame, freq="Y")

    assert yearly["PeriodValue"].tolist() == [0, 1]
    assert yearly["Income"].tolist() == [12000.0, 12000.0]
    assert yearly["LumpSum"].tolist() == [0.0, 500.0]
    assert yearly["Capital"].tolist() == pytest.approx([112000.0, 124500.0])
    assert yearly["Period"].tolist() == ["Year 0", "Year 1"]


def test_quarterly_roll_up_labels_with_period_end(make_input):
    frame = results_to_frame(simulate_monthly(make_input(projection_start_date="2024-02"), max_months=6))

    quarterly = aggregate_period(frame, freq="q")

    assert quarterly["Period"].tolist() == ["2024-04", "2024-07"]


def test_monthly_roll_up_keeps_every_row(make_records):
    monthly = aggregate_period(results_to_frame(make_records([1.0, 2.0, 3.0])), freq="M")

    assert len(monthly) == 3
    assert monthly["Period"].tolist() == ["2024-01", "2024-02", "2024-03"]


def test_roll_up_requires_record_columns():
    import pandas as pd

    with pytest.raises(KeyError):
        aggregate_period(pd.DataFrame([{"Capital": 1.0}]), freq="Y")


def test_csv_rows_use_two_decimals(make_records):
    rows = csv_rows(make_records([1234.5]))

    assert rows == [["0", "0", "2024-01", "30", "1000.00", "800.00", "0.00", "200.00", "0.00", "1234.50"]]


def test_export_csv_layout(make_records):
    text = export_csv(make_records([10.0, 20.0]), currency="USD")

    lines = text.split("\n")
    assert lines[0] == (
        "Month,Year,Date,Age,Income (USD),Spending (USD),Lump Sum (USD),"
        "Net Cash Flow (USD),Investment Returns (USD),Capital (USD)"
    )
    assert lines[2] == "1,0,2024-02,30,1000.00,800.00,0.00,200.00,0.00,20.00"
    assert len(lines) == 3


def test_export_csv_empty():
    assert export_csv([]) == ""
