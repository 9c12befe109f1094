import pytest

from capital_projection.data_model import MonthRecord, ProjectionInput


def _make_input(**overrides) -> ProjectionInput:
    params = dict(
        initial_capital=100000.0,
        current_age=30,
        avg_yearly_investment_return=0.0,
        annual_inflation_rate=0.0,
        projection_start_date="2024-01",
        initial_monthly_income=0.0,
        spending_mode="single",
        total_monthly_spending=0.0,
    )
    params.update(overrides)
    return ProjectionInput(**params)


def _make_records(capitals, net_flows=None, income=1000.0, spending=800.0, start_age=30):
    net_flows = net_flows or [income - spending] * len(capitals)
    records = []
    for month, (capital, flow) in enumerate(zip(capitals, net_flows)):
        records.append(
            MonthRecord(
                month=month,
                year=month // 12,
                month_in_year=month % 12 + 1,
                date=f"{2024 + month // 12}-{month % 12 + 1:02d}",
                age=start_age + month // 12,
                income=income,
                spending=spending,
                lump_sum=0.0,
                net_cash_flow=flow,
                investment_returns=0.0,
                capital_before_returns=capital,
                capital=capital,
            )
        )
    return records


@pytest.fixture
def make_input():
    return _make_input


@pytest.fixture
def make_records():
    return _make_records
