import pandas as pd

REQUIRED_COLUMNS = {"MonthIndex", "Year", "Date"}
FLOW_COLUMNS = ["Income", "Spending", "LumpSum", "NetCashFlow", "InvestmentReturns"]


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")
    keys = ["Scenario", "MonthIndex"] if "Scenario" in df.columns else ["MonthIndex"]
    return df.sort_values(keys).copy()


def _roll_up(df: pd.DataFrame) -> pd.DataFrame:
    keys = ["Scenario", "PeriodValue"] if "Scenario" in df.columns else ["PeriodValue"]
    grouped = df.groupby(keys, as_index=False)
    stocks = grouped.last()
    flows = [col for col in FLOW_COLUMNS if col in df.columns]
    if flows:
        stocks[flows] = grouped[flows].sum()[flows].to_numpy()
    return stocks


def aggregate_period(df: pd.DataFrame, freq: str = "M") -> pd.DataFrame:
    """Roll month records up to monthly/quarterly/yearly periods.

    Quarters and years count from the projection start, not the calendar.
    Flow columns are summed over the period; everything else keeps the
    period's last value.
    """
    if df.empty:
        return df

    freq = (freq or "M").upper()
    df = _prepare(df)

    if freq == "Q":
        df["PeriodValue"] = df["MonthIndex"] // 3
        out = _roll_up(df)
        out["Period"] = out["Date"]
        return out

    if freq == "Y":
        df["PeriodValue"] = df["MonthIndex"] // 12
        out = _roll_up(df)
        out["Period"] = "Year " + out["Year"].astype(str)
        return out

    df["PeriodValue"] = df["MonthIndex"]
    df["Period"] = df["Date"]
    return df
