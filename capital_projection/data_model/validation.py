"""Payload validation run before a projection reaches the engine.

Each helper returns an error message or None; `validate_projection_input`
collects every message so the caller can show them all at once.
"""
from __future__ import annotations

import math
from typing import Any, List

from .inputs import SPENDING_MODES, _extract_payload_value, _is_blank, parse_start_date


def validate_number(
    value: Any,
    field_name: str,
    required: bool = False,
    min_value: float = -math.inf,
    max_value: float = math.inf,
    integer: bool = False,
) -> str | None:
    if _is_blank(value):
        return f"{field_name} is required" if required else None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return f"{field_name} must be a valid number"
    if math.isnan(number):
        return f"{field_name} must be a valid number"
    if integer and not number.is_integer():
        return f"{field_name} must be a whole number"
    if number < min_value:
        return f"{field_name} must be at least {min_value:g}"
    if number > max_value:
        return f"{field_name} must be at most {max_value:g}"
    return None


def validate_string(value: Any, field_name: str, required: bool = False, max_length: int | None = None) -> str | None:
    text = "" if value is None else str(value).strip()
    if not text:
        return f"{field_name} is required" if required else None
    if max_length is not None and len(text) > max_length:
        return f"{field_name} must be at most {max_length} characters"
    return None


def validate_date(value: Any, field_name: str, required: bool = False) -> str | None:
    if _is_blank(value):
        return f"{field_name} is required" if required else None
    try:
        parse_start_date(value)
    except (TypeError, ValueError):
        return f"{field_name} is not a valid date"
    return None


def _validate_schedule(rows: Any, label: str, value_key: str) -> List[str]:
    if rows is None:
        return []
    if not isinstance(rows, list):
        return [f"{label} entries must be a list"]
    errors: List[str] = []
    for index, row in enumerate(rows, start=1):
        prefix = f"{label} {index}"
        if not isinstance(row, dict):
            errors.append(f"{prefix} must be an object")
            continue
        for message in (
            validate_number(row.get(value_key), f"{prefix} {value_key}"),
            validate_number(row.get("year"), f"{prefix} year", min_value=0, integer=True),
            validate_number(row.get("month"), f"{prefix} month", min_value=1, max_value=12, integer=True),
        ):
            if message:
                errors.append(message)
    return errors


def validate_projection_input(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return ["Projection input must be an object"]
    errors: List[str] = []

    def _check(message: str | None) -> None:
        if message:
            errors.append(message)

    _check(validate_string(payload.get("name"), "Projection name", max_length=100))
    _check(
        validate_number(
            _extract_payload_value(payload, "initialCapital", "initial_capital"),
            "Initial capital",
            required=True,
            min_value=0,
        )
    )
    _check(
        validate_number(
            _extract_payload_value(payload, "avgYearlyInvestmentReturn", "avg_yearly_investment_return"),
            "Average yearly investment return",
            required=True,
            min_value=-100,
            max_value=1000,
        )
    )
    _check(
        validate_number(
            _extract_payload_value(payload, "currentAge", "current_age"),
            "Current age",
            required=True,
            min_value=0,
            max_value=150,
            integer=True,
        )
    )
    _check(
        validate_number(
            _extract_payload_value(payload, "annualInflationRate", "annual_inflation_rate"),
            "Annual inflation rate",
            required=True,
            min_value=-100,
            max_value=1000,
        )
    )
    _check(
        validate_date(
            _extract_payload_value(payload, "projectionStartDate", "projection_start_date"),
            "Projection start date",
            required=True,
        )
    )
    _check(
        validate_number(
            _extract_payload_value(payload, "initialMonthlyIncome", "initial_monthly_income"),
            "Initial monthly income",
            required=True,
            min_value=0,
        )
    )

    mode = _extract_payload_value(payload, "spendingMode", "spending_mode", default="single")
    if mode not in SPENDING_MODES:
        errors.append(f"Spending mode must be one of: {', '.join(SPENDING_MODES)}")
    elif mode == "single":
        _check(
            validate_number(
                _extract_payload_value(payload, "totalMonthlySpending", "total_monthly_spending"),
                "Total monthly spending",
                required=True,
                min_value=0,
            )
        )
    else:
        items = _extract_payload_value(payload, "itemizedSpending", "itemized_spending", default=[])
        if not isinstance(items, list):
            items = None
            errors.append("Itemized spending entries must be a list")
        elif not items:
            errors.append("At least one itemized spending category is required")
        for index, item in enumerate(items or [], start=1):
            if not isinstance(item, dict):
                errors.append(f"Itemized spending category {index} must be an object")
                continue
            _check(validate_string(item.get("name"), f"Itemized spending category {index}: Name", required=True))
            _check(
                validate_number(
                    item.get("amount"),
                    f"Itemized spending category {index} amount",
                    required=True,
                    min_value=0,
                )
            )

    errors.extend(
        _validate_schedule(
            _extract_payload_value(payload, "dynamicSpending", "dynamic_spending"), "Spending adjustment", "percentage"
        )
    )
    errors.extend(
        _validate_schedule(_extract_payload_value(payload, "incomeChanges", "income_changes"), "Income change", "amount")
    )
    errors.extend(_validate_schedule(_extract_payload_value(payload, "lumpSums", "lump_sums"), "Lump sum", "amount"))
    return errors
