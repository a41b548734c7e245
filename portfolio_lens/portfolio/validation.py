"""Portfolio validation logic.

Every check returns a (possibly empty) list of issues and never raises; an
empty list means the checked rule holds. Callers decide which issues are fatal.
"""

from __future__ import annotations

import math
import re
from typing import Any, Sequence

import pandas as pd

from portfolio_lens.portfolio.constants import DEFAULT_LIMITS, ValidationLimits
from portfolio_lens.portfolio.data_loader import (
    NUMERIC_FIELDS,
    OPTIONAL_NUMERIC_FIELDS,
    REQUIRED_FIELDS,
    records_to_frame,
)
from portfolio_lens.portfolio.models import (
    Asset,
    AssetCategory,
    AssetType,
    Region,
    ValidationErrorKind,
    ValidationIssue,
)

SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9.\-]{1,20}")


def validate_allocation_sum(assets: Sequence[Asset], limits: ValidationLimits = DEFAULT_LIMITS) -> list[ValidationIssue]:
    total = float(sum(asset.allocation_percentage for asset in assets))
    if not math.isfinite(total) or abs(total - 100.0) > limits.allocation_tolerance:
        return [
            ValidationIssue(
                kind=ValidationErrorKind.INVALID_ALLOCATION_SUM,
                field="allocation_percentage",
                message=f"Portfolio allocation sums to {total:.2f}%, expected 100%",
                suggested_fix="Adjust individual asset allocations to sum to 100%",
            )
        ]
    return []


def validate_allocation_values(assets: Sequence[Asset]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for asset in assets:
        value = asset.allocation_percentage
        if not math.isfinite(value) or value < 0 or value > 100:
            issues.append(
                ValidationIssue(
                    kind=ValidationErrorKind.INVALID_ALLOCATION_VALUE,
                    field="allocation_percentage",
                    message=f"Allocation for {asset.symbol} must be between 0 and 100, received {value}",
                    suggested_fix="Use a non-negative percentage no greater than 100",
                )
            )
    return issues


def validate_dollar_consistency(
    assets: Sequence[Asset],
    portfolio_total: float,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[ValidationIssue]:
    total = float(sum(asset.dollar_amount for asset in assets))
    if abs(total - portfolio_total) > limits.dollar_tolerance:
        return [
            ValidationIssue(
                kind=ValidationErrorKind.INVALID_DOLLAR_CONSISTENCY,
                field="dollar_amount",
                message=f"Asset dollar amounts sum to ${total:.2f}, portfolio total is ${portfolio_total:.2f}",
                suggested_fix="Adjust dollar amounts to match portfolio total",
            )
        ]
    return []


def validate_asset_type(asset_type: str) -> list[ValidationIssue]:
    try:
        AssetType.parse(asset_type)
    except ValueError:
        return [
            ValidationIssue(
                kind=ValidationErrorKind.UNSUPPORTED_ASSET_TYPE,
                field="asset_type",
                message=f"Unsupported asset type: {asset_type}",
                suggested_fix=f"Use one of: {', '.join(item.value for item in AssetType)}",
            )
        ]
    return []


def validate_symbol_format(symbol: str) -> list[ValidationIssue]:
    if not isinstance(symbol, str) or not SYMBOL_PATTERN.fullmatch(symbol):
        return [
            ValidationIssue(
                kind=ValidationErrorKind.INVALID_SYMBOL_FORMAT,
                field="symbol",
                message=f"Invalid symbol format: {symbol}",
                suggested_fix="Use 1-20 characters: letters, digits, period or hyphen",
            )
        ]
    return []


def validate_asset_count(assets: Sequence[Asset], limits: ValidationLimits = DEFAULT_LIMITS) -> list[ValidationIssue]:
    count = len(assets)
    if count < limits.min_assets or count > limits.max_assets:
        return [
            ValidationIssue(
                kind=ValidationErrorKind.INVALID_ASSET_COUNT,
                field="assets",
                message=(
                    f"Portfolio holds {count} assets; expected between "
                    f"{limits.min_assets} and {limits.max_assets}"
                ),
                suggested_fix="Add or consolidate holdings",
            )
        ]
    return []


def check_concentration_risk(assets: Sequence[Asset], limits: ValidationLimits = DEFAULT_LIMITS) -> list[ValidationIssue]:
    if not assets:
        return []
    issues: list[ValidationIssue] = []
    max_allocation = max(asset.allocation_percentage for asset in assets)
    if max_allocation > limits.max_single_asset_allocation:
        issues.append(
            ValidationIssue(
                kind=ValidationErrorKind.CONCENTRATION_WARNING,
                field="allocation_percentage",
                message=(
                    f"Single asset allocation of {max_allocation:.1f}% exceeds "
                    f"{limits.max_single_asset_allocation:.0f}% limit"
                ),
                suggested_fix="Consider diversifying to reduce concentration risk",
            )
        )
    cash_allocation = sum(a.allocation_percentage for a in assets if a.asset_type is AssetType.CASH)
    if cash_allocation > limits.max_cash_allocation:
        issues.append(
            ValidationIssue(
                kind=ValidationErrorKind.CONCENTRATION_WARNING,
                field="allocation_percentage",
                message=(
                    f"Cash allocation of {cash_allocation:.1f}% exceeds "
                    f"{limits.max_cash_allocation:.0f}% limit"
                ),
                suggested_fix="Consider investing excess cash for better returns",
            )
        )
    return issues


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def validate_asset_records(records: Sequence[dict[str, Any]]) -> list[ValidationIssue]:
    """Check raw caller records before they are parsed into assets."""
    frame = records_to_frame(records)
    issues: list[ValidationIssue] = []
    for idx, row in enumerate(frame.to_dict(orient="records")):
        row_num = idx + 1
        missing = [
            name
            for name in REQUIRED_FIELDS
            if _is_blank(row.get(name)) or (name in NUMERIC_FIELDS and not _is_number(row.get(name)))
        ]
        if missing:
            issues.append(
                ValidationIssue(
                    kind=ValidationErrorKind.MISSING_REQUIRED_FIELD,
                    field=", ".join(missing),
                    row=row_num,
                    message=f"Row {row_num}: Missing required fields: {', '.join(missing)}",
                    suggested_fix="Ensure symbol, name, asset type, allocation % and dollar amount are provided",
                )
            )

        invalid = [
            name
            for name in OPTIONAL_NUMERIC_FIELDS
            if not _is_blank(row.get(name)) and not _is_number(row.get(name))
        ]
        if invalid:
            issues.append(
                ValidationIssue(
                    kind=ValidationErrorKind.INVALID_NUMERIC_VALUE,
                    field=", ".join(invalid),
                    row=row_num,
                    message=f"Row {row_num}: Non-numeric values for: {', '.join(invalid)}",
                    suggested_fix="Provide plain numbers for optional metrics or leave them empty",
                )
            )

        if not _is_blank(row.get("symbol")):
            for issue in validate_symbol_format(str(row["symbol"]).strip()):
                issues.append(_with_row(issue, row_num))
        if not _is_blank(row.get("asset_type")):
            for issue in validate_asset_type(str(row["asset_type"])):
                issues.append(_with_row(issue, row_num))
        for name, enum_type in (("asset_category", AssetCategory), ("geographic_region", Region)):
            value = row.get(name)
            if _is_blank(value):
                continue
            try:
                enum_type.parse(str(value))
            except ValueError:
                issues.append(
                    ValidationIssue(
                        kind=ValidationErrorKind.UNSUPPORTED_ASSET_TYPE,
                        field=name,
                        row=row_num,
                        message=f"Row {row_num}: Unsupported {name}: {value}",
                        suggested_fix=f"Use one of: {', '.join(item.value for item in enum_type)}",
                    )
                )
    return issues


def _with_row(issue: ValidationIssue, row: int) -> ValidationIssue:
    return ValidationIssue(
        kind=issue.kind,
        message=f"Row {row}: {issue.message}",
        field=issue.field,
        row=row,
        suggested_fix=issue.suggested_fix,
    )


def validate_portfolio(
    assets: Sequence[Asset],
    total_value: float | None = None,
    limits: ValidationLimits = DEFAULT_LIMITS,
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    issues.extend(validate_asset_count(assets, limits))
    issues.extend(validate_allocation_values(assets))
    issues.extend(validate_allocation_sum(assets, limits))
    if total_value is not None:
        issues.extend(validate_dollar_consistency(assets, total_value, limits))
    for asset in assets:
        issues.extend(validate_asset_type(asset.asset_type.value))
        issues.extend(validate_symbol_format(asset.symbol))
    issues.extend(check_concentration_risk(assets, limits))
    return issues


def has_blocking_issues(issues: Sequence[ValidationIssue]) -> bool:
    return any(not issue.is_advisory for issue in issues)
