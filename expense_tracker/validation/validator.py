"""
Expense Input Validation

DESIGN DECISION: Validation reports problems, it never silently fixes them.
Each check produces a ValidationIssue; the store turns an invalid result
into a ValidationError and leaves its collection untouched.

Amounts arrive from forms as strings, ints, floats or Decimals. They are
normalized to a two-place Decimal here so the store only ever sees clean
values.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from expense_tracker.models.expense import (
    ExpenseCategory,
    ValidationIssue,
    ValidationResult,
    round_amount,
)


class ExpenseValidator:
    """Validates amounts and categories for create and update."""

    def _validate_amount(
        self,
        raw: Any,
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Parse and check an amount.

        Returns: (normalized_amount_or_None, list_of_issues)
        """
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                suggested_fix="Enter how much you spent",
            )]

        if isinstance(raw, bool):
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a number",
            )]

        try:
            value = Decimal(raw.strip()) if isinstance(raw, str) else Decimal(str(raw))
        except (InvalidOperation, TypeError, ValueError):
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount must be a number, got {raw!r}",
            )]

        if not value.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message="Amount must be a finite number",
            )]

        rounded = round_amount(value)
        if rounded <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="not_positive",
                message="Amount must be greater than 0",
                suggested_fix="Enter at least 0.01",
            )]

        return rounded, []

    def _validate_category(
        self,
        raw: Any,
    ) -> tuple[Optional[ExpenseCategory], list[ValidationIssue]]:
        """Check a category against the closed enumeration."""
        if isinstance(raw, ExpenseCategory):
            return raw, []

        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Please select a category",
            )]

        try:
            return ExpenseCategory(raw), []
        except ValueError:
            allowed = ", ".join(c.value for c in ExpenseCategory)
            return None, [ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Unknown category: {raw!r}",
                suggested_fix=f"Use one of: {allowed}",
            )]

    def validate_new(self, amount: Any, category: Any) -> ValidationResult:
        """Validate the input of a new expense."""
        normalized_amount, amount_issues = self._validate_amount(amount)
        normalized_category, category_issues = self._validate_category(category)
        issues = amount_issues + category_issues

        return ValidationResult(
            is_valid=not any(issue.severity == "error" for issue in issues),
            issues=issues,
            amount=normalized_amount,
            category=normalized_category,
        )

    def validate_amount(self, amount: Any) -> ValidationResult:
        """Validate a replacement amount for an existing expense."""
        normalized_amount, issues = self._validate_amount(amount)
        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            amount=normalized_amount,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short multi-line text for showing a failed result in the UI."""
        if result.is_valid:
            return "All checks passed."

        lines = []
        for issue in result.issues:
            lines.append(f"• {issue.message}")
            if issue.suggested_fix:
                lines.append(f"  {issue.suggested_fix}")
        return "\n".join(lines)
