"""
Debt Strategy Calculator — Avalanche vs snowball over several debts

Input record:

    {
        "debts": [
            {"name": "Card", "balance": 50000, "interest_rate": 24, "minimum_payment": 2500},
            {"name": "Car", "balance": 300000, "interest_rate": 9, "minimum_payment": 8000},
        ],
        "extra_payment": 5000,
    }

Each debt is validated with DEBT_RULES; its issues and adjustments are
reported under "debts[<index>].<field>".
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final

from fincalc.calculators.base import Calculator, CalculatorConfig, money
from fincalc.core.contracts.validators import (
    FieldAdjustment,
    FieldIssue,
    RuleValidator,
    ValidationMode,
)
from fincalc.core.domain.debt import Debt, StrategyResult
from fincalc.engine.debt import MAX_PAYOFF_MONTHS, compare_strategies

logger = logging.getLogger(__name__)

DEBT_RULES: Final[dict[str, Any]] = {
    "fields": {
        "balance": {"type": "number", "required": True, "minimum": 0, "maximum": 1e12, "absolute": True},
        "interest_rate": {"type": "number", "required": True, "minimum": 0, "maximum": 100},
        "minimum_payment": {"type": "number", "required": True, "exclusive_minimum": 0},
    },
    "checks": [
        {
            "kind": "covers_interest",
            "field": "minimum_payment",
            "balance": "balance",
            "rate": "interest_rate",
            "margin": 1.0,
            "message": "Minimum payment must be greater than the monthly interest",
        },
    ],
}

_DEBT_VALIDATOR: Final = RuleValidator(DEBT_RULES)


@dataclass(frozen=True)
class DebtStrategyConfig(CalculatorConfig):
    max_periods: int = MAX_PAYOFF_MONTHS


def _strategy(result: StrategyResult) -> dict[str, Any]:
    return {
        "months": result.months,
        "total_interest": money(result.total_interest),
        "total_paid": money(result.total_paid),
        "status": result.status.value,
        "payoff_order": [
            {"name": event.name, "month": event.month, "interest_paid": money(event.interest_paid)}
            for event in result.payoff_order
        ],
    }


class DebtStrategyCalculator(Calculator):
    name = "debt_strategy"
    config_class = DebtStrategyConfig
    RULES = {
        "fields": {
            "extra_payment": {"type": "number", "minimum": 0, "default": 0},
        },
    }

    def _validate_extra(
        self,
        values: dict[str, Any],
        mode: ValidationMode,
    ) -> tuple[dict[str, Any], list[FieldIssue], list[FieldAdjustment]]:
        raw = values.get("debts")
        issues: list[FieldIssue] = []
        adjustments: list[FieldAdjustment] = []

        if not isinstance(raw, (list, tuple)) or not raw:
            if mode is ValidationMode.STRICT:
                return values, [FieldIssue("debts", "At least one debt is required")], []
            adjustments.append(FieldAdjustment("debts", raw, [], "no debts given"))
            return {**values, "debts": []}, [], adjustments

        debts: list[Debt] = []
        for index, item in enumerate(raw):
            prefix = f"debts[{index}]"
            if not isinstance(item, Mapping):
                if mode is ValidationMode.STRICT:
                    issues.append(FieldIssue(prefix, "Each debt must be a record"))
                else:
                    adjustments.append(FieldAdjustment(prefix, item, None, "not a record, skipped"))
                continue

            outcome = _DEBT_VALIDATOR.validate(item, mode)
            issues.extend(FieldIssue(f"{prefix}.{i.field}", i.message) for i in outcome.errors)
            adjustments.extend(
                FieldAdjustment(f"{prefix}.{a.field}", a.original, a.adjusted, a.reason)
                for a in outcome.adjustments
            )
            if not outcome.ok:
                continue

            debt = outcome.value
            if debt["balance"] <= 0:
                continue
            debts.append(
                Debt(
                    name=str(item.get("name") or f"Debt {index + 1}"),
                    balance=debt["balance"],
                    annual_rate_percent=debt["interest_rate"],
                    minimum_payment=debt["minimum_payment"],
                )
            )

        return {**values, "debts": debts}, issues, adjustments

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        debts: list[Debt] = values["debts"]
        comparison = compare_strategies(debts, values["extra_payment"], max_periods=self.config.max_periods)

        logger.debug(
            "compared %d debts: avalanche %d months, snowball %d months",
            len(debts),
            comparison.avalanche.months,
            comparison.snowball.months,
        )

        return {
            "total_debt": money(sum(debt.balance for debt in debts)),
            "monthly_budget": money(sum(debt.minimum_payment for debt in debts) + values["extra_payment"]),
            "avalanche": _strategy(comparison.avalanche),
            "snowball": _strategy(comparison.snowball),
            "interest_difference": money(comparison.interest_difference),
            "recommended": comparison.recommended.value,
        }
