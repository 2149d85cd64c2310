"""
Calculator base — validate, compute, report

Every calculator follows the same pipeline:

    params -> RuleValidator (strict | lenient, from config) -> engine -> record

A calculator declares:
- name: registry key
- RULES: declarative rule table (see fincalc.core.contracts.validators)
- config_class: frozen dataclass with validation_mode and domain constants
- _compute(values): engine call on validated values, returns a plain dict

Headline currency figures are rounded with money() at this boundary only;
schedules and breakdowns are reported unrounded.
"""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any, ClassVar

from fincalc.core.contracts.validators import (
    FieldAdjustment,
    FieldIssue,
    RuleValidator,
    ValidationMode,
)
from fincalc.core.domain.projection import ProjectionResult
from fincalc.core.domain.schedule import AmortizationResult
from fincalc.core.math.numerical_safeguards import CURRENCY_DECIMALS, round_to_precision

logger = logging.getLogger(__name__)

# Decimal places for percentages and ratios in reports
RATIO_DECIMALS = 2


def money(value: float) -> float:
    """Round a currency figure for reporting."""
    return round_to_precision(value, CURRENCY_DECIMALS)


def ratio(value: float) -> float:
    """Round a percentage or multiple for reporting."""
    return round_to_precision(value, RATIO_DECIMALS)


def schedule_rows(result: AmortizationResult) -> list[dict[str, Any]]:
    return [entry.model_dump(mode="json") for entry in result.schedule]


def breakdown_rows(result: ProjectionResult) -> list[dict[str, Any]]:
    return [period.model_dump(mode="json") for period in result.breakdown]


# =============================================================================
# CONFIG / RESULT
# =============================================================================


@dataclass(frozen=True)
class CalculatorConfig:
    """Settings shared by all calculators."""

    validation_mode: ValidationMode = ValidationMode.STRICT


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of one calculator call."""

    calculator: str
    ok: bool
    mode: ValidationMode
    result: dict[str, Any] | None
    errors: tuple[FieldIssue, ...] = ()
    adjustments: tuple[FieldAdjustment, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "calculator": self.calculator,
            "ok": self.ok,
            "mode": self.mode.value,
            "result": self.result,
            "errors": [asdict(issue) for issue in self.errors],
            "adjustments": [asdict(adjustment) for adjustment in self.adjustments],
        }


# =============================================================================
# CALCULATOR
# =============================================================================


class Calculator:
    """Base class of all calculator facades."""

    name: ClassVar[str] = ""
    RULES: ClassVar[dict[str, Any]] = {}
    config_class: ClassVar[type[CalculatorConfig]] = CalculatorConfig

    def __init__(self, config: CalculatorConfig | None = None):
        """
        Args:
            config: Calculator configuration (defaults to config_class())
        """
        self.config = config or self.config_class()
        self.validator = RuleValidator(self.RULES)

    def calculate(
        self,
        params: Mapping[str, Any] | None,
        mode: ValidationMode | str | None = None,
    ) -> CalculationResult:
        """
        Validate params and run the engine.

        Args:
            params: Raw input record
            mode: Overrides config.validation_mode for this call

        Returns:
            CalculationResult; result is None when strict validation fails
        """
        effective_mode = ValidationMode(mode) if mode is not None else self.config.validation_mode
        outcome = self.validator.validate(params, effective_mode)

        issues = list(outcome.errors)
        adjustments = list(outcome.adjustments)
        values = outcome.value

        if outcome.ok:
            values, extra_issues, extra_adjustments = self._validate_extra(values, effective_mode)
            issues.extend(extra_issues)
            adjustments.extend(extra_adjustments)

        if issues:
            logger.debug("%s rejected: %s", self.name, "; ".join(f"{i.field}: {i.message}" for i in issues))
            return CalculationResult(
                calculator=self.name,
                ok=False,
                mode=effective_mode,
                result=None,
                errors=tuple(issues),
                adjustments=tuple(adjustments),
            )

        result = self._compute(values)
        logger.debug("%s computed in %s mode", self.name, effective_mode.value)

        return CalculationResult(
            calculator=self.name,
            ok=True,
            mode=effective_mode,
            result=result,
            adjustments=tuple(adjustments),
        )

    def _validate_extra(
        self,
        values: dict[str, Any],
        mode: ValidationMode,
    ) -> tuple[dict[str, Any], list[FieldIssue], list[FieldAdjustment]]:
        """Hook for inputs a flat rule table cannot express (e.g. lists)."""
        return values, [], []

    def _compute(self, values: dict[str, Any]) -> dict[str, Any]:
        raise NotImplementedError
