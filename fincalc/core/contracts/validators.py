"""
Rule-Table Validators — Declarative input validation and normalization

Every calculator declares its inputs as a rule table instead of hand-written
if-chains. One validator interprets the table in one of two modes:

- STRICT: values are checked against a JSON Schema generated from the table
  (jsonschema Draft 2020-12, all errors collected through iter_errors);
  any failure is reported as a FieldIssue and the engine must not run.
- LENIENT: values are repaired (defaults, sign dropped, clamped to bounds,
  integers rounded, bad enum values replaced) and every repair is recorded
  as a FieldAdjustment. Always succeeds.

Rule table format:

    {
        "fields": {
            "principal": {"type": "number", "required": True,
                          "exclusive_minimum": 0, "maximum": 1e12,
                          "default": 100000, "label": "Loan amount"},
            "frequency": {"type": "enum", "choices": ["monthly", "yearly"],
                          "default": "monthly"},
        },
        "checks": [
            {"kind": "less_than", "field": "down_payment", "other": "home_price"},
            {"kind": "covers_interest", "field": "minimum_payment",
             "balance": "total_debt", "rate": "interest_rate"},
        ],
    }

Rule tables are validated against RULE_TABLE_SCHEMA when a RuleValidator is
built; a malformed table is a programmer error (RuleConfigurationError).

KEY INVARIANTS:
1. The mode is always passed explicitly, never inferred from the input
2. Strict never modifies a value it rejects; lenient never rejects
3. Keys not declared in the table pass through untouched
4. validate() itself never raises for any user input
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

import jsonschema
from jsonschema import Draft202012Validator

from fincalc.core.math.coercion import coerce, looks_numeric

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Margin applied by lenient cross-field repairs when a check gives none
DEFAULT_CHECK_MARGIN: Final[float] = 0.01

# Periods per year assumed by covers_interest checks
DEFAULT_PERIODS_PER_YEAR: Final[int] = 12

FIELD_TYPES: Final[tuple[str, ...]] = ("number", "integer", "enum")
CHECK_KINDS: Final[tuple[str, ...]] = ("less_than", "greater_than", "covers_interest")


# =============================================================================
# META-SCHEMA
# =============================================================================

RULE_TABLE_SCHEMA: Final[dict[str, Any]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["fields"],
    "additionalProperties": False,
    "properties": {
        "fields": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": {"$ref": "#/$defs/field"},
        },
        "checks": {"type": "array", "items": {"$ref": "#/$defs/check"}},
    },
    "$defs": {
        "field": {
            "type": "object",
            "required": ["type"],
            "additionalProperties": False,
            "properties": {
                "type": {"enum": list(FIELD_TYPES)},
                "required": {"type": "boolean"},
                "minimum": {"type": "number"},
                "maximum": {"type": "number"},
                "exclusive_minimum": {"type": "number"},
                "choices": {
                    "type": "array",
                    "items": {"type": "string"},
                    "minItems": 1,
                    "uniqueItems": True,
                },
                "default": {"type": ["number", "string"]},
                "zero_is_missing": {"type": "boolean"},
                "absolute": {"type": "boolean"},
                "label": {"type": "string", "minLength": 1},
                "message": {"type": "string", "minLength": 1},
            },
            "if": {"properties": {"type": {"const": "enum"}}},
            "then": {"required": ["choices"]},
        },
        "check": {
            "type": "object",
            "required": ["kind", "field"],
            "additionalProperties": False,
            "properties": {
                "kind": {"enum": list(CHECK_KINDS)},
                "field": {"type": "string"},
                "other": {"type": "string"},
                "balance": {"type": "string"},
                "rate": {"type": "string"},
                "periods_per_year": {"type": "integer", "minimum": 1},
                "margin": {"type": "number", "exclusiveMinimum": 0},
                "message": {"type": "string", "minLength": 1},
            },
            "allOf": [
                {
                    "if": {"properties": {"kind": {"enum": ["less_than", "greater_than"]}}},
                    "then": {"required": ["other"]},
                },
                {
                    "if": {"properties": {"kind": {"const": "covers_interest"}}},
                    "then": {"required": ["balance", "rate"]},
                },
            ],
        },
    },
}

_META_VALIDATOR: Final = Draft202012Validator(RULE_TABLE_SCHEMA)


# =============================================================================
# TYPES
# =============================================================================


class ValidationMode(str, Enum):
    """Validation policy of a calculator."""

    STRICT = "strict"
    LENIENT = "lenient"


class RuleConfigurationError(ValueError):
    """A rule table is malformed (programmer error)."""


@dataclass(frozen=True)
class FieldIssue:
    """A strict-mode rejection of one field."""

    field: str
    message: str


@dataclass(frozen=True)
class FieldAdjustment:
    """A lenient-mode repair of one field."""

    field: str
    original: Any
    adjusted: Any
    reason: str


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating one parameter record.

    ok is False only in strict mode; value then holds whatever could be
    normalized and must not be fed to an engine.
    """

    ok: bool
    value: dict[str, Any]
    errors: tuple[FieldIssue, ...] = ()
    adjustments: tuple[FieldAdjustment, ...] = ()
    mode: ValidationMode = ValidationMode.STRICT

    def error_map(self) -> dict[str, str]:
        """{field: first message} for display."""
        result: dict[str, str] = {}
        for issue in self.errors:
            result.setdefault(issue.field, issue.message)
        return result


@dataclass
class _LenientState:
    value: dict[str, Any]
    adjustments: list[FieldAdjustment] = field(default_factory=list)

    def adjust(self, name: str, original: Any, adjusted: Any, reason: str) -> None:
        self.value[name] = adjusted
        self.adjustments.append(FieldAdjustment(name, original, adjusted, reason))
        logger.debug("lenient adjustment %s: %r -> %r (%s)", name, original, adjusted, reason)


# =============================================================================
# RULE VALIDATOR
# =============================================================================


class RuleValidator:
    """
    Validator for one rule table.

    Build once per calculator (module level) and call validate() per request.
    """

    def __init__(self, rules: Mapping[str, Any]):
        """
        Args:
            rules: Rule table (see module docstring)

        Raises:
            RuleConfigurationError: If the table is malformed
        """
        check_rule_table(rules)
        self.fields: dict[str, dict[str, Any]] = {
            name: dict(rule) for name, rule in rules["fields"].items()
        }
        self.checks: tuple[dict[str, Any], ...] = tuple(
            dict(check) for check in rules.get("checks", ())
        )
        self.schema = build_field_schema(rules)
        self.validator = Draft202012Validator(self.schema)

    # -------------------------------------------------------------------------
    # PUBLIC
    # -------------------------------------------------------------------------

    def validate(self, params: Mapping[str, Any] | None, mode: ValidationMode | str) -> ValidationOutcome:
        """
        Validate (strict) or normalize (lenient) a parameter record.

        Args:
            params: Raw calculator record (None is treated as empty)
            mode: ValidationMode or its string value

        Returns:
            ValidationOutcome
        """
        mode = ValidationMode(mode)
        record = dict(params or {})

        if mode is ValidationMode.STRICT:
            outcome = self._validate_strict(record)
        else:
            outcome = self._normalize_lenient(record)

        logger.debug(
            "validated %d fields mode=%s ok=%s errors=%d adjustments=%d",
            len(self.fields),
            mode.value,
            outcome.ok,
            len(outcome.errors),
            len(outcome.adjustments),
        )
        return outcome

    def label(self, name: str) -> str:
        rule = self.fields.get(name, {})
        return rule.get("label") or name.replace("_", " ").capitalize()

    # -------------------------------------------------------------------------
    # STRICT
    # -------------------------------------------------------------------------

    def _validate_strict(self, record: dict[str, Any]) -> ValidationOutcome:
        candidate = dict(record)
        rejected: dict[str, FieldIssue] = {}

        for name, rule in self.fields.items():
            raw = record.get(name)
            if _is_missing(raw) or (rule.get("zero_is_missing") and _is_numeric_zero(raw)):
                candidate.pop(name, None)
                if not rule.get("required", False):
                    candidate[name] = _optional_default(rule)
                continue

            if rule["type"] == "enum":
                candidate[name] = str(raw).strip().lower()
            elif looks_numeric(raw):
                number = coerce(raw)
                if rule["type"] == "integer" and float(number).is_integer():
                    candidate[name] = int(number)
                else:
                    candidate[name] = number
            else:
                # NaN, inf and non-numeric text never reach the schema
                rejected[name] = FieldIssue(name, self._message(name, "type", None))

        schema_candidate = {key: value for key, value in candidate.items() if key not in rejected}
        issues = self._schema_issues(schema_candidate, rejected)

        if not issues:
            issues = self._check_issues(candidate)

        if issues:
            return ValidationOutcome(
                ok=False,
                value=candidate,
                errors=tuple(issues),
                mode=ValidationMode.STRICT,
            )

        return ValidationOutcome(ok=True, value=candidate, mode=ValidationMode.STRICT)

    def _schema_issues(
        self,
        candidate: dict[str, Any],
        rejected: Mapping[str, FieldIssue],
    ) -> list[FieldIssue]:
        reported: dict[str, FieldIssue] = dict(rejected)

        for error in self.validator.iter_errors(candidate):
            if error.validator == "required":
                for name in error.validator_value:
                    if name not in error.instance and name not in reported:
                        reported[name] = FieldIssue(name, self._message(name, "required", None))
                continue

            if not error.path:
                continue
            name = str(error.path[0])
            if name not in reported:
                reported[name] = FieldIssue(
                    name, self._message(name, str(error.validator), error.validator_value)
                )

        order = list(self.fields)
        return sorted(reported.values(), key=lambda issue: order.index(issue.field))

    def _check_issues(self, value: dict[str, Any]) -> list[FieldIssue]:
        issues: list[FieldIssue] = []

        for check in self.checks:
            name = check["field"]
            current = float(value[name])

            if check["kind"] == "less_than":
                bound = float(value[check["other"]])
                if not current < bound:
                    issues.append(FieldIssue(name, check.get("message") or (
                        f"{self.label(name)} must be less than {self.label(check['other'])}"
                    )))
            elif check["kind"] == "greater_than":
                bound = float(value[check["other"]])
                if not current > bound:
                    issues.append(FieldIssue(name, check.get("message") or (
                        f"{self.label(name)} must be greater than {self.label(check['other'])}"
                    )))
            else:
                interest = _period_interest(value, check)
                if not current > interest:
                    issues.append(FieldIssue(name, check.get("message") or (
                        f"{self.label(name)} must exceed the periodic interest of {interest:.2f}"
                    )))

        return issues

    def _message(self, name: str, keyword: str, bound: Any) -> str:
        rule = self.fields[name]
        if rule.get("message"):
            return rule["message"]

        label = self.label(name)
        if keyword == "required":
            return f"{label} is required"
        if keyword == "type":
            if rule["type"] == "integer":
                return f"{label} must be a whole number"
            return f"{label} must be a number"
        if keyword == "minimum":
            return f"{label} must be at least {bound:g}"
        if keyword == "exclusiveMinimum":
            return f"{label} must be greater than {bound:g}"
        if keyword == "maximum":
            return f"{label} must be at most {bound:g}"
        if keyword == "enum":
            return f"{label} must be one of: {', '.join(bound)}"
        return f"{label} is invalid"

    # -------------------------------------------------------------------------
    # LENIENT
    # -------------------------------------------------------------------------

    def _normalize_lenient(self, record: dict[str, Any]) -> ValidationOutcome:
        state = _LenientState(value=dict(record))

        for name, rule in self.fields.items():
            if rule["type"] == "enum":
                self._normalize_enum(state, name, rule, record.get(name))
            else:
                self._normalize_number(state, name, rule, record.get(name))

        for check in self.checks:
            self._repair_check(state, check)

        return ValidationOutcome(
            ok=True,
            value=state.value,
            adjustments=tuple(state.adjustments),
            mode=ValidationMode.LENIENT,
        )

    def _normalize_enum(self, state: _LenientState, name: str, rule: dict[str, Any], raw: Any) -> None:
        choices = rule["choices"]
        fallback = rule.get("default", choices[0])

        if _is_missing(raw):
            state.adjust(name, raw, fallback, "missing")
            return

        normalized = str(raw).strip().lower()
        if normalized in choices:
            state.value[name] = normalized
        else:
            state.adjust(name, raw, fallback, "not an allowed choice")

    def _normalize_number(self, state: _LenientState, name: str, rule: dict[str, Any], raw: Any) -> None:
        default = rule.get("default")
        number = coerce(raw)
        reasons: list[str] = []

        if rule.get("absolute") and number < 0:
            number = -number
            reasons.append("sign dropped")

        missing = _is_missing(raw) or (not looks_numeric(raw) and number == 0.0)
        if number == 0.0 and (missing or rule.get("zero_is_missing")):
            if default is not None:
                number = float(default)
                reasons.append("missing, default used")
            elif missing:
                reasons.append("missing")

        exclusive_minimum = rule.get("exclusive_minimum")
        if exclusive_minimum is not None and number <= exclusive_minimum:
            if default is not None and float(default) > exclusive_minimum:
                number = float(default)
            else:
                number = float(exclusive_minimum)
            reasons.append("not above lower bound")

        minimum = rule.get("minimum")
        if minimum is not None and number < minimum:
            number = float(minimum)
            reasons.append("raised to minimum")

        maximum = rule.get("maximum")
        if maximum is not None and number > maximum:
            number = float(maximum)
            reasons.append("lowered to maximum")

        adjusted: float | int = number
        if rule["type"] == "integer":
            adjusted = int(math.floor(number + 0.5))
            if adjusted != number:
                reasons.append("rounded to whole number")

        if reasons or not looks_numeric(raw):
            state.adjust(name, raw, adjusted, ", ".join(reasons) or "parsed leniently")
        else:
            state.value[name] = adjusted

    def _repair_check(self, state: _LenientState, check: dict[str, Any]) -> None:
        name = check["field"]
        current = float(state.value[name])
        margin = float(check.get("margin", DEFAULT_CHECK_MARGIN))

        if check["kind"] == "less_than":
            bound = float(state.value[check["other"]])
            if not current < bound:
                state.adjust(name, current, max(0.0, bound - margin), f"lowered below {check['other']}")
        elif check["kind"] == "greater_than":
            bound = float(state.value[check["other"]])
            if not current > bound:
                state.adjust(name, current, bound + margin, f"raised above {check['other']}")
        else:
            interest = _period_interest(state.value, check)
            if not current > interest:
                state.adjust(name, current, interest + margin, "raised to cover periodic interest")


# =============================================================================
# RULE TABLE HELPERS
# =============================================================================


def check_rule_table(rules: Mapping[str, Any]) -> None:
    """
    Validate a rule table against RULE_TABLE_SCHEMA and its cross-references.

    Raises:
        RuleConfigurationError: On the first batch of problems found
    """
    problems = [
        f"{'/'.join(str(p) for p in error.path) or '<root>'}: {error.message}"
        for error in _META_VALIDATOR.iter_errors(rules)
    ]
    if problems:
        raise RuleConfigurationError("Invalid rule table: " + "; ".join(problems))

    fields = rules["fields"]

    for name, rule in fields.items():
        minimum = rule.get("minimum", rule.get("exclusive_minimum"))
        maximum = rule.get("maximum")
        if minimum is not None and maximum is not None and minimum > maximum:
            problems.append(f"{name}: lower bound {minimum} exceeds maximum {maximum}")

        if rule["type"] == "enum":
            default = rule.get("default")
            if default is not None and default not in rule["choices"]:
                problems.append(f"{name}: default {default!r} is not among choices")
        elif isinstance(rule.get("default"), str):
            problems.append(f"{name}: numeric field has a string default")

    for index, check in enumerate(rules.get("checks", ())):
        for key in ("field", "other", "balance", "rate"):
            ref = check.get(key)
            if ref is None:
                continue
            if ref not in fields:
                problems.append(f"checks/{index}: {key} {ref!r} is not a declared field")
            elif fields[ref]["type"] == "enum":
                problems.append(f"checks/{index}: {key} {ref!r} is not numeric")

    if problems:
        raise RuleConfigurationError("Invalid rule table: " + "; ".join(problems))


def build_field_schema(rules: Mapping[str, Any]) -> dict[str, Any]:
    """
    JSON Schema (Draft 2020-12) for the normalized field values of a table.

    Examples:
        >>> build_field_schema({"fields": {"n": {"type": "integer", "required": True, "minimum": 1}}})["properties"]
        {'n': {'type': 'integer', 'minimum': 1}}
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for name, rule in rules["fields"].items():
        if rule["type"] == "enum":
            prop: dict[str, Any] = {"enum": list(rule["choices"])}
        else:
            prop = {"type": rule["type"]}
            if "minimum" in rule:
                prop["minimum"] = rule["minimum"]
            if "exclusive_minimum" in rule:
                prop["exclusiveMinimum"] = rule["exclusive_minimum"]
            if "maximum" in rule:
                prop["maximum"] = rule["maximum"]
        properties[name] = prop

        if rule.get("required", False):
            required.append(name)

    schema: dict[str, Any] = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "type": "object",
        "properties": properties,
    }
    if required:
        schema["required"] = required

    try:
        Draft202012Validator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise RuleConfigurationError(f"Generated schema is invalid: {e.message}") from e

    return schema


def validate(
    params: Mapping[str, Any] | None,
    rules: Mapping[str, Any],
    mode: ValidationMode | str,
) -> ValidationOutcome:
    """One-shot convenience wrapper: RuleValidator(rules).validate(params, mode)."""
    return RuleValidator(rules).validate(params, mode)


# =============================================================================
# INTERNALS
# =============================================================================


def _is_missing(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _is_numeric_zero(raw: Any) -> bool:
    return looks_numeric(raw) and coerce(raw) == 0.0


def _optional_default(rule: Mapping[str, Any]) -> Any:
    default = rule.get("default")
    if rule["type"] == "enum":
        return default if default is not None else rule["choices"][0]
    if default is None:
        return 0 if rule["type"] == "integer" else 0.0
    if rule["type"] == "integer":
        return int(default)
    return float(default)


def _period_interest(value: Mapping[str, Any], check: Mapping[str, Any]) -> float:
    periods_per_year = check.get("periods_per_year", DEFAULT_PERIODS_PER_YEAR)
    balance = float(value[check["balance"]])
    rate = float(value[check["rate"]])
    return balance * rate / 100.0 / periods_per_year
