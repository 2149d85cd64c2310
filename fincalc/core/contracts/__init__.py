"""Contracts — rule-table validation of calculator inputs."""

from fincalc.core.contracts.validators import (
    RULE_TABLE_SCHEMA,
    FieldAdjustment,
    FieldIssue,
    RuleConfigurationError,
    RuleValidator,
    ValidationMode,
    ValidationOutcome,
    build_field_schema,
    check_rule_table,
    validate,
)

__all__ = [
    "RULE_TABLE_SCHEMA",
    "FieldAdjustment",
    "FieldIssue",
    "RuleConfigurationError",
    "RuleValidator",
    "ValidationMode",
    "ValidationOutcome",
    "build_field_schema",
    "check_rule_table",
    "validate",
]
