"""Wizard engine - condition evaluation and validation for schema-driven forms."""

from .evaluator import ConditionEvaluator
from .loader import ConfigLoader
from .validator import FormValidator
from .schema import (
    ComparisonOperator,
    Condition,
    FieldGroup,
    FieldValidationResult,
    RuleType,
    ValidationResult,
    ValidationRule,
    WizardConfig,
    WizardField,
    WizardStep,
)

__all__ = [
    'ConditionEvaluator',
    'ConfigLoader',
    'FormValidator',
    'ComparisonOperator',
    'Condition',
    'FieldGroup',
    'FieldValidationResult',
    'RuleType',
    'ValidationResult',
    'ValidationRule',
    'WizardConfig',
    'WizardField',
    'WizardStep',
]
