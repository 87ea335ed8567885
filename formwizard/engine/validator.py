"""FormValidator - field, step and wizard level validation."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union
from .coercion import is_empty_value, is_falsy, is_file_like, to_number, to_string
from .evaluator import ConditionEvaluator
from .schema import (
    FieldValidationResult,
    RuleType,
    ValidationResult,
    ValidationRule,
    WizardConfig,
    WizardField,
    WizardStep,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+\Z')
STEP_ERROR_KEY = '_step'
DEFAULT_STEP_ERROR = 'Cannot proceed. Please verify your data.'


class FormValidator:
    """
    Validates form data against a wizard configuration.

    Hidden steps, hidden groups, hidden fields and disabled fields never
    block. Like the evaluator, nothing here raises for bad input: unknown
    rule types log a warning and pass, unknown steps and field names are
    vacuously valid.
    """

    def __init__(self, config: Union[WizardConfig, Mapping], form_data: Optional[Dict[str, Any]] = None):
        """
        Initialize the validator.

        Args:
            config: WizardConfig, or a mapping in authoring format
            form_data: Current form data (None is treated as empty)

        Raises:
            ValidationError: If a mapping config doesn't match the schema
        """
        if not isinstance(config, WizardConfig):
            config = WizardConfig.model_validate(config)
        self.config = config
        self.form_data: Dict[str, Any] = form_data or {}
        self.evaluator = ConditionEvaluator(self.form_data)

    def update_form_data(self, form_data: Optional[Dict[str, Any]]) -> None:
        """Replace the snapshot used by both the validator and its evaluator."""
        self.form_data = form_data or {}
        self.evaluator.update_form_data(self.form_data)

    def _get_step(self, step_index: int) -> Optional[WizardStep]:
        if not isinstance(step_index, int) or not 0 <= step_index < len(self.config.steps):
            return None
        return self.config.steps[step_index]

    def _is_step_visible(self, step: WizardStep) -> bool:
        return self.evaluator.is_field_visible(step.show_if, step.hide_if)

    def _is_field_active(self, field: WizardField) -> bool:
        return (
            self.evaluator.is_field_visible(field.show_if, field.hide_if)
            and not self.evaluator.is_field_disabled(field.disabled, field.disabled_if)
        )

    def _get_fields(self, step_index: Optional[int] = None) -> List[WizardField]:
        """
        Collect fields from one step (or all steps) whose step and group are visible.

        A field's own show_if/hide_if is NOT checked here; callers check it.
        """
        if step_index is not None:
            steps = [self._get_step(step_index)]
        else:
            steps = self.config.steps

        fields: List[WizardField] = []
        for step in steps:
            if step is None:
                continue

            if not self._is_step_visible(step):
                continue

            for group in step.field_groups:
                if self.evaluator.is_field_visible(group.show_if, group.hide_if):
                    fields.extend(group.fields)

        return fields

    def _is_empty(self, value: Any) -> bool:
        # An attached file is a value even when it exposes no keys
        if is_file_like(value):
            return False
        return is_empty_value(value)

    def validate_field(self, field: Union[WizardField, Mapping], value: Any) -> FieldValidationResult:
        """
        Run a field's rules in order; the first failure wins.

        Hidden or disabled fields are always valid. A mapping field is read
        in authoring format.

        Raises:
            ValidationError: If a mapping field doesn't match the schema
        """
        if not isinstance(field, WizardField):
            field = WizardField.model_validate(field)

        if not self._is_field_active(field):
            return FieldValidationResult(is_valid=True)

        for rule in field.validations:
            error = self._validate_rule(rule, value, field)
            if error:
                return FieldValidationResult(is_valid=False, error=error)

        return FieldValidationResult(is_valid=True)

    def _validate_rule(self, rule: ValidationRule, value: Any, field: WizardField) -> Optional[str]:
        """Return an error message when the rule fails, else None."""
        label = field.label

        if rule.type == RuleType.REQUIRED.value:
            if self._is_empty(value):
                return rule.message or f"{label} is required"

        elif rule.type == RuleType.MIN_LENGTH.value:
            if not is_falsy(value) and len(to_string(value)) < to_number(rule.value):
                return rule.message or f"{label} must be at least {rule.value} characters"

        elif rule.type == RuleType.MAX_LENGTH.value:
            if not is_falsy(value) and len(to_string(value)) > to_number(rule.value):
                return rule.message or f"{label} must be at most {rule.value} characters"

        elif rule.type == RuleType.PATTERN.value:
            pattern = _compile(rule.value)
            if pattern is not None and not is_falsy(value) and not pattern.search(to_string(value)):
                return rule.message or f"{label} format is invalid"

        elif rule.type == RuleType.MIN.value:
            if value is not None and to_number(value) < to_number(rule.value):
                return rule.message or f"{label} must be at least {rule.value}"

        elif rule.type == RuleType.MAX.value:
            if value is not None and to_number(value) > to_number(rule.value):
                return rule.message or f"{label} must be at most {rule.value}"

        elif rule.type == RuleType.EMAIL.value:
            if not is_falsy(value) and not EMAIL_PATTERN.search(to_string(value)):
                return rule.message or f"{label} must be a valid email address"

        elif rule.type == RuleType.CUSTOM.value:
            if rule.custom_validator and not rule.custom_validator(value, self.form_data):
                return rule.message or f"{label} is invalid"

        else:
            logger.warning(f"Unknown validation type: {rule.type}")

        return None

    def _check_can_proceed(self, step: WizardStep) -> Optional[str]:
        """Step gate message, or None when the step may proceed."""
        if step.can_proceed is None:
            return None

        can_proceed = step.can_proceed(self.form_data)
        if isinstance(can_proceed, str):
            return can_proceed
        if can_proceed is False:
            return DEFAULT_STEP_ERROR
        return None

    def validate_step(self, step_index: int) -> ValidationResult:
        """
        Validate every visible, enabled field of a step plus its gate.

        Args:
            step_index: Zero-based step index

        Returns:
            ValidationResult; out-of-range and hidden steps are valid
        """
        step = self._get_step(step_index)
        if step is None or not self._is_step_visible(step):
            return ValidationResult(is_valid=True, errors={})

        errors: Dict[str, str] = {}
        for field in self._get_fields(step_index):
            if not self.evaluator.is_field_visible(field.show_if, field.hide_if):
                continue

            result = self.validate_field(field, self.form_data.get(field.name))
            if not result.is_valid and result.error:
                errors[field.name] = result.error

        step_error = self._check_can_proceed(step)
        if step_error is not None:
            errors[STEP_ERROR_KEY] = step_error

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_all(self) -> ValidationResult:
        """Validate every step; errors merge into one flat map."""
        errors: Dict[str, str] = {}
        for index in range(len(self.config.steps)):
            errors.update(self.validate_step(index).errors)

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_fields(self, field_names: List[str]) -> ValidationResult:
        """Validate only the named fields; unknown names are ignored."""
        all_fields = self._get_fields()
        errors: Dict[str, str] = {}

        for field_name in field_names:
            field = next((f for f in all_fields if f.name == field_name), None)
            if field is None:
                continue

            result = self.validate_field(field, self.form_data.get(field_name))
            if not result.is_valid and result.error:
                errors[field_name] = result.error

        return ValidationResult(is_valid=not errors, errors=errors)

    def _missing_required(self, step_index: int) -> List[WizardField]:
        missing = []
        for field in self._get_fields(step_index):
            if not self._is_field_active(field):
                continue

            has_required_rule = any(rule.type == RuleType.REQUIRED.value for rule in field.validations)
            if has_required_rule and self._is_empty(self.form_data.get(field.name)):
                missing.append(field)

        return missing

    def is_step_complete(self, step_index: int) -> bool:
        """
        Coarse "mandatory fields are filled" check for progress indicators.

        Only required rules and the step gate count; length, pattern and
        custom rules are not run.
        """
        step = self._get_step(step_index)
        if step is None or not self._is_step_visible(step):
            return True

        if self._missing_required(step_index):
            return False

        return self._check_can_proceed(step) is None

    def get_missing_required_fields(self, step_index: int) -> List[str]:
        """Labels of the required-but-empty visible, enabled fields of a step."""
        step = self._get_step(step_index)
        if step is None or not self._is_step_visible(step):
            return []

        return [field.label for field in self._missing_required(step_index)]


def _compile(pattern: Any) -> Optional[re.Pattern]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(to_string(pattern) if pattern is not None else '')
    except re.error as e:
        logger.warning(f"Invalid pattern {pattern!r}: {e}")
        return None
