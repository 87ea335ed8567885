"""Pydantic models for wizard configuration and validation results."""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ComparisonOperator(str, Enum):
    """Operators understood by the condition evaluator."""

    EQUALS = 'equals'
    NOT_EQUALS = 'notEquals'
    CONTAINS = 'contains'
    NOT_CONTAINS = 'notContains'
    GREATER_THAN = 'greaterThan'
    LESS_THAN = 'lessThan'
    GREATER_THAN_OR_EQUALS = 'greaterThanOrEquals'
    LESS_THAN_OR_EQUALS = 'lessThanOrEquals'
    IN = 'in'
    NOT_IN = 'notIn'
    IS_EMPTY = 'isEmpty'
    IS_NOT_EMPTY = 'isNotEmpty'


class RuleType(str, Enum):
    """Validation rule types understood by the form validator."""

    REQUIRED = 'required'
    MIN_LENGTH = 'minLength'
    MAX_LENGTH = 'maxLength'
    PATTERN = 'pattern'
    MIN = 'min'
    MAX = 'max'
    EMAIL = 'email'
    CUSTOM = 'custom'


class Condition(BaseModel):
    """
    A conditional expression over form data.

    Reads as "base comparison AND all of `and` AND (any of `or`)", with the
    OR applied to the already AND-reduced result. A condition without a
    field has a base comparison that is always true.

    The operator is kept as a plain string so that unknown operators reach
    the evaluator, which logs them and evaluates to False.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    field: Optional[Any] = Field(None, description="Dot-separated path into form data (e.g., 'user.profile.role')")
    operator: Optional[str] = Field(None, description="Comparison operator name (e.g., 'equals')")
    value: Optional[Any] = Field(None, description="Value to compare the field against")
    and_: Optional[List['Condition']] = Field(None, alias='and', description="Conditions that must all hold")
    or_: Optional[List['Condition']] = Field(None, alias='or', description="Conditions of which one rescues the result")


class ValidationRule(BaseModel):
    """
    One constraint on a field value.

    Rules run in order and the first failing rule supplies the error.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: str = Field(..., description="Rule type: required, minLength, maxLength, pattern, min, max, email, custom")
    value: Optional[Any] = Field(None, description="Rule parameter (length, bound, regex string or compiled pattern)")
    message: Optional[str] = Field(None, description="Error message overriding the generated default")
    custom_validator: Optional[Callable[[Any, Dict[str, Any]], Any]] = Field(
        None, alias='customValidator', description="Predicate (value, form_data) -> bool for custom rules"
    )


class WizardField(BaseModel):
    """A single input in a field group."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Stable field identifier")
    name: str = Field(..., description="Key of the value in form data")
    label: str = Field(..., description="Human-readable label used in error messages")
    type: str = Field(..., description="Field type: text, email, number, date, select, file, ...")
    required: bool = Field(False, description="Shorthand for a leading 'required' rule")
    disabled: Optional[bool] = Field(None, description="Explicitly disable the field")
    disabled_if: Optional[Condition] = Field(None, alias='disabledIf')
    show_if: Optional[Condition] = Field(None, alias='showIf')
    hide_if: Optional[Condition] = Field(None, alias='hideIf')
    validations: List[ValidationRule] = Field(default_factory=list, description="Rules evaluated in order")

    @model_validator(mode='after')
    def required_flag_as_rule(self):
        if self.required and not any(rule.type == RuleType.REQUIRED.value for rule in self.validations):
            self.validations = [ValidationRule(type=RuleType.REQUIRED.value), *self.validations]
        return self


class FieldGroup(BaseModel):
    """A visibility container for fields. Hidden groups contribute no fields."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Unique group identifier")
    title: Optional[str] = None
    description: Optional[str] = None
    show_if: Optional[Condition] = Field(None, alias='showIf')
    hide_if: Optional[Condition] = Field(None, alias='hideIf')
    fields: List[WizardField] = Field(default_factory=list)


class WizardStep(BaseModel):
    """One page of the wizard."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Unique step identifier")
    title: Optional[str] = None
    description: Optional[str] = None
    show_if: Optional[Condition] = Field(None, alias='showIf')
    hide_if: Optional[Condition] = Field(None, alias='hideIf')
    can_proceed: Optional[Callable[[Dict[str, Any]], Union[bool, str, None]]] = Field(
        None, alias='canProceed', description="Step gate: True to proceed, False or a message to block"
    )
    field_groups: List[FieldGroup] = Field(default_factory=list, alias='fieldGroups')


class WizardConfig(BaseModel):
    """
    Declarative wizard configuration.

    Authored as camelCase JSON/YAML (showIf, fieldGroups, customValidator)
    or built directly from Python with snake_case names.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Wizard identifier")
    title: Optional[str] = None
    description: Optional[str] = None
    steps: List[WizardStep] = Field(default_factory=list)
    initial_data: Dict[str, Any] = Field(default_factory=dict, alias='initialData')


class FieldValidationResult(BaseModel):
    """Outcome of validating one field."""

    is_valid: bool
    error: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of validating a step, several fields or the whole wizard.

    `errors` maps field names (or `_step` for step gates) to a message.
    """

    is_valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)
