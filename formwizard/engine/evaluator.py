"""ConditionEvaluator - decides visibility and disablement from form data."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError
from .coercion import is_empty_value, is_falsy, strict_contains, strict_equals, to_number, to_string
from .schema import ComparisonOperator, Condition

logger = logging.getLogger(__name__)

ConditionLike = Union[Condition, Mapping]


class ConditionEvaluator:
    """
    Evaluates conditional expressions against a form-data snapshot.

    Never raises on malformed input: missing paths read as None, unknown
    operators log a warning and evaluate False, and an absent condition
    is always True so a misconfigured condition cannot lock a wizard.
    """

    def __init__(self, form_data: Optional[Dict[str, Any]] = None):
        """
        Initialize the evaluator.

        Args:
            form_data: Current form data (None is treated as empty)
        """
        self.form_data: Dict[str, Any] = form_data or {}

    def update_form_data(self, form_data: Optional[Dict[str, Any]]) -> None:
        """Replace the form-data snapshot. The new mapping is not merged."""
        self.form_data = form_data or {}

    def _get_field_value(self, field_path: Any) -> Any:
        """Walk a dot-separated path, returning None as soon as it breaks off.

        Examples:
            >>> ConditionEvaluator({'user': {'role': 'admin'}})._get_field_value('user.role')
            'admin'
        """
        if not field_path or not isinstance(field_path, str):
            return None

        value: Any = self.form_data
        for key in field_path.split('.'):
            if value is None:
                return None
            if isinstance(value, Mapping):
                value = value.get(key)
            elif isinstance(value, (list, tuple)) and key.isdigit():
                index = int(key)
                value = value[index] if index < len(value) else None
            else:
                return None

        return value

    def _evaluate_comparison(self, field_value: Any, operator: Any, comparison_value: Any) -> bool:
        """Apply a single operator to a field value."""
        if operator == ComparisonOperator.EQUALS.value:
            return strict_equals(field_value, comparison_value)

        if operator == ComparisonOperator.NOT_EQUALS.value:
            return not strict_equals(field_value, comparison_value)

        if operator == ComparisonOperator.CONTAINS.value:
            if isinstance(field_value, (list, tuple)):
                return strict_contains(field_value, comparison_value)
            if isinstance(field_value, str):
                return to_string(comparison_value) in field_value
            return False

        if operator == ComparisonOperator.NOT_CONTAINS.value:
            if isinstance(field_value, (list, tuple)):
                return not strict_contains(field_value, comparison_value)
            if isinstance(field_value, str):
                return to_string(comparison_value) not in field_value
            return True

        if operator == ComparisonOperator.GREATER_THAN.value:
            return to_number(field_value) > to_number(comparison_value)

        if operator == ComparisonOperator.LESS_THAN.value:
            return to_number(field_value) < to_number(comparison_value)

        if operator == ComparisonOperator.GREATER_THAN_OR_EQUALS.value:
            return to_number(field_value) >= to_number(comparison_value)

        if operator == ComparisonOperator.LESS_THAN_OR_EQUALS.value:
            return to_number(field_value) <= to_number(comparison_value)

        if operator == ComparisonOperator.IN.value:
            if not isinstance(comparison_value, (list, tuple)):
                return False
            return strict_contains(comparison_value, field_value)

        if operator == ComparisonOperator.NOT_IN.value:
            if not isinstance(comparison_value, (list, tuple)):
                return True
            return not strict_contains(comparison_value, field_value)

        if operator == ComparisonOperator.IS_EMPTY.value:
            return is_empty_value(field_value)

        if operator == ComparisonOperator.IS_NOT_EMPTY.value:
            # 0 and False are values
            return not is_empty_value(field_value)

        logger.warning(f"Unknown operator: {operator}")
        return False

    def _as_condition(self, logic: ConditionLike) -> Optional[Condition]:
        if isinstance(logic, Condition):
            return logic
        try:
            return Condition.model_validate(logic)
        except ValidationError as e:
            logger.warning(f"Unreadable condition {logic!r}: {e.error_count()} error(s)")
            return None

    def _evaluate_base(self, condition: Condition) -> bool:
        if not condition.field:
            return True

        field_value = self._get_field_value(condition.field)
        return self._evaluate_comparison(field_value, condition.operator, condition.value)

    def evaluate(self, logic: Optional[ConditionLike]) -> bool:
        """
        Evaluate a condition with its AND/OR branches.

        AND is applied to the base result first, then OR to the AND-reduced
        result: (base AND all(and)) OR any(or).

        Args:
            logic: Condition model or mapping in authoring format, or None

        Returns:
            True when the condition holds (always True for None)
        """
        if is_falsy(logic):
            return True

        condition = self._as_condition(logic)
        if condition is None:
            return False

        result = self._evaluate_base(condition)

        if condition.and_:
            and_results = [self.evaluate(sub) for sub in condition.and_]
            result = result and all(and_results)

        if condition.or_:
            or_results = [self.evaluate(sub) for sub in condition.or_]
            result = result or any(or_results)

        return result

    def is_field_visible(self, show_if: Optional[ConditionLike] = None,
                         hide_if: Optional[ConditionLike] = None) -> bool:
        """
        hide_if wins over show_if; with neither, the field is visible.

        An empty mapping is a present condition that holds, so `hide_if={}`
        hides the field.
        """
        if not is_falsy(hide_if) and self.evaluate(hide_if):
            return False

        if not is_falsy(show_if):
            return self.evaluate(show_if)

        return True

    def is_field_disabled(self, disabled: Optional[bool] = None,
                          disabled_if: Optional[ConditionLike] = None) -> bool:
        """True for a literal disabled=True or when disabled_if holds."""
        if disabled is True:
            return True

        if not is_falsy(disabled_if) and self.evaluate(disabled_if):
            return True

        return False

    def get_visible_fields(self, fields: List[Any]) -> List[str]:
        """
        Names of the visible fields, in their original order.

        Args:
            fields: WizardField models or mappings with name/showIf/hideIf
        """
        visible = []
        for field in fields:
            if isinstance(field, Mapping):
                name = field.get('name')
                show_if = field.get('showIf', field.get('show_if'))
                hide_if = field.get('hideIf', field.get('hide_if'))
            else:
                name = field.name
                show_if = getattr(field, 'show_if', None)
                hide_if = getattr(field, 'hide_if', None)

            if self.is_field_visible(show_if, hide_if):
                visible.append(name)

        return visible

    def evaluate_multiple(self, conditions: Dict[str, Optional[ConditionLike]]) -> Dict[str, bool]:
        """Evaluate each named condition independently."""
        return {key: self.evaluate(condition) for key, condition in conditions.items()}

    def explain_evaluation(self, logic: ConditionLike) -> str:
        """
        Explain why a condition evaluated the way it did.

        A condition without a field reports its base result (always True)
        rather than a comparison against the missing value.

        Returns:
            Multi-line trace of the base comparison and each AND/OR branch

        Examples:
            >>> ConditionEvaluator({'age': 21}).explain_evaluation(
            ...     {'field': 'age', 'operator': 'greaterThan', 'value': 18})
            'Field "age" (value: 21) greaterThan 18: True'
        """
        condition = self._as_condition(logic)
        if condition is None:
            return f"Unreadable condition: {logic!r}"

        field_value = self._get_field_value(condition.field)
        base_result = self._evaluate_base(condition)

        explanation = f'Field "{condition.field}" (value: {_dump(field_value)}) '
        explanation += f"{condition.operator} {_dump(condition.value)}: {base_result}"

        if condition.and_:
            explanation += '\nAND conditions:'
            for index, sub in enumerate(condition.and_, 1):
                explanation += f"\n  {index}. {self.explain_evaluation(sub)}"

        if condition.or_:
            explanation += '\nOR conditions:'
            for index, sub in enumerate(condition.or_, 1):
                explanation += f"\n  {index}. {self.explain_evaluation(sub)}"

        return explanation


def _dump(value: Any) -> str:
    return json.dumps(value, default=repr)
