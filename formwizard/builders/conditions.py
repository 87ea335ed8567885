"""Builders for conditional expressions.

Usage:
    and_conditions(greater_than('age', 18), equals('country', 'US'))
    or_conditions(equals('role', 'admin'), equals('role', 'moderator'))
"""

from typing import Any, Dict, List, Optional, Sequence
from formwizard.engine.schema import ComparisonOperator, Condition


def create_condition(field: str, operator: str, value: Any = None) -> Condition:
    """Create a single comparison, e.g. create_condition('category', 'equals', 'business')."""
    if isinstance(operator, ComparisonOperator):
        operator = operator.value
    return Condition(field=field, operator=operator, value=value)


def and_conditions(*conditions: Condition) -> Condition:
    """
    Combine conditions so that all must hold.

    The first condition becomes the base and the rest its `and` branch.

    Raises:
        ValueError: If no condition is given
    """
    if not conditions:
        raise ValueError("At least one condition is required")

    first, *rest = conditions
    if not rest:
        return first
    return first.model_copy(update={'and_': list(rest)})


def or_conditions(*conditions: Condition) -> Condition:
    """
    Combine conditions so that at least one must hold.

    Raises:
        ValueError: If no condition is given
    """
    if not conditions:
        raise ValueError("At least one condition is required")

    first, *rest = conditions
    if not rest:
        return first
    return first.model_copy(update={'or_': list(rest)})


def complex_condition(base: Condition,
                      and_: Optional[Sequence[Condition]] = None,
                      or_: Optional[Sequence[Condition]] = None) -> Condition:
    """Attach explicit AND and OR branches to a base condition."""
    update = {}
    if and_ is not None:
        update['and_'] = list(and_)
    if or_ is not None:
        update['or_'] = list(or_)
    return base.model_copy(update=update)


def equals(field: str, value: Any) -> Condition:
    return create_condition(field, ComparisonOperator.EQUALS, value)


def not_equals(field: str, value: Any) -> Condition:
    return create_condition(field, ComparisonOperator.NOT_EQUALS, value)


def contains(field: str, value: Any) -> Condition:
    """Substring match for strings, membership for lists."""
    return create_condition(field, ComparisonOperator.CONTAINS, value)


def not_contains(field: str, value: Any) -> Condition:
    return create_condition(field, ComparisonOperator.NOT_CONTAINS, value)


def greater_than(field: str, value: float) -> Condition:
    return create_condition(field, ComparisonOperator.GREATER_THAN, value)


def less_than(field: str, value: float) -> Condition:
    return create_condition(field, ComparisonOperator.LESS_THAN, value)


def greater_than_or_equals(field: str, value: float) -> Condition:
    return create_condition(field, ComparisonOperator.GREATER_THAN_OR_EQUALS, value)


def less_than_or_equals(field: str, value: float) -> Condition:
    return create_condition(field, ComparisonOperator.LESS_THAN_OR_EQUALS, value)


def is_in(field: str, values: List[Any]) -> Condition:
    return create_condition(field, ComparisonOperator.IN, list(values))


def not_in(field: str, values: List[Any]) -> Condition:
    return create_condition(field, ComparisonOperator.NOT_IN, list(values))


def is_empty(field: str) -> Condition:
    return create_condition(field, ComparisonOperator.IS_EMPTY)


def is_not_empty(field: str) -> Condition:
    return create_condition(field, ComparisonOperator.IS_NOT_EMPTY)


def is_truthy(field: str) -> Condition:
    """Field equals True (a checked box, a 'yes' boolean)."""
    return equals(field, True)


def is_falsy(field: str) -> Condition:
    return equals(field, False)


def between(field: str, minimum: float, maximum: float) -> Condition:
    """Inclusive range check."""
    return and_conditions(
        greater_than_or_equals(field, minimum),
        less_than_or_equals(field, maximum),
    )


def negate(condition: Condition) -> Dict[str, Optional[Condition]]:
    """
    Invert a condition by moving it to hide_if.

    Returns:
        {'show_if': None, 'hide_if': condition}, ready to splat into a
        WizardField, FieldGroup or WizardStep
    """
    return {'show_if': None, 'hide_if': condition}
