"""Tests for condition builders."""

import pytest
from formwizard.builders import conditions as c
from formwizard.engine.evaluator import ConditionEvaluator
from formwizard.engine.schema import ComparisonOperator, Condition


def test_create_condition():
    condition = c.create_condition('category', 'equals', 'business')

    assert condition == Condition(field='category', operator='equals', value='business')


def test_create_condition_accepts_enum_operator():
    condition = c.create_condition('age', ComparisonOperator.GREATER_THAN, 18)

    assert condition.operator == 'greaterThan'


@pytest.mark.parametrize('combine', [c.and_conditions, c.or_conditions])
def test_combining_nothing_raises(combine):
    with pytest.raises(ValueError, match="At least one condition is required"):
        combine()


@pytest.mark.parametrize('combine', [c.and_conditions, c.or_conditions])
def test_combining_one_returns_it(combine):
    condition = c.equals('a', 1)

    assert combine(condition) is condition


def test_and_conditions_nests_the_rest():
    combined = c.and_conditions(c.greater_than('age', 18), c.equals('country', 'US'), c.is_truthy('verified'))

    assert combined.field == 'age'
    assert [sub.field for sub in combined.and_] == ['country', 'verified']
    assert combined.or_ is None

    evaluator = ConditionEvaluator({'age': 30, 'country': 'US', 'verified': True})
    assert evaluator.evaluate(combined) is True
    evaluator.update_form_data({'age': 30, 'country': 'IT', 'verified': True})
    assert evaluator.evaluate(combined) is False


def test_or_conditions_nests_the_rest():
    combined = c.or_conditions(c.equals('role', 'admin'), c.equals('role', 'moderator'))

    assert ConditionEvaluator({'role': 'moderator'}).evaluate(combined) is True
    assert ConditionEvaluator({'role': 'guest'}).evaluate(combined) is False


def test_combining_leaves_original_untouched():
    first = c.equals('a', 1)
    c.and_conditions(first, c.equals('b', 2))

    assert first.and_ is None


def test_complex_condition():
    condition = c.complex_condition(
        c.greater_than('age', 18),
        and_=[c.is_truthy('verified')],
        or_=[c.equals('role', 'admin')],
    )

    assert ConditionEvaluator({'age': 12, 'role': 'admin'}).evaluate(condition) is True
    assert ConditionEvaluator({'age': 20, 'verified': False}).evaluate(condition) is False


@pytest.mark.parametrize('builder,args,operator', [
    (c.equals, ('f', 1), 'equals'),
    (c.not_equals, ('f', 1), 'notEquals'),
    (c.contains, ('f', 'x'), 'contains'),
    (c.not_contains, ('f', 'x'), 'notContains'),
    (c.greater_than, ('f', 1), 'greaterThan'),
    (c.less_than, ('f', 1), 'lessThan'),
    (c.greater_than_or_equals, ('f', 1), 'greaterThanOrEquals'),
    (c.less_than_or_equals, ('f', 1), 'lessThanOrEquals'),
    (c.is_in, ('f', [1]), 'in'),
    (c.not_in, ('f', [1]), 'notIn'),
    (c.is_empty, ('f',), 'isEmpty'),
    (c.is_not_empty, ('f',), 'isNotEmpty'),
])
def test_shorthand_operators(builder, args, operator):
    assert builder(*args).operator == operator


def test_truthy_and_falsy():
    assert c.is_truthy('x').value is True
    assert c.is_falsy('x').value is False


def test_between_is_inclusive():
    condition = c.between('age', 18, 65)
    evaluator = ConditionEvaluator({})

    for age, expected in [(17, False), (18, True), (40, True), (65, True), (66, False)]:
        evaluator.update_form_data({'age': age})
        assert evaluator.evaluate(condition) is expected


def test_negate_moves_condition_to_hide_if():
    condition = c.equals('newsletter', True)
    visibility = c.negate(condition)

    assert visibility == {'show_if': None, 'hide_if': condition}
    assert ConditionEvaluator({'newsletter': True}).is_field_visible(**visibility) is False
    assert ConditionEvaluator({'newsletter': False}).is_field_visible(**visibility) is True
