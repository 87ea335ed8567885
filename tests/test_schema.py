"""Tests for Pydantic schema models."""

import pytest
from pydantic import ValidationError
from formwizard.engine.schema import (
    Condition,
    FieldGroup,
    ValidationRule,
    WizardConfig,
    WizardField,
    WizardStep,
)


def test_condition_reads_and_or_aliases():
    """Condition accepts the authoring keys 'and' and 'or'."""
    condition = Condition.model_validate({
        'field': 'a',
        'operator': 'equals',
        'value': 1,
        'and': [{'field': 'b', 'operator': 'isNotEmpty'}],
        'or': [{'field': 'c', 'operator': 'equals', 'value': True}],
    })

    assert condition.field == 'a'
    assert condition.and_[0].field == 'b'
    assert condition.or_[0].value is True


def test_condition_keeps_unknown_operator():
    """Operators are not validated by the model."""
    condition = Condition(field='a', operator='approximately', value=1)

    assert condition.operator == 'approximately'


def test_condition_is_immutable():
    """Conditions can't be changed once built."""
    condition = Condition(field='a', operator='equals', value=1)

    with pytest.raises(ValidationError):
        condition.value = 2


def test_condition_dumps_to_authoring_format():
    """by_alias dumps round-trip through the authoring keys."""
    condition = Condition(field='a', operator='equals', value=1, and_=[Condition(field='b', operator='isEmpty')])

    dumped = condition.model_dump(by_alias=True, exclude_none=True)

    assert dumped == {
        'field': 'a',
        'operator': 'equals',
        'value': 1,
        'and': [{'field': 'b', 'operator': 'isEmpty'}],
    }


def test_field_minimal_valid():
    """WizardField can be created with identity fields only."""
    field = WizardField(id='email', name='email', label='Email', type='email')

    assert field.required is False
    assert field.validations == []
    assert field.show_if is None
    assert field.disabled is None


def test_field_requires_label():
    """WizardField must have a label."""
    with pytest.raises(ValidationError) as exc_info:
        WizardField(id='email', name='email', type='email')

    assert 'label' in str(exc_info.value)


def test_field_required_flag_becomes_rule():
    """required=True prepends a required rule."""
    field = WizardField(
        id='name', name='name', label='Name', type='text', required=True,
        validations=[{'type': 'minLength', 'value': 2}],
    )

    assert [rule.type for rule in field.validations] == ['required', 'minLength']


def test_field_required_flag_keeps_existing_rule():
    """An explicit required rule is not duplicated."""
    field = WizardField(
        id='name', name='name', label='Name', type='text', required=True,
        validations=[{'type': 'minLength', 'value': 2}, {'type': 'required', 'message': 'Name please'}],
    )

    assert [rule.type for rule in field.validations] == ['minLength', 'required']


def test_field_allows_presentation_keys():
    """Presentation-only keys are kept as extras."""
    field = WizardField(id='bio', name='bio', label='Bio', type='textarea', placeholder='About you', rows=4)

    assert field.placeholder == 'About you'
    assert field.rows == 4


def test_rule_accepts_custom_validator_alias():
    rule = ValidationRule.model_validate({'type': 'custom', 'customValidator': lambda value, data: True})

    assert rule.custom_validator('x', {}) is True


def test_rule_rejects_non_callable_validator():
    with pytest.raises(ValidationError):
        ValidationRule(type='custom', custom_validator='not callable')


def test_step_with_groups_and_gate():
    """WizardStep reads fieldGroups and canProceed."""
    step = WizardStep.model_validate({
        'id': 'details',
        'title': 'Details',
        'canProceed': lambda data: True,
        'fieldGroups': [{'id': 'g', 'fields': [{'id': 'a', 'name': 'a', 'label': 'A', 'type': 'text'}]}],
    })

    assert isinstance(step.field_groups[0], FieldGroup)
    assert step.field_groups[0].fields[0].name == 'a'
    assert step.can_proceed({}) is True


def test_config_minimal():
    config = WizardConfig(id='wizard')

    assert config.steps == []
    assert config.initial_data == {}


def test_config_requires_id():
    with pytest.raises(ValidationError) as exc_info:
        WizardConfig(steps=[])

    assert 'id' in str(exc_info.value)
