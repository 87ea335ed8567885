"""formwizard - schema-driven multi-step form engine."""

from .engine import ConditionEvaluator, ConfigLoader, FormValidator

__all__ = ['ConditionEvaluator', 'ConfigLoader', 'FormValidator']
