from __future__ import annotations

from .Validator import Validator, ValidationRule, ValidationException, RuleConfigurationError, validate

__all__: list[str] = [
    'Validator',
    'ValidationRule',
    'ValidationException',
    'RuleConfigurationError',
    'validate',
]
