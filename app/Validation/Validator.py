from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union
from abc import ABC, abstractmethod
import re

RuleSet = Union[str, List[str]]

_INTEGER_PATTERN = re.compile(r'^[+-]?\d+$')


class RuleConfigurationError(ValueError):
    """Raised when a rule string is malformed, e.g. "min:abc"."""


class ValidationRule(ABC):
    """Base validation rule."""

    @abstractmethod
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        """Determine if the validation rule passes."""
        pass

    @abstractmethod
    def message(self) -> str:
        """Get the validation error message."""
        pass


class RequiredRule(ValidationRule):
    """Required validation rule."""

    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return len(value.strip()) > 0
        if isinstance(value, (list, dict, tuple, set)):
            return len(value) > 0
        return True

    def message(self) -> str:
        return "The {attribute} field is required."


class StringRule(ValidationRule):
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        return isinstance(value, str)

    def message(self) -> str:
        return "The {attribute} must be a string."


class IntegerRule(ValidationRule):
    """Integers and strings holding an integer; booleans are rejected."""

    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        return isinstance(value, str) and _INTEGER_PATTERN.match(value.strip()) is not None

    def message(self) -> str:
        return "The {attribute} must be an integer."


class NumericRule(ValidationRule):
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, (int, float)):
            return True
        if isinstance(value, str):
            try:
                float(value)
                return True
            except ValueError:
                return False
        return False

    def message(self) -> str:
        return "The {attribute} must be a number."


class BooleanRule(ValidationRule):
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        return value in (True, False, 0, 1, '0', '1')

    def message(self) -> str:
        return "The {attribute} field must be true or false."


class ArrayRule(ValidationRule):
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        return isinstance(value, (list, tuple, dict))

    def message(self) -> str:
        return "The {attribute} must be an array."


def _numeric_parameter(rule_name: str, parameters: Optional[List[str]]) -> float:
    if not parameters:
        raise RuleConfigurationError(f"The {rule_name} rule requires a numeric parameter.")
    try:
        return float(parameters[0])
    except ValueError:
        raise RuleConfigurationError(
            f"The {rule_name} rule requires a numeric parameter, got '{parameters[0]}'."
        ) from None


def _size(value: Any) -> Optional[float]:
    """Length for strings and collections, the number itself for numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, (str, list, tuple, dict, set)):
        return len(value)
    return None


class MinRule(ValidationRule):
    """Minimum length/value validation rule."""

    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        minimum = _numeric_parameter('min', parameters)
        size = _size(value)
        return size is not None and size >= minimum

    def message(self) -> str:
        return "The {attribute} must be at least {min}."


class MaxRule(ValidationRule):
    """Maximum length/value validation rule."""

    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        maximum = _numeric_parameter('max', parameters)
        size = _size(value)
        return size is not None and size <= maximum

    def message(self) -> str:
        return "The {attribute} may not be greater than {max}."


class InRule(ValidationRule):
    def passes(self, attribute: str, value: Any, parameters: Optional[List[str]] = None) -> bool:
        return str(value) in (parameters or [])

    def message(self) -> str:
        return "The selected {attribute} is invalid."


class ValidationException(Exception):
    """Raised when data fails validation."""

    def __init__(self, errors: Dict[str, List[str]], message: str = "The given data was invalid.") -> None:
        self.errors = errors
        self.message = message
        super().__init__(message)

    def get_errors(self) -> Dict[str, List[str]]:
        """Get validation errors."""
        return self.errors

    def get_first_error(self, field: Optional[str] = None) -> Optional[str]:
        """Get first error message."""
        if field and field in self.errors:
            return self.errors[field][0] if self.errors[field] else None

        for field_errors in self.errors.values():
            if field_errors:
                return field_errors[0]

        return None


class Validator:
    """Laravel-style validator for "rule|rule:param" rule sets."""

    def __init__(self, data: Dict[str, Any], rules: Dict[str, RuleSet]) -> None:
        self.data = data
        self.rules = rules
        self.errors: Dict[str, List[str]] = {}
        self.validated_data: Dict[str, Any] = {}

        self.rule_classes: Dict[str, ValidationRule] = {
            'required': RequiredRule(),
            'string': StringRule(),
            'integer': IntegerRule(),
            'numeric': NumericRule(),
            'boolean': BooleanRule(),
            'array': ArrayRule(),
            'min': MinRule(),
            'max': MaxRule(),
            'in': InRule(),
        }

    @staticmethod
    def _parse_rules(field_rules: RuleSet) -> List[Tuple[str, List[str]]]:
        if isinstance(field_rules, str):
            rule_list = [rule.strip() for rule in field_rules.split('|') if rule.strip()]
        else:
            rule_list = list(field_rules)

        parsed = []
        for rule_str in rule_list:
            if ':' in rule_str:
                rule_name, params_str = rule_str.split(':', 1)
                parameters = [p.strip() for p in params_str.split(',')]
            else:
                rule_name = rule_str
                parameters = []
            parsed.append((rule_name, parameters))
        return parsed

    def run(self) -> Dict[str, List[str]]:
        """Validate all fields, collecting errors without raising."""
        self.errors = {}
        self.validated_data = {}

        for field, field_rules in self.rules.items():
            parsed = self._parse_rules(field_rules)
            names = [name for name, _ in parsed]
            value = self.data.get(field)
            is_empty = value is None or (isinstance(value, str) and value.strip() == '')

            if is_empty and 'required' not in names:
                # Optional and nullable fields skip the remaining rules
                if field in self.data:
                    self.validated_data[field] = value
                continue

            for rule_name, parameters in parsed:
                rule = self.rule_classes.get(rule_name)
                if rule is None:
                    continue

                if not rule.passes(field, value, parameters):
                    self.errors.setdefault(field, []).append(
                        self._get_error_message(field, rule_name, rule, parameters)
                    )
                    if rule_name == 'required':
                        break

            if field not in self.errors:
                self.validated_data[field] = value

        return self.errors

    def validate(self) -> Dict[str, Any]:
        """Validate the data, raising ValidationException on failure."""
        if self.run():
            raise ValidationException(self.errors)
        return self.validated_data

    def fails(self) -> bool:
        return bool(self.run())

    def passes(self) -> bool:
        return not self.fails()

    def get_message_bag(self) -> Dict[str, List[str]]:
        """Get error message bag."""
        return self.errors

    def _get_error_message(self, field: str, rule_name: str, rule: ValidationRule, parameters: List[str]) -> str:
        message = rule.message().replace('{attribute}', field.replace('_', ' '))

        if parameters:
            message = message.replace(f'{{{rule_name}}}', parameters[0])

        return message


def validate(data: Dict[str, Any], rules: Dict[str, RuleSet]) -> Dict[str, Any]:
    """Validate data against rules, raising ValidationException on failure."""
    return Validator(data, rules).validate()
