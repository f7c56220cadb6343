from decimal import Decimal

import pytest

from schema_rules.validation import (
    Between,
    Compare,
    ComparisonOperator,
    ConstraintKind,
    Length,
    LengthMode,
    NotNull,
    Validator,
    ValidatorRegistry,
    is_numeric,
)

from tests.conftest import Customer


class CustomerValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("Name").not_null().length(2, 50).with_message("Name is mandatory")
        self.rule_for("age").greater_than_or_equal(18).less_than(130)
        self.rule_for("name").matches("^[A-Z]")


def test_constraints_for_is_case_insensitive_and_ordered():
    kinds = [c.kind for c in CustomerValidator().constraints_for("NAME")]
    assert kinds == [ConstraintKind.NOT_NULL, ConstraintKind.LENGTH, ConstraintKind.REGEX]


def test_with_message_targets_last_constraint():
    not_null, length, _ = CustomerValidator().constraints_for("name")
    assert not_null.message is None
    assert length.error_message == "Name is mandatory"


def test_with_message_without_constraint_fails():
    with pytest.raises(ValueError):
        Validator().rule_for("name").with_message("nothing to attach to")


def test_comparison_builders():
    gte, lt = CustomerValidator().constraints_for("age")
    assert gte == Compare(ComparisonOperator.GREATER_THAN_OR_EQUAL, 18)
    assert lt == Compare(ComparisonOperator.LESS_THAN, 130)


def test_conditional_includes_are_not_unconditional():
    inner = Validator()
    outer = Validator()
    outer.include(inner)
    outer.include(Validator, when=lambda model: False)

    assert outer.unconditional_includes() == [inner]
    assert len(outer.includes) == 2
    assert outer.includes[1].is_conditional


def test_include_factory_is_instantiated():
    outer = Validator()
    outer.include(CustomerValidator)
    [included] = outer.unconditional_includes()
    assert isinstance(included, CustomerValidator)


def test_length_modes():
    assert Length.minimum(3) == Length(3, None, LengthMode.MINIMUM)
    assert Length.maximum(9).min_length == 0
    assert Length.exact(4).max_length == 4


def test_length_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        Length(5, 2)


def test_between_name_marks_exclusivity():
    assert Between(1, 9).constraint_name == "between[1, 9]"
    assert Between(1, 9, exclusive=True).constraint_name == "between(1, 9)"


def test_is_numeric():
    assert is_numeric(1) and is_numeric(1.5) and is_numeric(Decimal("2"))
    assert not is_numeric(True)
    assert not is_numeric("1")


def test_registry_resolves_fresh_instances():
    registry = ValidatorRegistry()

    @registry.validates(Customer)
    class _CustomerValidator(CustomerValidator):
        pass

    first, second = registry.resolve(Customer), registry.resolve(Customer)
    assert isinstance(first, _CustomerValidator)
    assert first is not second
    assert Customer in registry
    assert registry.models() == [Customer]


def test_registry_returns_none_for_unknown_type():
    assert ValidatorRegistry().resolve(Customer) is None


def test_registered_instance_is_shared():
    validator = Validator()
    validator.rule_for("name").add(NotNull())
    registry = ValidatorRegistry()
    registry.register(Customer, validator)
    assert registry.resolve(Customer) is validator


def test_iterating_a_validator_yields_rules_then_includes():
    child = Validator()
    validator = CustomerValidator()
    validator.include(child)

    items = list(validator)
    assert [type(item).__name__ for item in items] == ["PropertyRule"] * 3 + ["IncludeRule"]
    assert items[-1].get_validator() is child


def test_declared_bounds():
    assert Length(0, 10).declared_bounds == {"MinLength": 0, "MaxLength": 10}
    assert Length.maximum(9).declared_bounds == {"MaxLength": 9}
    assert Compare(ComparisonOperator.GREATER_THAN, Decimal("1.5")).declared_bounds == {"Minimum": 1.5}
    assert Compare(ComparisonOperator.EQUAL, 3).declared_bounds == {}
    assert Between(1, "z").declared_bounds == {"Minimum": 1}
    assert NotNull().declared_bounds == {}
