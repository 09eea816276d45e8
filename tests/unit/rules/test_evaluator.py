"""Tests for rule expression evaluation."""

import pytest

from rulecheck import UNDEFINED, ValidationFailure, ValidationOptions, validate
from rulecheck.errors import UnknownRuleError
from rulecheck.evaluator import Evaluator, split_rules


class TestSplitRules:
    """Test rule expression normalization."""

    def test_split_string(self):
        assert split_rules("string, positiveLength", ",") == ["string", " positiveLength"]

    def test_custom_delimiter(self):
        assert split_rules("string|number", "|") == ["string", "number"]

    def test_sequence_is_copied(self):
        rules = ["string"]
        tokens = split_rules(rules, ",")
        tokens.append("number")
        assert rules == ["string"]

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            split_rules(5, ",")


class TestScenarios:
    """Literal scenarios of the rule grammar."""

    def test_type_is_number(self):
        assert validate(5.2, "typeIsNumber") is True
        assert validate("2", "typeIsNumber") is False

    def test_non_empty_object(self):
        assert validate({"a": 1}, "isNonEmptyObject") is True
        assert validate({}, "isNonEmptyObject") is False
        assert validate(None, "isNonEmptyObject") is False
        assert validate(["a", 2], "isNonEmptyObject") is False

    def test_each_element_not_null(self):
        assert validate([5, "abc"], "eachElement", None, {"rules": "!null"}) is True

    def test_each_element_nan(self):
        assert validate({"a": float("nan"), "b": 3}, "eachElement", None, {"rules": "validNumber"}) is False

    def test_strict_mode(self):
        assert validate(5, "number", "count") is True
        with pytest.raises(ValidationFailure):
            validate([5], "number", "count")

    def test_strict_mode_negated_primitive(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate("5", "!string", "data")
        assert exc_info.value.rule == "!string"
        assert validate([5], "!string", "data") is True

    def test_composites(self):
        assert validate([5, "abc"], "isNonEmptyArray") is True
        assert validate([], "isNonEmptyArray") is False
        assert validate("test", "isNonEmptyString") is True
        assert validate("", "isNonEmptyString") is False
        assert validate(" ", "isNonEmptyString") is False


class TestOptional:
    """Test the leading optional token."""

    def test_undefined_short_circuits(self):
        assert validate(UNDEFINED, "optional, number") is True

    def test_present_value_is_checked(self):
        assert validate(5, "optional, number") is True
        assert validate("x", "optional, number") is False

    def test_none_is_not_optional_by_default(self):
        assert validate(None, "optional, number") is False

    def test_allowed_optional_values(self):
        options = {"allowedOptionalValues": [None, UNDEFINED]}
        assert validate(None, "optional, number", None, options) is True

    def test_optional_membership_is_type_strict(self):
        options = {"allowedOptionalValues": [0]}
        assert validate(False, "optional, number", None, options) is False
        assert validate(0, "optional, string", None, options) is True

    def test_optional_only_when_leading(self):
        with pytest.raises(UnknownRuleError):
            validate(5, "number, optional")

    def test_short_circuit_skips_unknown_rules(self):
        assert validate(UNDEFINED, "optional, noSuchRule") is True


class TestRulesRequiringArgs:
    """Test rules implied by their options."""

    def test_max_is_appended(self):
        assert validate(5, "number", None, {"max": 3}) is False
        assert validate(5, "number", None, {"max": 10}) is True

    def test_bounds(self):
        assert validate(16, "number", None, {"min": 12}) is True
        assert validate(12, "number", None, {"min": 12}) is True
        assert validate(13, "number", None, {"strictMin": 12}) is True
        assert validate(-1, "number", None, {"strictMax": 0}) is True
        assert validate(12, "number", None, {"strictMin": 12}) is False
        assert validate(0, "number", None, {"strictMax": 0}) is False
        assert validate(20, "!null, !boolean", None, {"max": 12}) is False

    def test_numeric_string_against_bound(self):
        assert validate("5", "!null", None, {"max": 12}) is True

    def test_lengths(self):
        assert validate("hello", "string", None, {"maxLength": 20}) is True
        assert validate("hello", "string", None, {"maxLength": 5}) is True
        assert validate("hello", "string", None, {"strictMaxLength": 6}) is True
        assert validate("hello", "string", None, {"strictMaxLength": 5}) is False
        assert validate("a", "string", None, {"minLength": 2}) is False
        assert validate("ab", "string", None, {"strictMinLength": 2}) is False
        assert validate({"a": 1, "b": 2}, "object", None, {"length": 2}) is True

    def test_explicit_rule_not_duplicated(self, recording_registry):
        recording_registry.register_validator(
            "max", lambda x, options, d=None: recording_registry.calls.append(("max", x)) or True
        )
        evaluator = Evaluator(recording_registry)
        evaluator.validate(1, "max", None, {"max": 3})
        assert recording_registry.calls == [("max", 1)]

    def test_custom_rules_requiring_args(self):
        options = {"rulesRequiringArgs": [], "max": 3}
        assert validate(5, "number", None, options) is True

    def test_caller_options_not_mutated(self):
        options = ValidationOptions(max=3)
        validate(5, "number", None, options)
        assert options.to_dict() == {"max": 3}
        assert options.is_bound_to(None)


class TestNegation:
    """Test the negation marker."""

    @pytest.mark.parametrize("value", [5, "5", None, [], {}, UNDEFINED, float("nan"), True])
    @pytest.mark.parametrize("rule", ["number", "isNull", "validNumber", "isNonEmptyObject", "array"])
    def test_negation_law(self, value, rule):
        assert validate(value, "!" + rule) is (not validate(value, rule))

    def test_custom_negate_character(self):
        assert validate(None, "~null", None, {"negateCharacter": "~"}) is False
        with pytest.raises(UnknownRuleError):
            validate(None, "!null", None, {"negateCharacter": "~"})

    def test_whitespace_around_marker(self):
        assert validate(5, " ! null ") is True

    def test_negated_composite_in_strict_mode(self):
        assert validate(5, "!validString", "name") is True
        with pytest.raises(ValidationFailure) as exc_info:
            validate("abc", "!validString", "name")
        assert exc_info.value.rule == "!validString"

    def test_negated_collection_in_strict_mode(self):
        options = {"rules": "number"}
        assert validate([1, "a"], "!eachElement", "items", options) is True


class TestCompositeExpansion:
    """Test composite rules expand to the conjunction of their parts."""

    @pytest.mark.parametrize("value", [5, 5.5, "5", None, True, [], [1], {"a": 1}, float("inf")])
    def test_expansion_law(self, value):
        expected = all(validate(value, rule) for rule in ["validNumeric", "number"])
        assert validate(value, "validNumber") is expected

    def test_nested_composites(self):
        assert validate(9, "validInteger") is True
        assert validate(2.2, "validInteger") is False
        assert validate("9", "validInteger") is False
        assert validate("0xFF", "validNumeric") is True

    def test_strict_failure_names_inner_rule(self):
        with pytest.raises(ValidationFailure) as exc_info:
            validate(2.5, "validInteger", "count")
        assert exc_info.value.rule == "integer"


class TestEagerness:
    """Soft mode applies every rule; strict mode aborts on the first failure."""

    def test_soft_mode_runs_every_rule(self, recording_registry):
        evaluator = Evaluator(recording_registry)
        assert evaluator.validate(1, "failing, passing, failing") is False
        assert [name for name, _ in recording_registry.calls] == ["failing", "passing", "failing"]

    def test_strict_mode_aborts(self, recording_registry):
        evaluator = Evaluator(recording_registry)
        with pytest.raises(ValidationFailure):
            evaluator.validate(1, "passing, failing, passing", "value")
        assert [name for name, _ in recording_registry.calls] == ["passing", "failing"]

    def test_empty_description_is_soft(self, recording_registry):
        evaluator = Evaluator(recording_registry)
        assert evaluator.validate(1, "failing, passing", "") is False
        assert len(recording_registry.calls) == 2

    def test_idempotent(self, evaluator):
        options = {"rules": "validNumber", "max": 10}
        first = evaluator.validate({"a": 1, "b": 3}, "eachElement", None, options)
        second = evaluator.validate({"a": 1, "b": 3}, "eachElement", None, options)
        assert first == second


class TestEvaluatorRegistry:
    """Test evaluators are bound to the registry they were given."""

    def test_unknown_rule(self, evaluator):
        with pytest.raises(UnknownRuleError) as exc_info:
            evaluator.validate(5, "number; string")
        assert exc_info.value.rule == "number; string"
        assert exc_info.value.delimiter == ","

    def test_unknown_rule_in_soft_and_strict_mode(self, evaluator):
        with pytest.raises(UnknownRuleError):
            evaluator.validate(5, "nope")
        with pytest.raises(UnknownRuleError):
            evaluator.validate(5, "nope", "value")

    def test_isolated_registry(self, registry):
        registry.register_composite("port", ["validInteger"])
        evaluator = Evaluator(registry)
        assert evaluator.validate(8080, "port", None, {"min": 1, "max": 65535}) is True
        with pytest.raises(UnknownRuleError):
            validate(8080, "port")

    def test_module_validate_accepts_registry(self, registry):
        registry.register_alias("num", "typeIsNumber")
        assert validate(1, "num", registry=registry) is True

    def test_empty_sequence_is_valid(self, evaluator):
        assert evaluator.validate(5, []) is True


class TestOptionsAsLastArgument:
    """Test options passed in place of the failure description."""

    @pytest.mark.parametrize(
        "value,rules,options,expected",
        [
            ("5", "!null", {"max": 12}, True),
            (16, "number", {"min": 12}, True),
            (20, "!null, !boolean", {"max": 12}, False),
            (12, "number", {"strictMin": 12}, False),
            ("hello", "string", {"strictMaxLength": 6}, True),
            ("hello", "string", {"strictMaxLength": 5}, False),
            ("a", "string", {"minLength": 2}, False),
            ({"a": 9, "b": 3}, "eachElement", {"rules": "validNumber"}, True),
            ({"a": float("nan"), "b": 3}, "eachElement", {"rules": "validNumber"}, False),
            ([{"b": 9}, {"b": 2.2}], "eachElementProperty", {"propertyName": "b", "rules": "validInteger"}, False),
        ],
    )
    def test_three_argument_calls(self, value, rules, options, expected):
        assert validate(value, rules, options) is expected

    def test_options_object(self, evaluator):
        assert evaluator.validate(5, "number", ValidationOptions(max=3)) is False
        assert evaluator.validate(5, "number", ValidationOptions(max=10)) is True

    def test_soft_mode(self):
        # no description, so a failing rule returns False instead of raising
        assert validate([5], "number", {"max": 12}) is False

    def test_options_given_twice(self):
        with pytest.raises(TypeError):
            validate(5, "number", {"max": 3}, {"max": 4})

    @pytest.mark.parametrize("description", [5, ["count"], True])
    def test_other_descriptions_rejected(self, description):
        with pytest.raises(TypeError, match="failure_description"):
            validate(5, "number", description)
