import inspect

import pytest

from defacto.context import EmptyStackError, fact_group, push_handler
from defacto.evaluator import evaluate, fact, submit_assertion
from defacto.evaluator import fact as check
from defacto.expectations import THROWS, not_
from defacto.results import Error, FactRepr, Failure, ResultStatus, Success


def is_odd(n):
    return n % 2 == 1


def boom():
    raise ValueError("boom")


@pytest.fixture
def collected():
    results = []
    push_handler(results.append)
    return results


class TestEvaluate:
    @pytest.mark.parametrize(
        ("thunk", "expected", "result_type"),
        [
            (lambda: 1 + 1, 2, Success),
            (lambda: 1 + 1, 3, Failure),
            (lambda: "a", "a", Success),
            (lambda: [1, 2], [1, 2], Success),
            (lambda: None, None, Success),
        ],
    )
    def test_value_expectation(self, thunk, expected, result_type):
        assert isinstance(evaluate(thunk, expected), result_type)

    def test_predicate_expectation(self):
        assert isinstance(evaluate(lambda: 3, is_odd), Success)
        assert isinstance(evaluate(lambda: 4, is_odd), Failure)

    def test_negated_expectations(self):
        assert isinstance(evaluate(lambda: 4, not_(5)), Success)
        assert isinstance(evaluate(lambda: 5, not_(5)), Failure)
        assert isinstance(evaluate(lambda: 4, not_(is_odd)), Success)

    def test_throws_expectation(self):
        assert isinstance(evaluate(boom, THROWS), Success)
        assert isinstance(evaluate(lambda: 1, THROWS), Failure)

    def test_throws_never_produces_error(self):
        result = evaluate(lambda: {}["missing"], THROWS)

        assert result.status is ResultStatus.SUCCESS

    def test_thunk_error_is_captured(self):
        result = evaluate(boom, 1)

        assert isinstance(result, Error)
        assert isinstance(result.cause, ValueError)
        assert str(result.cause) == "boom"
        assert result.trace is not None

    def test_predicate_error_is_captured(self):
        def bad_predicate(value):
            raise TypeError("bad predicate")

        result = evaluate(lambda: 1, bad_predicate)

        assert isinstance(result, Error)
        assert isinstance(result.cause, TypeError)

    def test_thunk_error_wins_over_predicate(self):
        calls = []

        def predicate(value):
            calls.append(value)
            raise TypeError("never reached")

        result = evaluate(boom, predicate)

        assert isinstance(result.cause, ValueError)
        assert calls == []

    def test_thunk_evaluated_exactly_once(self):
        calls = []

        def thunk():
            calls.append(1)
            return 1

        evaluate(thunk, 1)
        evaluate(thunk, is_odd)
        evaluate(thunk, THROWS)

        assert calls == [1, 1, 1]

    def test_keyboard_interrupt_propagates(self):
        def interrupt():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            evaluate(interrupt, 1)

    def test_expr_and_meta_are_carried(self):
        expr = FactRepr(lhs="x", rhs="1")
        meta = {"desc": "about x", "line": 12, "extra": True}

        result = evaluate(lambda: 1, 1, expr, meta)

        assert result.expr is expr
        assert result.meta == meta
        assert list(result.meta) == ["desc", "line", "extra"]
        assert result.meta is not meta
        assert result.desc == "about x"
        assert result.line == 12

    def test_default_expr_uses_reprs(self):
        def three():
            return 3

        result = evaluate(three, 5)

        assert isinstance(result, Failure)
        assert str(result.expr).endswith("three => 5")


class TestSubmitAssertion:
    def test_dispatches_to_top_handler(self, collected):
        result = submit_assertion(lambda: 1, 1)

        assert collected == [result]

    def test_without_handler_raises(self):
        with pytest.raises(EmptyStackError):
            submit_assertion(lambda: 1, 1)

    def test_error_results_are_dispatched_not_raised(self, collected):
        submit_assertion(boom, 1)

        assert len(collected) == 1
        assert isinstance(collected[0], Error)


class TestFact:
    def test_captures_source_text(self, collected):
        value = 3
        fact(lambda: value + 1, 4)

        assert str(collected[0].expr) == "value + 1 => 4"

    def test_captures_expectation_source_not_value(self, collected):
        expected = [1, 2]
        fact(lambda: [1, 2], expected)

        assert collected[0].expr == FactRepr(lhs="[1, 2]", rhs="expected")

    def test_throws_source_text(self, collected):
        fact(boom, THROWS)

        assert str(collected[0].expr) == "boom => THROWS"

    def test_default_expectation_is_true(self, collected):
        fact(lambda: 2 > 1)

        assert isinstance(collected[0], Success)
        assert str(collected[0].expr) == "2 > 1 => True"

    def test_multiline_call(self, collected):
        fact(
            lambda: sum([1, 2, 3]),
            6,
        )

        assert str(collected[0].expr) == "sum([1, 2, 3]) => 6"

    def test_line_is_caller_line(self, collected):
        line = inspect.currentframe().f_lineno + 1
        fact(lambda: 1, 1)

        assert collected[0].line == line

    def test_line_override(self, collected):
        fact(lambda: 1, 1, line="L7")

        assert collected[0].meta["line"] == "L7"

    def test_desc_from_fact_group(self, collected):
        with fact_group("grouped"):
            fact(lambda: 1, 1)
        fact(lambda: 1, 1)

        assert collected[0].desc == "grouped"
        assert "desc" not in collected[1].meta

    def test_explicit_expr_wins(self, collected):
        fact(lambda: 1, 1, expr=FactRepr(lhs="one", rhs="1"))

        assert str(collected[0].expr) == "one => 1"

    def test_two_facts_on_one_line_keep_their_own_source(self, collected):
        fact(lambda: 1, 2); fact(lambda: 3, 4)  # noqa: E702

        assert [str(r.expr) for r in collected] == ["1 => 2", "3 => 4"]

    def test_aliased_fact_recovers_source(self, collected):
        check(lambda: 1 + 1, 3)

        assert str(collected[0].expr) == "1 + 1 => 3"

    def test_called_through_module_attribute(self, collected):
        import defacto

        defacto.fact(lambda: "a" * 2, "aa")

        assert str(collected[0].expr) == '"a" * 2 => "aa"'

    def test_nested_call_in_argument_is_not_mistaken_for_fact(self, collected):
        fact(lambda: len([1, 2]), max(1, 2))

        assert str(collected[0].expr) == "len([1, 2]) => max(1, 2)"
