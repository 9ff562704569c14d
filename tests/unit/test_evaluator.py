"""End-to-end evaluation: arithmetic, control flow, closures and error values."""

import pytest

from monkey.environment import Environment
from monkey.evaluator import EVAL_SUMMARY, Evaluator, evaluate, reset_summary, NULL, TRUE, FALSE
from monkey.monkey_ast import Program, Statement
from monkey.object import Array, EvaluationError, Function, Hash, Integer, String
from monkey.parser import parse


def _assert_integer(obj, expected):
	assert isinstance(obj, Integer), f"expected INTEGER, got {obj.inspect()}"
	assert obj.value == expected


def _assert_error(obj, message):
	assert isinstance(obj, EvaluationError), f"expected ERROR, got {obj.inspect()}"
	assert obj.message == message


@pytest.mark.parametrize("source, expected", [
	("5", 5),
	("-10", -10),
	("--10", 10),
	("5 + 5 + 5 + 5 - 10", 10),
	("2 * 2 * 2 * 2 * 2", 32),
	("-50 + 100 + -50", 0),
	("5 * 2 + 10", 20),
	("5 + 2 * 10", 25),
	("50 / 2 * 2 + 10", 60),
	("2 * (5 + 10)", 30),
	("3 * (3 * 3) + 10", 37),
	("(5 + 10 * 2 + 15 / 3) * 2 + -10", 50),
])
def test_integer_arithmetic(run, source, expected):
	_assert_integer(run(source), expected)


@pytest.mark.parametrize("a, b", [(7, 2), (-7, 2), (7, -2), (-7, -2), (0, 5), (6, 3), (1, 7)])
def test_division_truncates_toward_zero(run, a, b):
	expected = abs(a) // abs(b) * (1 if (a < 0) == (b < 0) else -1)
	_assert_integer(run(f"let a = {a}; let b = {b}; a / b"), expected)


def test_integer_overflow_wraps_like_int64(run):
	_assert_integer(run("9223372036854775807 + 1"), -9223372036854775808)
	_assert_integer(run("-9223372036854775807 - 2"), 9223372036854775807)


@pytest.mark.parametrize("source, expected", [
	("true", True),
	("false", False),
	("1 < 2", True),
	("1 > 2", False),
	("1 == 1", True),
	("1 != 1", False),
	("1 == 2", False),
	("true == true", True),
	("false == false", True),
	("true == false", False),
	("true != false", True),
	("(1 < 2) == true", True),
	("(1 > 2) == true", False),
	("!true", False),
	("!false", True),
	("!5", False),
	("!!5", True),
	("!0", False),
	('!""', False),
	("1 == true", False),
	("1 != true", True),
])
def test_boolean_expressions(run, source, expected):
	assert run(source) is (TRUE if expected else FALSE)


def test_integer_equality_is_by_value_not_identity(run):
	assert run("let a = 1000000; let b = 999999 + 1; a == b") is TRUE


@pytest.mark.parametrize("source, expected", [
	("if (true) { 10 }", 10),
	("if (false) { 10 }", None),
	("if (1) { 10 }", 10),
	("if (0) { 10 }", 10),
	("if (1 < 2) { 10 }", 10),
	("if (1 > 2) { 10 }", None),
	("if (1 > 2) { 10 } else { 20 }", 20),
	("if (1 < 2) { 10 } else { 20 }", 10),
	("if (if (false) { 1 }) { 10 } else { 20 }", 20),
])
def test_if_else_expressions(run, source, expected):
	result = run(source)
	if expected is None:
		assert result is NULL
	else:
		_assert_integer(result, expected)


@pytest.mark.parametrize("source, expected", [
	("return 10;", 10),
	("return 10; 9;", 10),
	("return 2 * 5; 9;", 10),
	("9; return 2 * 5; 9;", 10),
	("if (10 > 1) { if (10 > 1) { return 10; } return 1; }", 10),
	("let f = fn(x) { return x; x + 10; }; f(10);", 10),
	("let f = fn(x) { let result = x + 10; return result; return 10; }; f(10);", 20),
])
def test_return_statements(run, source, expected):
	_assert_integer(run(source), expected)


def test_return_value_never_escapes_a_call(run):
	result = run("let f = fn() { return 1; }; let g = fn() { f(); 2 }; g()")
	_assert_integer(result, 2)


@pytest.mark.parametrize("source, message", [
	("5 + true;", "type mismatch: INTEGER + BOOLEAN"),
	("5 + true; 5;", "type mismatch: INTEGER + BOOLEAN"),
	("-true", "unknown operator: -BOOLEAN"),
	('-"a"', "unknown operator: -STRING"),
	("true + false;", "unknown operator: BOOLEAN + BOOLEAN"),
	("5; true + false; 5", "unknown operator: BOOLEAN + BOOLEAN"),
	("if (10 > 1) { true + false; }", "unknown operator: BOOLEAN + BOOLEAN"),
	("if (10 > 1) { if (10 > 1) { return true + false; } return 1; }", "unknown operator: BOOLEAN + BOOLEAN"),
	("foobar", "identifier not found: foobar"),
	('"Hello" - "World"', "unknown operator: STRING - STRING"),
	('"a" == "a"', "unknown operator: STRING == STRING"),
	('"a" + 1', "type mismatch: STRING + INTEGER"),
	('{"name": "Monkey"}[fn(x) { x }];', "unusable as hash key: FUNCTION"),
	("{[1]: 2}", "unusable as hash key: ARRAY"),
	("1 / 0", "division by zero"),
	("let f = fn(a, b) { a }; f(1)", "wrong number of arguments: want=2, got=1"),
	("let f = fn() { 1 }; f(1, 2)", "wrong number of arguments: want=0, got=2"),
	("5(1)", "not a function: INTEGER"),
	("1[0]", "index operator not supported: INTEGER"),
	("[1, 2][true]", "index operator not supported: ARRAY"),
	("[1, true + 1, undefined]", "type mismatch: BOOLEAN + INTEGER"),
	("let f = fn(x) { x }; f(missing, 1 / 0)", "identifier not found: missing"),
])
def test_error_handling(run, source, message):
	_assert_error(run(source), message)


def test_error_stops_later_statements(run):
	env = Environment()
	result = run("let a = 1; let b = 5 + true; let c = 3;", env)
	_assert_error(result, "type mismatch: INTEGER + BOOLEAN")
	assert env.get("a").value == 1
	assert env.get("b") is None
	assert env.get("c") is None


def test_let_statements_bind_in_environment(run):
	env = Environment()
	_assert_integer(run("let x = 5; let y = 10; x + y;", env), 15)
	assert env.get("x").value == 5
	assert env.get("y").value == 10


@pytest.mark.parametrize("source, expected", [
	("let a = 5; a;", 5),
	("let a = 5 * 5; a;", 25),
	("let a = 5; let b = a; b;", 5),
	("let a = 5; let b = a; let c = a + b + 5; c;", 15),
])
def test_let_statements(run, source, expected):
	_assert_integer(run(source), expected)


def test_let_produces_null(run):
	assert run("let a = 1;") is NULL


def test_function_object(run):
	fn = run("fn(x) { x + 2; };")
	assert isinstance(fn, Function)
	assert [p.value for p in fn.parameters] == ["x"]
	assert str(fn.body) == "(x + 2)"
	assert fn.inspect() == "fn(x) {\n(x + 2)\n}"


@pytest.mark.parametrize("source, expected", [
	("let identity = fn(x) { x; }; identity(5);", 5),
	("let identity = fn(x) { return x; }; identity(5);", 5),
	("let double = fn(x) { x * 2; }; double(5);", 10),
	("let add = fn(x, y) { x + y; }; add(5, 5);", 10),
	("let add = fn(x, y) { x + y; }; add(5 + 5, add(5, 5));", 20),
	("fn(x) { x + 1; }(4);", 5),
	("fn(x) { x; }(5)", 5),
])
def test_function_application(run, source, expected):
	_assert_integer(run(source), expected)


def test_closures_outlive_their_defining_call(run):
	source = """
	let newAdder = fn(x) { fn(y) { x + y }; };
	let addTwo = newAdder(2);
	addTwo(3);
	"""
	_assert_integer(run(source), 5)


def test_scoping_is_lexical_not_dynamic(run):
	source = """
	let x = 1;
	let getX = fn() { x };
	let callWithX = fn(x) { getX() };
	callWithX(100);
	"""
	_assert_integer(run(source), 1)


def test_closures_share_their_outer_environment(run):
	# Bindings made after a closure is created are visible to it
	source = """
	let isEven = fn(n) { if (n == 0) { true } else { isOdd(n - 1) } };
	let isOdd = fn(n) { if (n == 0) { false } else { isEven(n - 1) } };
	isEven(10);
	"""
	assert run(source) is TRUE


def test_parameters_do_not_leak_into_caller_scope(run):
	env = Environment()
	run("let f = fn(secret) { secret }; f(1);", env)
	assert env.get("secret") is None


def test_recursive_function(run):
	source = """
	let fibonacci = fn(x) {
		if (x == 0) { 0 } else { if (x == 1) { return 1; } else { fibonacci(x - 1) + fibonacci(x - 2); } }
	};
	fibonacci(15);
	"""
	_assert_integer(run(source), 610)


def test_higher_order_functions(run):
	source = """
	let map = fn(arr, f) {
		let iter = fn(arr, accumulated) {
			if (len(arr) == 0) { accumulated } else { iter(rest(arr), push(accumulated, f(first(arr)))); }
		};
		iter(arr, []);
	};
	let reduce = fn(arr, initial, f) {
		let iter = fn(arr, result) {
			if (len(arr) == 0) { result } else { iter(rest(arr), f(result, first(arr))); }
		};
		iter(arr, initial);
	};
	let doubled = map([1, 2, 3, 4], fn(x) { x * 2 });
	reduce(doubled, 0, fn(acc, x) { acc + x });
	"""
	_assert_integer(run(source), 20)


def test_string_literal_and_concatenation(run):
	result = run('"Hello" + " " + "World!"')
	assert isinstance(result, String)
	assert result.value == "Hello World!"


def test_array_literals_and_indexing(run):
	array = run("[1, 2 * 2, 3 + 3]")
	assert isinstance(array, Array)
	assert [e.value for e in array.elements] == [1, 4, 6]
	assert array.inspect() == "[1, 4, 6]"


@pytest.mark.parametrize("source, expected", [
	("[1, 2, 3][0]", 1),
	("[1, 2, 3][2]", 3),
	("let i = 0; [1][i];", 1),
	("[1, 2, 3][1 + 1];", 3),
	("let myArray = [1, 2, 3]; myArray[0] + myArray[1] + myArray[2];", 6),
	("[1, 2, 3][3]", None),
	("[1, 2, 3][-1]", None),
])
def test_array_index_expressions(run, source, expected):
	result = run(source)
	if expected is None:
		assert result is NULL
	else:
		_assert_integer(result, expected)


def test_hash_literals(run):
	source = """
	let two = "two";
	{"one": 10 - 9, two: 1 + 1, "thr" + "ee": 6 / 2, 4: 4, true: 5, false: 6}
	"""
	result = run(source)
	assert isinstance(result, Hash)
	expected = {
		String("one").hash_key(): 1,
		String("two").hash_key(): 2,
		String("three").hash_key(): 3,
		Integer(4).hash_key(): 4,
		TRUE.hash_key(): 5,
		FALSE.hash_key(): 6,
	}
	assert {k: pair.value.value for k, pair in result.pairs.items()} == expected
	assert result.inspect() == "{one: 1, two: 2, three: 3, 4: 4, true: 5, false: 6}"


@pytest.mark.parametrize("source, expected", [
	('{"foo": 5}["foo"]', 5),
	('{"foo": 5}["bar"]', None),
	('let key = "foo"; {"foo": 5}[key]', 5),
	('{}["foo"]', None),
	("{5: 5}[5]", 5),
	("{true: 5}[true]", 5),
	("{false: 5}[false]", 5),
	('let ka = "ab"; let kb = "a" + "b"; {ka: 7}[kb]', 7),
])
def test_hash_index_expressions(run, source, expected):
	result = run(source)
	if expected is None:
		assert result is NULL
	else:
		_assert_integer(result, expected)


def test_duplicate_hash_keys_keep_last_value(run):
	assert run('{"a": 1, "a": 2}').inspect() == "{a: 2}"


def test_arrays_are_shared_references(run):
	env = Environment()
	run("let a = [1, 2]; let b = a; let c = push(a, 3);", env)
	assert env.get("a") is env.get("b")
	assert env.get("a").inspect() == "[1, 2]"
	assert env.get("c").inspect() == "[1, 2, 3]"


def test_top_level_return_ends_program(run):
	env = Environment()
	_assert_integer(run("let a = 1; return a; let b = 2;", env), 1)
	assert env.get("b") is None


def test_empty_program_is_null(run):
	assert run("") is NULL


def test_state_persists_across_evaluations_in_one_environment(run):
	env = Environment()
	run("let counter = 41;", env)
	run("let inc = fn(n) { n + 1 };", env)
	_assert_integer(run("inc(counter)", env), 42)


def test_max_depth_turns_runaway_recursion_into_error():
	program, errors = parse("let loop = fn(n) { loop(n + 1) }; loop(0);")
	assert errors == []
	result = evaluate(program, Environment(), evaluator=Evaluator(max_depth=50))
	_assert_error(result, "maximum recursion depth exceeded")


def test_host_recursion_limit_becomes_error_value():
	program, errors = parse("let loop = fn(n) { loop(n + 1) }; loop(0);")
	assert errors == []
	env = Environment()
	result = evaluate(program, env, evaluator=Evaluator())
	_assert_error(result, "maximum recursion depth exceeded")
	assert env.get("loop") is not None


def test_unknown_node_type_is_a_defect():
	class Bogus(Statement):
		pass

	with pytest.raises(TypeError):
		Evaluator().eval_node(Program([Bogus()]), Environment())


def test_registered_builtin_is_callable(run):
	evaluator = Evaluator()
	evaluator.register_builtin("answer", lambda *a: Integer(42))
	program, _ = parse("answer()")
	_assert_integer(evaluate(program, Environment(), evaluator=evaluator), 42)
	# Other evaluators are unaffected
	_assert_error(run("answer()"), "identifier not found: answer")


def test_user_binding_shadows_builtin(run):
	_assert_integer(run("let len = fn(x) { 99 }; len([1])"), 99)


def test_summary_counts_statements_calls_and_errors(run):
	reset_summary()
	run("let f = fn(x) { x }; f(1); f(2)")
	assert EVAL_SUMMARY["calls"] == 2
	assert EVAL_SUMMARY["evaluated_statements"] >= 3
	assert EVAL_SUMMARY["errors"] == 0

	run("1 + true")
	assert EVAL_SUMMARY["errors"] == 1
	reset_summary()
	assert set(EVAL_SUMMARY.values()) == {0}


def test_return_inside_let_value_unwinds_the_program(run):
	env = Environment()
	_assert_integer(run("let x = if (true) { return 5 }; x + 1", env), 5)
	assert env.get("x") is None


def test_return_inside_let_value_returns_from_function(run):
	_assert_integer(run("let f = fn() { let x = if (true) { return 5 }; 10 }; f()"), 5)
	_assert_integer(run("let g = fn() { return if (true) { return 7 }; }; g() + 1"), 8)
