import sys
import io
import math

from . lexer import Lexer
from . parser import Parser
from . interpreter import Interpreter
from . errors import DivertidoRuntimeError
from . tokens import Token, TokenType
from . import ast_nodes as ast

def run_source(source_code):
    """Runs source through the whole pipeline. Returns (interpreter, printed output)."""
    output = io.StringIO()
    tokens = Lexer(source_code).scan_tokens()
    statements = Parser(tokens).parse()
    interpreter = Interpreter(output)
    interpreter.interpret(statements)
    return interpreter, output.getvalue()


def run_interpreter_test(name, source_code, expected_vars=None, expected_output=None):
    """
    Runs a full lexer -> parser -> interpreter test and checks final variable
    states and printed output.
    """
    print(f"--- Running Interpreter Test: {name} ---")
    interpreter, output = run_source(source_code)

    for var_name, expected_value in (expected_vars or {}).items():
        actual_value = interpreter.environment.values.get(var_name)
        if type(actual_value) is not type(expected_value) or actual_value != expected_value:
            print(f"FAIL: {name}")
            print(f"Verification failed for variable '{var_name}'.")
            print(f"Expected: {expected_value} (type: {type(expected_value)})")
            print(f"Got:      {actual_value} (type: {type(actual_value)})")
            return False

    if expected_output is not None and output != expected_output:
        print(f"FAIL: {name}")
        print(f"Expected output: {expected_output!r}")
        print(f"Got:             {output!r}")
        return False

    print(f"PASS: {name}")
    return True


def run_runtime_error_test(name, source_code, expected_error_fragment, expected_output=""):
    """
    Runs the interpreter and expects a runtime error to be raised.
    Output printed before the error is checked too.
    """
    print(f"--- Running Interpreter Test (Runtime Error): {name} ---")
    output = io.StringIO()
    statements = Parser(Lexer(source_code).scan_tokens()).parse()
    try:
        Interpreter(output).interpret(statements)
    except DivertidoRuntimeError as error:
        if expected_error_fragment in str(error) and output.getvalue() == expected_output:
            print(f"PASS: {name}")
            return True
        print(f"FAIL: {name}")
        print(f"Expected error containing: '{expected_error_fragment}'")
        print(f"Got: '{error}' with output {output.getvalue()!r}")
        return False

    print(f"FAIL: {name} - No RuntimeError raised.")
    return False


def test_precedence():
    assert run_interpreter_test("Precedence", "print 1+2*3; print (1+2)*3;", expected_output="7\n9\n")


def test_arithmetic_and_variables():
    source = """
    let x = 10;
    let y = x * 2 + 5; // Should be 25
    let z = 7 % 4 - 10 / 4;
    """
    assert run_interpreter_test("Arithmetic and Variables", source, {"y": 25.0, "z": 0.5})


def test_end_to_end_print():
    assert run_interpreter_test("Let and Print", "let x = 5; print x + 1;", expected_output="6\n")


def test_print_concatenates_values():
    source = 'print "a", 1, true, nil, 5 / 2; print 10 / 4;'
    assert run_interpreter_test("Print List", source, expected_output="a1truenil2.5\n2.5\n")


def test_string_concatenation():
    source = """
    let a = "hello";
    let b = " world";
    let c = a + b;
    """
    assert run_interpreter_test("String Concatenation", source, {"c": "hello world"})


def test_truthiness():
    assert run_interpreter_test("Zero Is Truthy", 'if 0 { print "a"; } else { print "b"; }', expected_output="a\n")
    assert run_interpreter_test("Empty String Is Truthy", 'if "" { print "a"; } else { print "b"; }', expected_output="a\n")
    assert run_interpreter_test("Nil Is Falsey", 'if nil { print "a"; } else { print "b"; }', expected_output="b\n")
    assert run_interpreter_test("False Is Falsey", 'if false { print "a"; }', expected_output="")


def test_else_if_chain():
    source = """
    let n = 2;
    if n == 1 { print "one"; } else if n == 2 { print "two"; } else { print "many"; }
    """
    assert run_interpreter_test("Else If Chain", source, expected_output="two\n")


def test_equality_across_types():
    source = """
    let a = 1 == "1";
    let b = nil == nil;
    let c = true == 1;
    let d = "x" != "y";
    let e = nil != false;
    """
    expected = {"a": False, "b": True, "c": False, "d": True, "e": True}
    assert run_interpreter_test("Cross-Type Equality", source, expected)


def test_comparisons_and_logic():
    source = """
    let t = 10 > 5;
    let f = 10 <= 9;
    let both = 1 and nil;
    let either = nil or "x";
    let symbols = true && false || true;
    let negated = !false;
    let neg = -3;
    """
    expected = {"t": True, "f": False, "both": False, "either": True,
                "symbols": True, "negated": True, "neg": -3.0}
    assert run_interpreter_test("Comparisons and Logic", source, expected)


def test_logical_operators_evaluate_both_sides():
    assert run_runtime_error_test("No Short Circuit", "let x = false and missing;", "Variable 'missing' not found")


def test_bitwise_operators():
    assert run_interpreter_test("Bitwise", "let a = 6 & 3; let b = 6 | 3;", {"a": 2.0, "b": 7.0})
    assert run_runtime_error_test("Bitwise Fraction", "let a = (1 / 2) & 1;", "Expected 'integer & integer', found '0.5 & 1'")


def test_ieee_division():
    interpreter, output = run_source("let a = 1 / 0; let b = 0 - 1 / 0; let c = 0 / 0; let d = 5 % 0; print a, \" \", b, \" \", c;")
    values = interpreter.environment.values
    assert values["a"] == math.inf
    assert values["b"] == -math.inf
    assert math.isnan(values["c"])
    assert math.isnan(values["d"])
    assert output == "inf -inf NaN\n"


def test_modulo_keeps_dividend_sign():
    assert run_interpreter_test("Negative Modulo", "let m = -7 % 3;", {"m": -1.0})


def test_flat_environment():
    source = """
    let a = "outer";
    {
        let a = "inner";
        let b = "made in block";
    }
    if true { let c = 1; }
    """
    expected = {"a": "inner", "b": "made in block", "c": 1.0}
    assert run_interpreter_test("Flat Environment", source, expected)


def test_let_rebinds():
    assert run_interpreter_test("Let Rebinding", 'let x = 1; let x = "two";', {"x": "two"})


def test_assignment():
    assert run_interpreter_test("Assignment", "let x = 1; x = x + 41; print x;", {"x": 42.0}, "42\n")
    assert run_runtime_error_test("Assign Unbound", "y = 1;", "[line 1] RuntimeError: Variable 'y' not found.")


def test_while_loop():
    source = "let i = 0; while i < 3 { print i; i = i + 1; }"
    assert run_interpreter_test("While Loop", source, {"i": 3.0}, "0\n1\n2\n")


def test_while_loop_accumulates():
    source = """
    let i = 0;
    let total = 0;
    while i < 5 {
        total = total + i;
        i = i + 1;
    }
    """
    assert run_interpreter_test("While Accumulator", source, {"total": 10.0, "i": 5.0})


def test_type_errors():
    assert run_runtime_error_test("Add Mismatch", 'print 1 + "a";',
                                  "Expected 'number + number' or 'string + string', found '1 + a'")
    assert run_runtime_error_test("Compare Strings", 'print "a" < "b";',
                                  "Expected 'number < number', found 'a < b'")
    assert run_runtime_error_test("Negate String", 'print -"a";', "Expected number after '-', found 'a'")
    assert run_runtime_error_test("Not Number", "print !1;", "Expected boolean after '!', found '1'")


def test_bitwise_overflow_gives_infinity():
    source = """
    let top = 9007199254740991;
    let low = 1;
    let i = 0;
    while i < 971 {
        top = top * 2;
        if i < 970 { low = low * 2; }
        i = i + 1;
    }
    let wide = top | low;
    """
    interpreter, output = run_source(source)
    assert interpreter.environment.values["top"] == sys.float_info.max
    assert interpreter.environment.values["wide"] == math.inf


def test_deep_nesting_is_a_runtime_error():
    inner = ast.Literal(1.0)
    for _ in range(5000):
        inner = ast.Grouping(inner)
    plus = Token(TokenType.PLUS, "+", None, 3)
    statements = [ast.Print([ast.Binary(inner, plus, ast.Literal(1.0))])]
    try:
        Interpreter(io.StringIO()).interpret(statements)
    except DivertidoRuntimeError as error:
        assert str(error) == "[line 3] RuntimeError: Expression nested too deeply."
    else:
        raise AssertionError("Expected a DivertidoRuntimeError")


def test_error_aborts_remaining_statements():
    source = 'print "before";\nprint nil * 2;\nprint "after";'
    assert run_runtime_error_test("Abort On Error", source, "[line 2] RuntimeError: Expected 'number * number', found 'nil * 2'.",
                                  expected_output="before\n")


def main():
    tests = [
        test_precedence,
        test_arithmetic_and_variables,
        test_end_to_end_print,
        test_print_concatenates_values,
        test_string_concatenation,
        test_truthiness,
        test_else_if_chain,
        test_equality_across_types,
        test_comparisons_and_logic,
        test_logical_operators_evaluate_both_sides,
        test_bitwise_operators,
        test_ieee_division,
        test_modulo_keeps_dividend_sign,
        test_flat_environment,
        test_let_rebinds,
        test_assignment,
        test_while_loop,
        test_while_loop_accumulates,
        test_type_errors,
        test_bitwise_overflow_gives_infinity,
        test_deep_nesting_is_a_runtime_error,
        test_error_aborts_remaining_statements,
    ]
    tests_passed = 0
    for test in tests:
        try:
            test()
            tests_passed += 1
        except AssertionError:
            print(f"FAIL: {test.__name__}")

    print(f"\n--- Interpreter Test Summary ---")
    print(f"{tests_passed} / {len(tests)} tests passed.")

    if tests_passed != len(tests):
        sys.exit(1)

if __name__ == "__main__":
    main()
