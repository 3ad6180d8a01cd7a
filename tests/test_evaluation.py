import pytest

from mica import errors
from mica.evaluation.evaluator import evaluate, evaluate_source
from mica.interpreter import primitive_environment
from mica.reader.parser import read
from mica.types.sexpr import (
    NIL, T, Function, Number, Operator, String, Symbol, make_list,
)


def _nums(*values):
    return make_list([Number(str(v)) for v in values])


def test_self_evaluating_atoms():
    env = primitive_environment()
    for atom in (Number("1"), String("hello"), NIL, T, Operator(",")):
        assert evaluate(env, atom) == atom


def test_function_values_self_evaluate():
    env = primitive_environment()
    fn = env.lookup("car")
    assert isinstance(fn, Function)
    assert evaluate(env, fn) is fn


def test_symbol_lookup():
    env = primitive_environment()
    env.define("x", Number("42"))
    assert evaluate(env, Symbol("x")) == Number("42")
    with pytest.raises(errors.MicaUnboundSymbol):
        evaluate(env, Symbol("z"))


@pytest.mark.parametrize(
    "code,expected",
    [
        ("(+ 1 2 3)", Number("6")),
        ("(* 2 3 4)", Number("24")),
        ("(+)", Number("0")),
        ("(*)", Number("1")),
        ("(car (cons 1 2))", Number("1")),
        ("(cdr (cons 1 2))", Number("2")),
        ("(if nil 1 2)", Number("2")),
        ("(if t 1 2)", Number("1")),
        ("(if 0 1 2)", Number("1")),
        ("(if nil 1)", NIL),
        ("(eq 1 1)", T),
        ("(eq (cons 1 2) (cons 1 2))", NIL),
        ("`(1 ,(+ 1 1) 3)", _nums(1, 2, 3)),
        ("'(1 2 3)", _nums(1, 2, 3)),
    ]
)
def test_expressions(interp, code, expected):
    assert interp.eval(code) == expected


def test_defun_and_call(interp):
    assert interp.eval("(defun sq (x) (* x x)) (sq 5)") == Number("25")


def test_setq_sequence(interp):
    assert interp.eval("(setq x 10) (setq y (+ x 1)) y") == Number("11")


def test_state_persists_between_calls(interp):
    interp.eval("(setq counter 41)")
    assert interp.eval("(+ counter 1)") == Number("42")


def test_empty_program_is_nil(interp):
    assert interp.eval("") == NIL


def test_unbound_symbol(interp):
    with pytest.raises(errors.MicaUnboundSymbol, match="undefined-thing"):
        interp.eval("(undefined-thing 1)")


@pytest.mark.parametrize("code", ["(1 2)", '("f" 1)', "((cons 1 2) 3)", "(,x)"])
def test_not_a_function(interp, code):
    with pytest.raises(errors.MicaNotAFunction):
        interp.eval(code)


def test_arguments_evaluated_left_to_right(interp, echoed):
    interp.eval("(cons (echo 1) (echo 2))")
    assert echoed == ["1", "2"]


def test_lazy_arguments_are_not_evaluated(interp, echoed):
    interp.eval("(if t (echo 'then) (echo 'else))")
    assert echoed == ["then"]


def test_dotted_argument_tail_is_left_unevaluated():
    env = primitive_environment()
    seen = []
    env.define("capture", Function("capture", lambda e, args: seen.append(args) or NIL))
    evaluate_source(env, "(capture (+ 1 1) . undefined)")
    assert seen == [make_list([Number("2")], Symbol("undefined"))]


def test_lambda_returns_function(interp):
    fn = interp.eval("(lambda (a b) (+ a b))")
    assert isinstance(fn, Function)
    assert fn.name == "(lambda (a b) (+ a b))"
    assert interp.eval("((lambda (a b) (+ a b)) 2 3)") == Number("5")


def test_lambda_with_several_body_forms(interp, echoed):
    assert interp.eval("((lambda (x) (echo x) (* x 2)) 4)") == Number("8")
    assert echoed == ["4"]


def test_lambda_without_body_returns_nil(interp):
    assert interp.eval("((lambda ()))") == NIL


def test_closures_capture_defining_environment(interp):
    code = """
    (defun make-adder (n) (lambda (x) (+ x n)))
    (setq add5 (make-adder 5))
    (add5 10)
    """
    assert interp.eval(code) == Number("15")


def test_closures_do_not_see_caller_scope(interp):
    interp.eval("(defun get-z () z)")
    with pytest.raises(errors.MicaUnboundSymbol):
        interp.eval("(defun call-with-z (z) (get-z)) (call-with-z 1)")


def test_recursion(interp):
    code = """
    (defun fact (n) (if (< n 2) 1 (* n (fact (- n 1)))))
    (fact 10)
    """
    assert interp.eval(code) == Number("3628800")


def test_parameter_binding_is_not_visible_after_call(interp):
    code = """
    (setq x 1)
    (defun shadow (x) (* x 100))
    (shadow 5)
    x
    """
    assert interp.eval(code) == Number("1")


def test_setq_inside_function_stays_local(interp):
    interp.eval("(defun set-local () (setq inner 3) inner)")
    assert interp.eval("(set-local)") == Number("3")
    with pytest.raises(errors.MicaUnboundSymbol):
        interp.eval("inner")


def test_too_few_arguments_is_an_arity_error(interp):
    interp.eval("(defun two (a b) a)")
    with pytest.raises(errors.MicaArityError):
        interp.eval("(two 1)")


def test_too_many_arguments_is_an_arity_error(interp):
    interp.eval("(defun one (a) a)")
    with pytest.raises(errors.MicaArityError):
        interp.eval("(one 1 2)")


def test_rest_parameters(interp):
    assert interp.eval("((lambda (a . more) more) 1 2 3)") == _nums(2, 3)
    assert interp.eval("((lambda all all) 1 2)") == _nums(1, 2)


def test_errors_abort_the_whole_evaluation(interp):
    with pytest.raises(errors.MicaUnboundSymbol):
        interp.eval("(setq before 1) missing (setq after 2)")
    assert interp.eval("before") == Number("1")
    with pytest.raises(errors.MicaUnboundSymbol):
        interp.eval("after")


def test_read_errors_surface_before_evaluation(interp, echoed):
    with pytest.raises(errors.MicaSyntaxError):
        interp.eval("(echo 1) (echo 2")
    assert echoed == []


def test_evaluate_single_form_directly(interp):
    (form,) = read("(+ 2 2)")
    assert evaluate(interp.env, form) == Number("4")


def test_closure_name_is_rendered_once(interp, monkeypatch):
    from mica.types import lambda_fn

    fn = interp.eval("(defun sq (x) (* x x))")
    rendered = []
    monkeypatch.setattr(lambda_fn, "pretty_print", lambda expr: rendered.append(expr) or "")
    assert interp.eval("(sq 2) (sq 3)") == Number("9")
    assert rendered == []
    assert fn.body.name == "(lambda (x) (* x x))"


def test_arity_error_names_the_closure(interp):
    interp.eval("(defun two (a b) a)")
    with pytest.raises(errors.MicaArityError, match=r"\(lambda \(a b\) a\)"):
        interp.eval("(two 1 2 3)")
