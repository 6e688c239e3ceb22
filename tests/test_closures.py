import pytest

from mal.errors import MalUnboundSymbol
from mal.evaluation.evaluator import evaluate
from mal.reader.parser import read_all
from mal.types.closure import Closure
from mal.types.environment import Environment
from mal.types.symbol import Symbol
from mal.types.values import List


def eval_source(source: str, env):
    last = None
    for form in read_all(source):
        last = evaluate(form, env)
    return last


def test_closure_sees_definition_scope_not_call_scope(env):
    src = """
    (def! f (let* (x 1) (fn* () x)))
    (let* (x 2) (f))
    """
    assert eval_source(src, env) == 1

def test_closure_does_not_see_caller_locals(env):
    src = """
    (def! g (fn* () y))
    (let* (y 2) (g))
    """
    with pytest.raises(MalUnboundSymbol):
        eval_source(src, env)

def test_closure_outlives_let_frame(env):
    src = """
    (def! make-adder (fn* (n) (fn* (m) (+ n m))))
    (def! add5 (make-adder 5))
    (def! add7 (make-adder 7))
    (list (add5 1) (add7 1) (add5 10))
    """
    assert eval_source(src, env) == (6, 8, 15)

def test_closures_from_one_frame_share_it(env):
    src = """
    (let* (x 1)
      (do (def! a (fn* () x))
          (def! b (fn* () x))
          (list a b)))
    """
    a, b = eval_source(src, env)
    assert isinstance(a, Closure) and isinstance(b, Closure)
    assert a.env is b.env

def test_call_frame_parent_is_captured_env():
    root = Environment()
    captured = root.new_child()
    captured.set("x", 1)
    closure = Closure(["a"], Symbol("a"), captured)
    frame = closure.extend_env([5])
    assert frame.outer is captured
    assert frame.vars == {"a": 5}

def test_variadic_binding_produces_list():
    closure = Closure(["a"], Symbol("rest"), Environment(), variadic="rest")
    frame = closure.extend_env([1, 2, 3])
    assert frame.get("a") == 1
    rest = frame.get("rest")
    assert isinstance(rest, List)
    assert list(rest) == [2, 3]

def test_recursive_closure_via_def(env):
    src = """
    (def! fact (fn* (n) (if (<= n 1) 1 (* n (fact (- n 1))))))
    (fact 10)
    """
    assert eval_source(src, env) == 3628800

def test_higher_order_closures(env):
    src = """
    (def! compose (fn* (f g) (fn* (x) (f (g x)))))
    (def! inc (fn* (x) (+ x 1)))
    (def! dbl (fn* (x) (* x 2)))
    ((compose inc dbl) 5)
    """
    assert eval_source(src, env) == 11

def test_closure_printed_form():
    closure = Closure(["a"], List([Symbol("+"), Symbol("a"), 1]), Environment(), variadic="more")
    assert str(closure) == "(fn* (a & more) (+ a 1))"
