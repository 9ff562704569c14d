# src/monkey/evaluator/functions.py
from ..object import Environment, Function, Builtin, ReturnValue
from .builtins import BUILTINS
from .utils import is_error, new_error, debug_log, EVAL_SUMMARY


class FunctionEvaluatorMixin:
    """Handles function literals, function application and the builtin table."""

    def __init__(self, max_depth=None):
        # Per-evaluator copy so registering a builtin never leaks across evaluators
        self.builtins = dict(BUILTINS)
        self.max_depth = max_depth
        self.call_depth = 0

    def register_builtin(self, name, fn):
        self.builtins[name] = Builtin(fn, name)

    def eval_function_literal(self, node, env):
        return Function(node.parameters, node.body, env)

    def eval_call_expression(self, node, env):
        debug_log("CallExpression node", node.function)

        fn = self.eval_node(node.function, env)
        if is_error(fn):
            return fn

        args = self.eval_expressions(node.arguments, env)
        if is_error(args):
            return args

        return self.apply_function(fn, args)

    def apply_function(self, fn, args):
        debug_log("apply_function", f"Calling {fn.type()} with {len(args)} argument(s)")
        EVAL_SUMMARY['calls'] += 1

        if isinstance(fn, Function):
            if len(args) != len(fn.parameters):
                return new_error("wrong number of arguments: want=%d, got=%d",
                                 len(fn.parameters), len(args))

            if self.max_depth is not None and self.call_depth >= self.max_depth:
                return new_error("maximum recursion depth exceeded")

            extended_env = self.extend_function_env(fn, args)
            self.call_depth += 1
            try:
                evaluated = self.eval_node(fn.body, extended_env)
            finally:
                self.call_depth -= 1
            return self.unwrap_return_value(evaluated)

        elif isinstance(fn, Builtin):
            return fn.fn(*args)

        return new_error("not a function: %s", fn.type())

    def extend_function_env(self, fn, args):
        # Enclose the defining scope, not the caller's
        env = Environment(outer=fn.env)
        for param, arg in zip(fn.parameters, args):
            env.set(param.value, arg)
        return env

    def unwrap_return_value(self, obj):
        if isinstance(obj, ReturnValue):
            return obj.value
        return obj
