# src/monkey/evaluator/core.py
from .. import monkey_ast
from ..config import config
from .utils import debug_log, new_error, native_bool_to_boolean
from ..object import Integer, String
from .expressions import ExpressionEvaluatorMixin
from .statements import StatementEvaluatorMixin
from .functions import FunctionEvaluatorMixin


class Evaluator(ExpressionEvaluatorMixin, StatementEvaluatorMixin, FunctionEvaluatorMixin):
    def __init__(self, max_depth=None):
        # FunctionEvaluatorMixin sets up builtins and call depth tracking
        FunctionEvaluatorMixin.__init__(self, max_depth=max_depth)

        self._dispatch = {
            # === STATEMENTS ===
            monkey_ast.Program: lambda node, env: self.eval_program(node.statements, env),
            monkey_ast.ExpressionStatement: self.eval_expression_statement,
            monkey_ast.BlockStatement: self.eval_block_statement,
            monkey_ast.LetStatement: self.eval_let_statement,
            monkey_ast.ReturnStatement: self.eval_return_statement,

            # === EXPRESSIONS ===
            monkey_ast.Identifier: self.eval_identifier,
            monkey_ast.IntegerLiteral: lambda node, env: Integer(node.value),
            monkey_ast.StringLiteral: lambda node, env: String(node.value),
            monkey_ast.Boolean: lambda node, env: native_bool_to_boolean(node.value),
            monkey_ast.PrefixExpression: self.eval_prefix_expression,
            monkey_ast.InfixExpression: self.eval_infix_expression,
            monkey_ast.IfExpression: self.eval_if_expression,
            monkey_ast.FunctionLiteral: self.eval_function_literal,
            monkey_ast.CallExpression: self.eval_call_expression,
            monkey_ast.ArrayLiteral: self.eval_array_literal,
            monkey_ast.HashLiteral: self.eval_hash_literal,
            monkey_ast.IndexExpression: self.eval_index_expression,
        }

    def eval_node(self, node, env):
        handler = self._dispatch.get(type(node))
        if handler is None:
            # Only a parser bug can hand us something else
            raise TypeError(f"Cannot evaluate node of type {type(node).__name__}")
        return handler(node, env)


# Global Entry Point
def evaluate(program, env, evaluator=None):
    """Evaluate ``program`` in ``env`` and return the resulting Object.

    Running out of host stack is reported as an Error object; bindings made
    before that point stay in ``env``.
    """
    if evaluator is None:
        evaluator = Evaluator(max_depth=config.max_depth)

    try:
        return evaluator.eval_node(program, env)
    except RecursionError:
        evaluator.call_depth = 0
        debug_log("evaluate", "host recursion limit reached")
        return new_error("maximum recursion depth exceeded")
