# src/monkey/evaluator/statements.py
from ..object import ReturnValue, EvaluationError
from .utils import is_error, debug_log, EVAL_SUMMARY, NULL


class StatementEvaluatorMixin:
    """Handles evaluation of statements, blocks and the program root."""

    def eval_program(self, statements, env):
        debug_log("eval_program", f"Processing {len(statements)} statements")

        result = NULL
        for i, stmt in enumerate(statements):
            debug_log(f"  Statement {i+1}", type(stmt).__name__)
            res = self.eval_node(stmt, env)
            EVAL_SUMMARY['evaluated_statements'] += 1

            if isinstance(res, ReturnValue):
                debug_log("  ReturnValue encountered", res.value)
                return res.value
            if is_error(res):
                debug_log("  Error encountered", res)
                EVAL_SUMMARY['errors'] += 1
                return res
            result = res

        debug_log("eval_program completed", result)
        return result

    def eval_block_statement(self, block, env):
        debug_log("eval_block_statement", f"len={len(block.statements)}")

        result = NULL
        for stmt in block.statements:
            res = self.eval_node(stmt, env)
            EVAL_SUMMARY['evaluated_statements'] += 1

            # Leave the ReturnValue wrapped so enclosing blocks stop too
            if isinstance(res, (ReturnValue, EvaluationError)):
                debug_log("  Block interrupted", res)
                return res
            result = res

        return result

    def eval_expression_statement(self, node, env):
        return self.eval_node(node.expression, env)

    # === VARIABLE & CONTROL FLOW ===

    def eval_let_statement(self, node, env):
        debug_log("eval_let_statement", f"let {node.name.value}")

        value = self.eval_node(node.value, env)
        # A `return` inside the value unwinds past the binding
        if isinstance(value, (ReturnValue, EvaluationError)):
            return value

        env.set(node.name.value, value)
        return NULL

    def eval_return_statement(self, node, env):
        val = self.eval_node(node.return_value, env)
        if isinstance(val, (ReturnValue, EvaluationError)):
            return val
        return ReturnValue(val)
