# src/monkey/evaluator/__init__.py
from .core import Evaluator, evaluate
from .builtins import BUILTINS as builtins
from .utils import EVAL_SUMMARY, reset_summary, NULL, TRUE, FALSE

__all__ = ['Evaluator', 'evaluate', 'builtins', 'EVAL_SUMMARY', 'reset_summary', 'NULL', 'TRUE', 'FALSE']
