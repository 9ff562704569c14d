# src/monkey/evaluator/utils.py
import logging

from ..config import config
from ..object import Null, Boolean as BooleanObj, EvaluationError

logger = logging.getLogger("monkey.evaluator")

# Canonical singletons; `==`/`!=` on booleans and null compare by identity
NULL = Null()
TRUE = BooleanObj(True)
FALSE = BooleanObj(False)

# Summary counters for lightweight summary logging
EVAL_SUMMARY = {
    'evaluated_statements': 0,
    'errors': 0,
    'calls': 0,
}


def reset_summary():
    for key in EVAL_SUMMARY:
        EVAL_SUMMARY[key] = 0


def debug_log(message, data=None, level='debug'):
    """Conditional debug logging that respects the user's config."""
    if not config.should_log(level):
        return

    if data is not None:
        logger.debug("%s: %s", message, data)
    else:
        logger.debug("%s", message)


def is_error(obj):
    return isinstance(obj, EvaluationError)


def new_error(message, *args):
    return EvaluationError(message % args if args else message)


def native_bool_to_boolean(value):
    return TRUE if value else FALSE


def is_truthy(obj):
    # Only false and null are falsy; 0, "" and [] are all truthy
    if obj is NULL or obj is FALSE:
        return False
    return True
