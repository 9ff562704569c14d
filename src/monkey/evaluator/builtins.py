# src/monkey/evaluator/builtins.py
"""Native functions callable from Monkey code.

Each builtin checks its own arity and argument types and reports misuse as
an Error object.  None of them mutate an Array in place: ``rest`` and
``push`` hand back fresh Arrays.
"""
from ..object import Integer, Array, Builtin, STRING_OBJ, ARRAY_OBJ
from .utils import new_error, NULL


def _wrong_arg_count(got, want):
    return new_error("wrong number of arguments. got=%d, want=%d", got, want)


def _len(*a):
    if len(a) != 1:
        return _wrong_arg_count(len(a), 1)

    arg = a[0]
    if arg.type() == STRING_OBJ:
        return Integer(len(arg.value.encode("utf-8")))
    elif arg.type() == ARRAY_OBJ:
        return Integer(len(arg.elements))
    return new_error("argument to `len` not supported, got %s", arg.type())


def _first(*a):
    if len(a) != 1:
        return _wrong_arg_count(len(a), 1)
    if a[0].type() != ARRAY_OBJ:
        return new_error("argument to `first` must be ARRAY, got %s", a[0].type())

    elements = a[0].elements
    return elements[0] if elements else NULL


def _last(*a):
    if len(a) != 1:
        return _wrong_arg_count(len(a), 1)
    if a[0].type() != ARRAY_OBJ:
        return new_error("argument to `last` must be ARRAY, got %s", a[0].type())

    elements = a[0].elements
    return elements[-1] if elements else NULL


def _rest(*a):
    if len(a) != 1:
        return _wrong_arg_count(len(a), 1)
    if a[0].type() != ARRAY_OBJ:
        return new_error("argument to `rest` must be ARRAY, got %s", a[0].type())

    elements = a[0].elements
    if not elements:
        return NULL
    return Array(elements[1:])


def _push(*a):
    if len(a) != 2:
        return _wrong_arg_count(len(a), 2)
    if a[0].type() != ARRAY_OBJ:
        return new_error("argument to `push` must be ARRAY, got %s", a[0].type())

    return Array(a[0].elements + [a[1]])


def _puts(*a):
    for arg in a:
        print(arg.inspect())
    return NULL


BUILTINS = {
    name: Builtin(fn, name)
    for name, fn in (
        ("len", _len),
        ("first", _first),
        ("last", _last),
        ("rest", _rest),
        ("push", _push),
        ("puts", _puts),
    )
}
