# src/monkey/object.py
from collections import namedtuple

from .environment import Environment

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
NULL_OBJ = "NULL"
STRING_OBJ = "STRING"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"

_INT64_MASK = (1 << 64) - 1
_INT64_SIGN = 1 << 63

FNV_OFFSET_BASIS_64 = 0xCBF29CE484222325
FNV_PRIME_64 = 0x100000001B3


def wrap_int64(value):
    """Reduce a Python int to the signed 64-bit range, two's complement style."""
    value &= _INT64_MASK
    return value - (1 << 64) if value & _INT64_SIGN else value


def fnv1a_64(data):
    h = FNV_OFFSET_BASIS_64
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME_64) & _INT64_MASK
    return h


# Key used to store a hashable Object in a Hash: (type tag, 64-bit value)
HashKey = namedtuple("HashKey", ["type", "value"])

# What a Hash stores under each HashKey: the original key Object and its value
HashPair = namedtuple("HashPair", ["key", "value"])


class Object:
    def inspect(self):
        raise NotImplementedError("Subclasses must implement this method")

    def type(self):
        raise NotImplementedError("Subclasses must implement this method")

    def __repr__(self):
        return f"<{self.type()} {self.inspect()}>"


class Hashable:
    """Mixin for the Object variants allowed as Hash keys."""

    def hash_key(self):
        raise NotImplementedError("Subclasses must implement this method")


class Integer(Object, Hashable):
    def __init__(self, value): self.value = value
    def inspect(self): return str(self.value)
    def type(self): return INTEGER_OBJ
    def hash_key(self): return HashKey(INTEGER_OBJ, self.value)


class Boolean(Object, Hashable):
    def __init__(self, value): self.value = value
    def inspect(self): return "true" if self.value else "false"
    def type(self): return BOOLEAN_OBJ
    def hash_key(self): return HashKey(BOOLEAN_OBJ, 1 if self.value else 0)


class Null(Object):
    def inspect(self): return "null"
    def type(self): return NULL_OBJ


class String(Object, Hashable):
    def __init__(self, value): self.value = value
    def inspect(self): return self.value
    def type(self): return STRING_OBJ
    def __str__(self): return self.value

    def hash_key(self):
        return HashKey(STRING_OBJ, fnv1a_64(self.value.encode("utf-8")))


class Array(Object):
    def __init__(self, elements): self.elements = elements
    def type(self): return ARRAY_OBJ

    def inspect(self):
        elements_str = ", ".join(el.inspect() for el in self.elements)
        return f"[{elements_str}]"


class Hash(Object):
    def __init__(self, pairs=None):
        self.pairs = pairs if pairs is not None else {}  # dict of HashKey -> HashPair

    def type(self): return HASH_OBJ

    def inspect(self):
        pairs = [f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values()]
        return "{" + ", ".join(pairs) + "}"

    def get(self, key):
        """Value stored under the key Object ``key``, or None when absent."""
        pair = self.pairs.get(key.hash_key())
        return pair.value if pair is not None else None


class Function(Object):
    def __init__(self, parameters, body, env):
        self.parameters, self.body, self.env = parameters, body, env

    def inspect(self):
        params = ", ".join(p.value for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"

    def type(self): return FUNCTION_OBJ


class Builtin(Object):
    def __init__(self, fn, name=""):
        self.fn = fn  # Stores the native Python function
        self.name = name

    def inspect(self):
        return "builtin function"

    def type(self):
        return BUILTIN_OBJ


class ReturnValue(Object):
    def __init__(self, value): self.value = value
    def inspect(self): return self.value.inspect()
    def type(self): return RETURN_VALUE_OBJ


class EvaluationError(Object):
    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"ERROR: {self.message}"

    def type(self):
        return ERROR_OBJ

    def __str__(self):
        return self.message


__all__ = [
    "Object", "Hashable", "HashKey", "HashPair", "Integer", "Boolean", "Null",
    "String", "Array", "Hash", "Function", "Builtin", "ReturnValue",
    "EvaluationError", "Environment", "wrap_int64", "fnv1a_64",
    "INTEGER_OBJ", "BOOLEAN_OBJ", "NULL_OBJ", "STRING_OBJ", "ARRAY_OBJ",
    "HASH_OBJ", "FUNCTION_OBJ", "BUILTIN_OBJ", "RETURN_VALUE_OBJ", "ERROR_OBJ",
]
