# src/monkey/monkey_ast.py
"""AST node classes.

Every node keeps the token it was parsed from.  ``str(node)`` gives the
canonical source-like rendering: prefix and infix expressions are fully
parenthesized, so ``str()`` of a parsed ``a + b * c`` is ``(a + (b * c))``.
"""


# Base classes
class Node:
    token = None

    def token_literal(self):
        return self.token.literal if self.token is not None else ""

    def __repr__(self):
        return f"{self.__class__.__name__}()"

    def __str__(self):
        return self.__repr__()


class Statement(Node): pass
class Expression(Node): pass


class Program(Node):
    def __init__(self, statements=None):
        self.statements = statements if statements is not None else []

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __repr__(self):
        return f"Program(statements={len(self.statements)})"

    def __str__(self):
        return "".join(str(s) for s in self.statements)


# Statement Nodes
class LetStatement(Statement):
    def __init__(self, name, value, token=None):
        self.name = name; self.value = value; self.token = token

    def __repr__(self):
        return f"LetStatement(name={self.name}, value={self.value!r})"

    def __str__(self):
        return f"let {self.name} = {self.value if self.value is not None else ''};"


class ReturnStatement(Statement):
    def __init__(self, return_value, token=None):
        self.return_value = return_value
        self.token = token

    def __repr__(self):
        return f"ReturnStatement(return_value={self.return_value!r})"

    def __str__(self):
        return f"return {self.return_value if self.return_value is not None else ''};"


class ExpressionStatement(Statement):
    def __init__(self, expression, token=None):
        self.expression = expression
        self.token = token

    def __repr__(self):
        return f"ExpressionStatement(expression={self.expression!r})"

    def __str__(self):
        return str(self.expression) if self.expression is not None else ""


class BlockStatement(Statement):
    def __init__(self, statements=None, token=None):
        self.statements = statements if statements is not None else []
        self.token = token

    def __repr__(self):
        return f"BlockStatement(statements={len(self.statements)})"

    def __str__(self):
        return "".join(str(s) for s in self.statements)


# Expression Nodes
class Identifier(Expression):
    def __init__(self, value, token=None):
        self.value = value
        self.token = token

    def __repr__(self):
        return f"Identifier('{self.value}')"

    def __str__(self):
        return self.value


class IntegerLiteral(Expression):
    def __init__(self, value, token=None):
        self.value = value
        self.token = token

    def __repr__(self):
        return f"IntegerLiteral({self.value})"

    def __str__(self):
        return str(self.value)


class StringLiteral(Expression):
    def __init__(self, value, token=None):
        self.value = value
        self.token = token

    def __repr__(self):
        return f"StringLiteral({self.value!r})"

    def __str__(self):
        return self.value


class Boolean(Expression):
    def __init__(self, value, token=None):
        self.value = value
        self.token = token

    def __repr__(self):
        return f"Boolean({self.value})"

    def __str__(self):
        return "true" if self.value else "false"


class PrefixExpression(Expression):
    def __init__(self, operator, right, token=None):
        self.operator = operator; self.right = right; self.token = token

    def __repr__(self):
        return f"PrefixExpression(operator='{self.operator}', right={self.right!r})"

    def __str__(self):
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):
    def __init__(self, left, operator, right, token=None):
        self.left = left; self.operator = operator; self.right = right; self.token = token

    def __repr__(self):
        return f"InfixExpression(left={self.left!r}, operator='{self.operator}', right={self.right!r})"

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    def __init__(self, condition, consequence, alternative=None, token=None):
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative
        self.token = token

    def __repr__(self):
        return f"IfExpression(condition={self.condition!r}, has_else={self.alternative is not None})"

    def __str__(self):
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


class FunctionLiteral(Expression):
    def __init__(self, parameters, body, token=None):
        self.parameters = parameters
        self.body = body
        self.token = token

    def __repr__(self):
        return f"FunctionLiteral(parameters={len(self.parameters)})"

    def __str__(self):
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal() or 'fn'}({params}) {self.body}"


class CallExpression(Expression):
    def __init__(self, function, arguments, token=None):
        self.function = function
        self.arguments = arguments
        self.token = token

    def __repr__(self):
        return f"CallExpression(function={self.function!r}, arguments={len(self.arguments)})"

    def __str__(self):
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


class ArrayLiteral(Expression):
    def __init__(self, elements, token=None):
        self.elements = elements
        self.token = token

    def __repr__(self):
        return f"ArrayLiteral(elements={len(self.elements)})"

    def __str__(self):
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


class IndexExpression(Expression):
    def __init__(self, left, index, token=None):
        self.left = left
        self.index = index
        self.token = token

    def __repr__(self):
        return f"IndexExpression(left={self.left!r}, index={self.index!r})"

    def __str__(self):
        return f"({self.left}[{self.index}])"


class HashLiteral(Expression):
    def __init__(self, pairs, token=None):
        # Ordered list of (key expression, value expression) tuples
        self.pairs = pairs
        self.token = token

    def __repr__(self):
        return f"HashLiteral(pairs={len(self.pairs)})"

    def __str__(self):
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"
