## src/monkey/parser/parser.py
import logging

from ..monkey_token import *
from ..lexer import Lexer
from ..monkey_ast import *
from ..config import config

logger = logging.getLogger(__name__)

# Precedence constants
LOWEST, EQUALS, LESSGREATER, SUM, PRODUCT, PREFIX, CALL, INDEX = 1, 2, 3, 4, 5, 6, 7, 8

precedences = {
    EQ: EQUALS, NOT_EQ: EQUALS,
    LT: LESSGREATER, GT: LESSGREATER,
    PLUS: SUM, MINUS: SUM,
    SLASH: PRODUCT, STAR: PRODUCT,
    LPAREN: CALL,
    LBRACKET: INDEX,
}

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class Parser:
    """Pratt parser over a Lexer's token stream.

    Syntax errors are collected in ``self.errors`` instead of being raised.
    A statement that produced an error is dropped and the parser skips to
    the next statement boundary before carrying on, so one pass reports as
    many problems as possible.
    """

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []
        self.cur_token = None
        self.peek_token = None
        self.block_depth = 0
        # The `}` most recently consumed by a block or hash literal
        self.claimed_brace = None

        self.prefix_parse_fns = {
            IDENT: self.parse_identifier,
            INT: self.parse_integer_literal,
            STRING: self.parse_string_literal,
            BANG: self.parse_prefix_expression,
            MINUS: self.parse_prefix_expression,
            TRUE: self.parse_boolean,
            FALSE: self.parse_boolean,
            LPAREN: self.parse_grouped_expression,
            IF: self.parse_if_expression,
            FUNCTION: self.parse_function_literal,
            LBRACKET: self.parse_array_literal,
            LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns = {
            PLUS: self.parse_infix_expression,
            MINUS: self.parse_infix_expression,
            SLASH: self.parse_infix_expression,
            STAR: self.parse_infix_expression,
            EQ: self.parse_infix_expression,
            NOT_EQ: self.parse_infix_expression,
            LT: self.parse_infix_expression,
            GT: self.parse_infix_expression,
            LPAREN: self.parse_call_expression,
            LBRACKET: self.parse_index_expression,
        }
        self.next_token()
        self.next_token()

    def _log(self, message, data=None):
        if not config.should_log("debug"):
            return
        if data is not None:
            logger.debug("%s: %s", message, data)
        else:
            logger.debug("%s", message)

    def parse_program(self):
        program = Program()
        try:
            while not self.cur_token_is(EOF):
                stmt = self.parse_statement()
                if stmt is not None:
                    program.statements.append(stmt)
                self.next_token()
        except RecursionError:
            self.errors.append("maximum nesting depth exceeded")
        self._log("Parsing complete", f"{len(program.statements)} statements, {len(self.errors)} errors")
        return program

    # === STATEMENTS ===

    def parse_statement(self):
        error_count = len(self.errors)
        if self.cur_token_is(LET):
            stmt = self.parse_let_statement()
        elif self.cur_token_is(RETURN):
            stmt = self.parse_return_statement()
        else:
            stmt = self.parse_expression_statement()

        if len(self.errors) > error_count:
            self._log("Dropping statement after error", self.errors[-1])
            self.recover_to_next_statement()
            return None
        return stmt

    def recover_to_next_statement(self):
        """Skip ahead until the current token ends the broken statement.

        Stops on a ``;``, on an unclaimed ``}`` of the enclosing block, or just
        before a token that starts a new statement or closes the enclosing
        block, so the caller's ``next_token`` lands on something parseable.
        """
        if self.at_open_block_end():
            return
        while not self.cur_token_is(EOF) and not self.cur_token_is(SEMICOLON):
            if self.peek_token_is(LET) or self.peek_token_is(RETURN):
                return
            if self.block_depth > 0 and self.peek_token_is(RBRACE):
                return
            self.next_token()

    def parse_let_statement(self):
        stmt = LetStatement(name=None, value=None, token=self.cur_token)

        if not self.expect_peek(IDENT):
            return None

        stmt.name = Identifier(value=self.cur_token.literal, token=self.cur_token)

        if not self.expect_peek(ASSIGN):
            return None

        self.next_token()
        stmt.value = self.parse_expression(LOWEST)

        self.skip_optional_semicolon()

        return stmt

    def parse_return_statement(self):
        stmt = ReturnStatement(return_value=None, token=self.cur_token)
        self.next_token()
        stmt.return_value = self.parse_expression(LOWEST)

        self.skip_optional_semicolon()

        return stmt

    def parse_expression_statement(self):
        stmt = ExpressionStatement(expression=None, token=self.cur_token)
        stmt.expression = self.parse_expression(LOWEST)

        self.skip_optional_semicolon()

        return stmt

    def parse_block_statement(self):
        block = BlockStatement(token=self.cur_token)
        self.next_token()

        self.block_depth += 1
        while not self.cur_token_is(RBRACE) and not self.cur_token_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            elif self.at_open_block_end():
                break
            self.next_token()
        self.block_depth -= 1

        if self.cur_token_is(RBRACE):
            self.claimed_brace = self.cur_token

        if self.cur_token_is(EOF):
            self.errors.append(f"expected next token to be {RBRACE}, got {EOF} instead")

        return block

    # === EXPRESSIONS ===

    def parse_expression(self, precedence):
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None

        left_exp = prefix()

        while not self.peek_token_is(SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left_exp

            self.next_token()
            left_exp = infix(left_exp)

        return left_exp

    def no_prefix_parse_fn_error(self, token_type):
        self.errors.append(f"no prefix parse function for {token_type} found")

    def parse_identifier(self):
        return Identifier(value=self.cur_token.literal, token=self.cur_token)

    def parse_integer_literal(self):
        literal = self.cur_token.literal
        value = int(literal)
        if not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f'could not parse "{literal}" as integer')
            return None
        return IntegerLiteral(value=value, token=self.cur_token)

    def parse_string_literal(self):
        return StringLiteral(value=self.cur_token.literal, token=self.cur_token)

    def parse_boolean(self):
        return Boolean(value=self.cur_token_is(TRUE), token=self.cur_token)

    def parse_prefix_expression(self):
        expression = PrefixExpression(operator=self.cur_token.literal, right=None, token=self.cur_token)
        self.next_token()
        expression.right = self.parse_expression(PREFIX)
        return expression

    def parse_infix_expression(self, left):
        expression = InfixExpression(left=left, operator=self.cur_token.literal, right=None,
                                     token=self.cur_token)
        precedence = self.cur_precedence()
        self.next_token()
        expression.right = self.parse_expression(precedence)
        return expression

    def parse_grouped_expression(self):
        self.next_token()
        exp = self.parse_expression(LOWEST)
        if not self.expect_peek(RPAREN):
            return None
        return exp

    def parse_if_expression(self):
        expression = IfExpression(condition=None, consequence=None, alternative=None, token=self.cur_token)

        if not self.expect_peek(LPAREN):
            return None

        self.next_token()
        expression.condition = self.parse_expression(LOWEST)

        if not self.expect_peek(RPAREN):
            return None

        if not self.expect_peek(LBRACE):
            return None

        expression.consequence = self.parse_block_statement()

        if self.peek_token_is(ELSE):
            self.next_token()
            if not self.expect_peek(LBRACE):
                return None
            expression.alternative = self.parse_block_statement()

        return expression

    def parse_function_parameters(self):
        params = []
        if self.peek_token_is(RPAREN):
            self.next_token()
            return params

        if not self.expect_peek(IDENT):
            return None
        params.append(Identifier(value=self.cur_token.literal, token=self.cur_token))

        while self.peek_token_is(COMMA):
            self.next_token()
            if not self.expect_peek(IDENT):
                return None
            params.append(Identifier(value=self.cur_token.literal, token=self.cur_token))

        if not self.expect_peek(RPAREN):
            return None

        return params

    def parse_function_literal(self):
        token = self.cur_token
        if not self.expect_peek(LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(LBRACE):
            return None

        return FunctionLiteral(parameters=parameters, body=self.parse_block_statement(), token=token)

    def parse_call_expression(self, function):
        exp = CallExpression(function=function, arguments=[], token=self.cur_token)
        exp.arguments = self.parse_expression_list(RPAREN)
        return exp

    def parse_array_literal(self):
        array = ArrayLiteral(elements=[], token=self.cur_token)
        array.elements = self.parse_expression_list(RBRACKET)
        return array

    def parse_index_expression(self, left):
        exp = IndexExpression(left=left, index=None, token=self.cur_token)
        self.next_token()
        exp.index = self.parse_expression(LOWEST)
        if not self.expect_peek(RBRACKET):
            return None
        return exp

    def parse_hash_literal(self):
        hash_lit = HashLiteral(pairs=[], token=self.cur_token)

        while not self.peek_token_is(RBRACE):
            self.next_token()
            key = self.parse_expression(LOWEST)

            if not self.expect_peek(COLON):
                return None

            self.next_token()
            value = self.parse_expression(LOWEST)
            hash_lit.pairs.append((key, value))

            if not self.peek_token_is(RBRACE) and not self.expect_peek(COMMA):
                return None

        if not self.expect_peek(RBRACE):
            return None
        self.claimed_brace = self.cur_token

        return hash_lit

    def parse_expression_list(self, end):
        elements = []
        if self.peek_token_is(end):
            self.next_token()
            return elements

        self.next_token()
        elements.append(self.parse_expression(LOWEST))

        while self.peek_token_is(COMMA):
            self.next_token()
            self.next_token()
            elements.append(self.parse_expression(LOWEST))

        self.expect_peek(end)
        return elements

    # === TOKEN UTILITIES ===
    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, t):
        return self.cur_token.type == t

    def peek_token_is(self, t):
        return self.peek_token.type == t

    def skip_optional_semicolon(self):
        # A `}` left over by a broken expression still belongs to its block
        if self.peek_token_is(SEMICOLON) and not self.at_open_block_end():
            self.next_token()

    def at_open_block_end(self):
        """True when a broken statement stopped on the `}` of the enclosing block."""
        return (self.block_depth > 0 and self.cur_token_is(RBRACE)
                and self.cur_token is not self.claimed_brace)

    def expect_peek(self, t):
        if self.peek_token_is(t):
            self.next_token()
            return True
        self.peek_error(t)
        return False

    def peek_error(self, t):
        self.errors.append(f"expected next token to be {t}, got {self.peek_token.type} instead")

    def peek_precedence(self):
        return precedences.get(self.peek_token.type, LOWEST)

    def cur_precedence(self):
        return precedences.get(self.cur_token.type, LOWEST)


def parse(source):
    """Parse ``source`` and return ``(program, errors)``."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
