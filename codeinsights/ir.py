"""codeinsights.ir

Intermediate Representation (IR): three-address code.

There is no parser in front of this module. The generator walks the token
stream with a cursor and recognizes a handful of statement shapes with
bounded lookahead:

- `x = a;` / `x = a + b;`
- `int x = a + b;` (declaration with initializer)
- `if (a < b) ...`
- `while (a < b) ...`
- `foo(a, b);` (statement-level call)

Anything it cannot match is stepped over one token at a time. Expressions
with more than one operator degrade to the `expr(...)` placeholder operand.

Operands are plain strings: identifiers and literals as written, temporaries
`t0, t1, ...` and labels `L0, L1, ...`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple
import logging

from codeinsights.lexer import Token, TokenType

logger = logging.getLogger(__name__)


# Operand placeholder for expressions outside the supported shapes
EXPR_PLACEHOLDER = "expr(...)"
COMPLEX_COND = "complex_cond"
COMPLEX_ELSE_LABEL = "L_complex_else"

DECL_KEYWORDS: Set[str] = {'let', 'const', 'var', 'int', 'float', 'double', 'char', 'auto'}

BINARY_OPERATORS: Set[str] = {
    '+', '-', '*', '/', '%',
    '==', '===', '!=', '!==', '<', '>', '<=', '>=',
    '&&', '||', '&', '|', '^', '<<', '>>',
}

COMPARISON_OPERATORS: Set[str] = {'==', '===', '!=', '!==', '<', '>', '<=', '>='}

MEMBER_OPERATORS: Set[str] = {'.', '->', '::'}

OPERAND_TYPES = (TokenType.IDENTIFIER, TokenType.NUMBER, TokenType.STRING, TokenType.CHARACTER)

# Keywords that name a value
LITERAL_KEYWORDS: Set[str] = {'true', 'false', 'null', 'nullptr', 'undefined'}


@dataclass
class ThreeAddressCode:
    op: str
    arg1: Optional[str]
    arg2: Optional[str]
    result: str

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "arg1": self.arg1, "arg2": self.arg2, "result": self.result}


def _is_operand(tok: Optional[Token]) -> bool:
    if tok is None:
        return False
    if tok.type == TokenType.KEYWORD:
        return tok.value in LITERAL_KEYWORDS
    return tok.type in OPERAND_TYPES


def _is_punct(tok: Optional[Token], value: str) -> bool:
    return tok is not None and tok.type == TokenType.PUNCTUATION and tok.value == value


def _is_op(tok: Optional[Token], value: str) -> bool:
    return tok is not None and tok.type == TokenType.OPERATOR and tok.value == value


class IRGenerator:
    """Generates three-address code from a token stream"""

    def __init__(self):
        self.instructions: List[ThreeAddressCode] = []
        self.tokens: List[Token] = []
        self.temp_counter = 0
        self.label_counter = 0
        # Recognizers are tried in order; each returns the cursor past the
        # statement it matched, or None.
        self._shapes: List[Tuple[str, Callable[[int], Optional[int]]]] = [
            ("declaration", self._match_declaration),
            ("assignment", self._match_assignment),
            ("if", self._match_if),
            ("while", self._match_while),
            ("call", self._match_call),
        ]

    def generate(self, tokens: Sequence[Token]) -> List[ThreeAddressCode]:
        """Generate TAC from tokens"""
        self.instructions = []
        self.tokens = list(tokens)
        self.temp_counter = 0
        self.label_counter = 0

        i = 0
        while i < len(self.tokens):
            if self.tokens[i].type == TokenType.EOF:
                break
            for name, recognize in self._shapes:
                nxt = recognize(i)
                if nxt is not None:
                    logger.debug("matched %s at token %d", name, i)
                    i = nxt
                    break
            else:
                i += 1

        logger.debug(
            "generated %d instructions (%d temporaries, %d labels)",
            len(self.instructions), self.temp_counter, self.label_counter,
        )
        return self.instructions

    # -------------
    # Helpers
    # -------------

    def _tok(self, i: int) -> Optional[Token]:
        if 0 <= i < len(self.tokens):
            return self.tokens[i]
        return None

    def _emit(self, op: str, arg1: Optional[str], arg2: Optional[str], result: str) -> None:
        self.instructions.append(ThreeAddressCode(op=op, arg1=arg1, arg2=arg2, result=result))

    def _new_temp(self) -> str:
        t = f"t{self.temp_counter}"
        self.temp_counter += 1
        return t

    def _new_label(self) -> str:
        l = f"L{self.label_counter}"
        self.label_counter += 1
        return l

    def _find_closing(self, i: int, open_: str, close: str) -> Optional[int]:
        """Index of the bracket closing the one at `i`, or None"""
        depth = 0
        j = i
        while j < len(self.tokens):
            tok = self.tokens[j]
            if _is_punct(tok, open_):
                depth += 1
            elif _is_punct(tok, close):
                depth -= 1
                if depth == 0:
                    return j
            j += 1
        return None

    def _expression_end(self, i: int) -> Optional[int]:
        """Index of the ';' ending an expression starting at `i`.

        Braces, an unbalanced ')' or EOF before the ';' mean the statement is
        not a simple one and nothing is matched.
        """
        depth = 0
        j = i
        while j < len(self.tokens):
            tok = self.tokens[j]
            if tok.type == TokenType.EOF or _is_punct(tok, '{') or _is_punct(tok, '}'):
                return None
            if _is_punct(tok, '('):
                depth += 1
            elif _is_punct(tok, ')'):
                if depth == 0:
                    return None
                depth -= 1
            elif _is_punct(tok, ';') and depth == 0:
                return j
            j += 1
        return None

    def _skip_body(self, i: int) -> int:
        """Skip a statement body starting at `i` without generating code"""
        if _is_punct(self._tok(i), '{'):
            close = self._find_closing(i, '{', '}')
            if close is None:
                return len(self.tokens)
            return close + 1
        j = i
        while j < len(self.tokens) and self.tokens[j].type != TokenType.EOF:
            if _is_punct(self.tokens[j], ';'):
                return j + 1
            j += 1
        return j

    # -------------
    # Expressions
    # -------------

    def _gen_assign(self, target: str, expr: List[Token]) -> None:
        if len(expr) == 1 and _is_operand(expr[0]):
            self._emit('=', expr[0].value, None, target)
            return
        if (
            len(expr) == 3
            and _is_operand(expr[0])
            and expr[1].type == TokenType.OPERATOR
            and expr[1].value in BINARY_OPERATORS
            and _is_operand(expr[2])
        ):
            t = self._new_temp()
            self._emit(expr[1].value, expr[0].value, expr[2].value, t)
            self._emit('=', t, None, target)
            return
        self._emit('=', EXPR_PLACEHOLDER, None, target)

    def _simple_condition(self, cond: List[Token]) -> Optional[Tuple[str, str, str]]:
        if (
            len(cond) == 3
            and _is_operand(cond[0])
            and cond[1].type == TokenType.OPERATOR
            and cond[1].value in COMPARISON_OPERATORS
            and _is_operand(cond[2])
        ):
            return cond[1].value, cond[0].value, cond[2].value
        return None

    def _condition(self, i: int) -> Optional[Tuple[List[Token], int]]:
        """Tokens of a parenthesized condition at `i` and the index after ')'"""
        if not _is_punct(self._tok(i), '('):
            return None
        close = self._find_closing(i, '(', ')')
        if close is None:
            return None
        return self.tokens[i + 1:close], close + 1

    # -------------
    # Statements
    # -------------

    def _match_declaration(self, i: int) -> Optional[int]:
        tok = self.tokens[i]
        if tok.type != TokenType.KEYWORD or tok.value not in DECL_KEYWORDS:
            return None
        name = self._tok(i + 1)
        if name is None or name.type != TokenType.IDENTIFIER or not _is_op(self._tok(i + 2), '='):
            return None
        end = self._expression_end(i + 3)
        if end is None:
            return None
        self._gen_assign(name.value, self.tokens[i + 3:end])
        return end + 1

    def _match_assignment(self, i: int) -> Optional[int]:
        tok = self.tokens[i]
        if tok.type != TokenType.IDENTIFIER or not _is_op(self._tok(i + 1), '='):
            return None
        prev = self._tok(i - 1)
        if prev is not None and prev.type == TokenType.OPERATOR and prev.value in MEMBER_OPERATORS:
            return None
        end = self._expression_end(i + 2)
        if end is None:
            return None
        self._gen_assign(tok.value, self.tokens[i + 2:end])
        return end + 1

    def _match_if(self, i: int) -> Optional[int]:
        tok = self.tokens[i]
        if tok.type != TokenType.KEYWORD or tok.value != 'if':
            return None
        parsed = self._condition(i + 1)
        if parsed is None:
            return None
        cond, body = parsed

        simple = self._simple_condition(cond)
        if simple is None:
            self._emit('if_false', COMPLEX_COND, None, f"goto {COMPLEX_ELSE_LABEL}")
            return self._skip_body(body)

        op, a, b = simple
        t = self._new_temp()
        else_lbl = self._new_label()
        self._emit(op, a, b, t)
        self._emit('if_false', t, None, f"goto {else_lbl}")
        self._emit('label', else_lbl, None, ':')
        return self._skip_body(body)

    def _match_while(self, i: int) -> Optional[int]:
        tok = self.tokens[i]
        if tok.type != TokenType.KEYWORD or tok.value != 'while':
            return None
        parsed = self._condition(i + 1)
        if parsed is None:
            return None
        cond, body = parsed

        start_lbl = self._new_label()
        end_lbl = self._new_label()
        self._emit('label', start_lbl, None, ':')
        simple = self._simple_condition(cond)
        if simple is None:
            self._emit('if_false', COMPLEX_COND, None, f"goto {end_lbl}")
        else:
            op, a, b = simple
            t = self._new_temp()
            self._emit(op, a, b, t)
            self._emit('if_false', t, None, f"goto {end_lbl}")
        nxt = self._skip_body(body)
        self._emit('goto', start_lbl, None, '')
        self._emit('label', end_lbl, None, ':')
        return nxt

    def _at_statement_start(self, i: int) -> bool:
        prev = self._tok(i - 1)
        if prev is None:
            return True
        if prev.type == TokenType.PUNCTUATION and prev.value in (';', '{', '}'):
            return True
        if _is_op(prev, ':'):
            return True
        return prev.type == TokenType.KEYWORD and prev.value in ('else', 'do')

    def _match_call(self, i: int) -> Optional[int]:
        if self.tokens[i].type != TokenType.IDENTIFIER or not self._at_statement_start(i):
            return None

        # callee: ident ((. | -> | ::) ident)*
        parts = [self.tokens[i].value]
        j = i + 1
        while True:
            sep, name = self._tok(j), self._tok(j + 1)
            if (
                sep is not None
                and sep.type == TokenType.OPERATOR
                and sep.value in MEMBER_OPERATORS
                and name is not None
                and name.type == TokenType.IDENTIFIER
            ):
                parts += [sep.value, name.value]
                j += 2
                continue
            break

        if not _is_punct(self._tok(j), '('):
            return None
        close = self._find_closing(j, '(', ')')
        if close is None or not _is_punct(self._tok(close + 1), ';'):
            return None

        args = self._split_args(self.tokens[j + 1:close])
        for arg in args:
            if len(arg) == 1 and _is_operand(arg[0]):
                self._emit('param', arg[0].value, None, '')
            else:
                self._emit('param', EXPR_PLACEHOLDER, None, '')
        self._emit('call', "".join(parts), str(len(args)), self._new_temp())
        return close + 2

    def _split_args(self, toks: List[Token]) -> List[List[Token]]:
        """Split call arguments on top-level commas, dropping empty ones"""
        args: List[List[Token]] = []
        cur: List[Token] = []
        depth = 0
        for tok in toks:
            if tok.type == TokenType.PUNCTUATION and tok.value in ('(', '['):
                depth += 1
            elif tok.type == TokenType.PUNCTUATION and tok.value in (')', ']'):
                depth -= 1
            elif _is_punct(tok, ',') and depth == 0:
                if cur:
                    args.append(cur)
                cur = []
                continue
            cur.append(tok)
        if cur:
            args.append(cur)
        return args


def generate_tac(tokens: Sequence[Token]) -> List[ThreeAddressCode]:
    """Generate three-address code with a fresh IRGenerator"""
    return IRGenerator().generate(tokens)
