"""codeinsights.symbols

Token-level symbol table construction.

Goals:
- record declared variables with their declared type keyword
- record function headers (`int main(`) and classes (`class Foo`)
- note `using namespace X;` directives
- keep a single "current scope" label (global / function / class name)

Scope tracking is flat on purpose: every `}` resets the scope to "global",
so a nested block inside a function ends the function's scope early.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple
import logging

from codeinsights.lexer import Token, TokenType

logger = logging.getLogger(__name__)


GLOBAL_SCOPE = "global"

DECL_TYPES: Set[str] = {
    'let', 'const', 'var', 'int', 'float', 'double', 'char', 'auto',
    'String', 'boolean', 'byte', 'short', 'long', 'std::string',
}

RETURN_TYPES: Set[str] = DECL_TYPES | {'void'}


@dataclass
class SymbolTableEntry:
    name: str
    type: str
    scope: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "scope": self.scope}


SymbolTable = Dict[str, SymbolTableEntry]


class SymbolTableBuilder:
    """Builds a flat symbol table from a token stream"""

    def __init__(self):
        self.table: SymbolTable = {}
        self.tokens: List[Token] = []
        self.scope = GLOBAL_SCOPE

    def build(self, tokens: Sequence[Token]) -> SymbolTable:
        self.table = {}
        self.tokens = list(tokens)
        self.scope = GLOBAL_SCOPE

        i = 0
        while i < len(self.tokens):
            tok = self.tokens[i]
            if tok.type == TokenType.EOF:
                break

            if tok.type == TokenType.PUNCTUATION and tok.value == '}':
                self.scope = GLOBAL_SCOPE
                i += 1
                continue

            nxt = (
                self._class_decl(i)
                or self._using_namespace(i)
                or self._variable_decl(i)
                or self._function_header(i)
            )
            i = nxt if nxt is not None else i + 1

        logger.debug("symbol table holds %d entries", len(self.table))
        return self.table

    def _tok(self, i: int) -> Optional[Token]:
        if 0 <= i < len(self.tokens):
            return self.tokens[i]
        return None

    def _declare(self, name: str, type_: str, scope: str) -> None:
        self.table[name] = SymbolTableEntry(name=name, type=type_, scope=scope)

    def _type_at(self, i: int) -> Optional[Tuple[str, int]]:
        """Declaration type starting at `i` and the number of tokens it spans"""
        tok = self._tok(i)
        if tok is None or tok.type not in (TokenType.KEYWORD, TokenType.IDENTIFIER):
            return None
        sep, name = self._tok(i + 1), self._tok(i + 2)
        if (
            tok.value == 'std'
            and sep is not None and sep.value == '::'
            and name is not None and name.value == 'string'
        ):
            return 'std::string', 3
        if tok.value in DECL_TYPES:
            return tok.value, 1
        return None

    def _class_decl(self, i: int) -> Optional[int]:
        tok, prev = self.tokens[i], self._tok(i - 1)
        if tok.type != TokenType.IDENTIFIER:
            return None
        if prev is None or prev.type != TokenType.KEYWORD or prev.value != 'class':
            return None
        self._declare(tok.value, 'class', GLOBAL_SCOPE)
        self.scope = tok.value
        return i + 1

    def _using_namespace(self, i: int) -> Optional[int]:
        tok = self.tokens[i]
        if tok.type != TokenType.KEYWORD or tok.value != 'using':
            return None
        ns, name = self._tok(i + 1), self._tok(i + 2)
        if ns is None or ns.value != 'namespace' or name is None or name.type == TokenType.EOF:
            return None
        semi = self._tok(i + 3)
        if semi is None or semi.value != ';':
            return None
        self.table[f"using_namespace_{name.value}"] = SymbolTableEntry(
            name=f"using namespace {name.value}", type='directive', scope=self.scope,
        )
        return i + 4

    def _variable_decl(self, i: int) -> Optional[int]:
        found = self._type_at(i)
        if found is None:
            return None
        type_text, width = found
        ident = self._tok(i + width)
        if ident is None or ident.type != TokenType.IDENTIFIER:
            return None
        after = self._tok(i + width + 1)
        if after is not None and after.value == '(':
            # `int main(` is a function header, handled at the identifier
            return None

        self._declare(ident.value, type_text, self.scope)
        j = i + width + 1
        if after is not None and after.type == TokenType.OPERATOR and after.value == '=':
            while j < len(self.tokens) and self.tokens[j].type != TokenType.EOF and self.tokens[j].value != ';':
                j += 1
        return j

    def _function_header(self, i: int) -> Optional[int]:
        tok, nxt, prev = self.tokens[i], self._tok(i + 1), self._tok(i - 1)
        if tok.type != TokenType.IDENTIFIER or nxt is None or nxt.value != '(' or prev is None:
            return None
        if prev.type == TokenType.IDENTIFIER or (prev.type == TokenType.KEYWORD and prev.value in RETURN_TYPES):
            self._declare(tok.value, f"{prev.value} function", GLOBAL_SCOPE)
            self.scope = tok.value
            return i + 1
        return None


def generate_symbol_table(tokens: Sequence[Token]) -> SymbolTable:
    """Build a symbol table with a fresh SymbolTableBuilder"""
    return SymbolTableBuilder().build(tokens)
