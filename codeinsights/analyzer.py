"""
Analysis Driver

Runs the pipeline: tokens, then three-address code and quadruples, and the
symbol table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging
import os

from codeinsights.lexer import Lexer, LexError, Token
from codeinsights.ir import IRGenerator, ThreeAddressCode
from codeinsights.quadruples import Quadruple, QuadrupleLowering
from codeinsights.symbols import SymbolTable, SymbolTableBuilder

logger = logging.getLogger(__name__)


LANGUAGES = ("c", "cpp", "java")

EXTENSION_LANGUAGES: Dict[str, str] = {
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".java": "java",
}


def check_language(language: str) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"unsupported language '{language}' (expected one of: {', '.join(LANGUAGES)})")
    return language


def language_for_path(path: str) -> Optional[str]:
    """Language tag for a file name, from its extension"""
    return EXTENSION_LANGUAGES.get(os.path.splitext(path)[1].lower())


@dataclass
class AnalysisResult:
    """Result of analysis"""
    success: bool
    language: str
    source_code: str
    tokens: List[Token] = field(default_factory=list)
    three_address_code: List[ThreeAddressCode] = field(default_factory=list)
    quadruples: List[Quadruple] = field(default_factory=list)
    symbol_table: SymbolTable = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape shared by the history store and explanation request"""
        return {
            "language": self.language,
            "sourceCode": self.source_code,
            "tokens": [t.to_dict() for t in self.tokens],
            "threeAddressCode": [c.to_dict() for c in self.three_address_code],
            "quadruples": [q.to_dict() for q in self.quadruples],
            "symbolTable": {k: v.to_dict() for k, v in self.symbol_table.items()},
        }


class Analyzer:
    """Main analyzer class orchestrating all pipeline stages"""

    def __init__(self, language: str = "c"):
        self.language = check_language(language)

    def analyze_file(self, source_file: str) -> AnalysisResult:
        """Analyze a source file; the extension overrides the default language."""
        language = language_for_path(source_file) or self.language
        try:
            with open(source_file, 'r', encoding='utf-8') as f:
                source_code = f.read()
        except (OSError, UnicodeDecodeError) as e:
            return AnalysisResult(
                success=False,
                language=language,
                source_code="",
                errors=[f"Failed to read source file: {e}"],
            )
        return self.analyze_code(source_code, language=language)

    def analyze_code(self, source_code: str, language: Optional[str] = None) -> AnalysisResult:
        """Analyze source code"""
        language = check_language(language or self.language)

        if not source_code.strip():
            return AnalysisResult(
                success=False,
                language=language,
                source_code=source_code,
                errors=["No source code to analyze"],
            )

        # A lexical error aborts everything; no partial token list is kept.
        try:
            tokens = self.get_tokens(source_code)
        except LexError as e:
            logger.warning("lexical analysis failed: %s", e)
            return AnalysisResult(
                success=False,
                language=language,
                source_code=source_code,
                errors=[str(e)],
            )

        tac = self.get_tac(tokens)
        return AnalysisResult(
            success=True,
            language=language,
            source_code=source_code,
            tokens=tokens,
            three_address_code=tac,
            quadruples=self.get_quadruples(tac),
            symbol_table=self.get_symbol_table(tokens),
        )

    def get_tokens(self, source_code: str) -> List[Token]:
        """Get tokens from source code"""
        return Lexer(source_code).tokenize()

    def get_tac(self, tokens: List[Token]) -> List[ThreeAddressCode]:
        """Generate three-address code from tokens"""
        return IRGenerator().generate(tokens)

    def get_quadruples(self, tac: List[ThreeAddressCode]) -> List[Quadruple]:
        """Lower TAC to quadruples"""
        return QuadrupleLowering().lower(tac)

    def get_symbol_table(self, tokens: List[Token]) -> SymbolTable:
        """Build the symbol table from tokens"""
        return SymbolTableBuilder().build(tokens)


def analyze(source_code: str, language: str = "c") -> AnalysisResult:
    """Analyze one snippet with a fresh Analyzer"""
    return Analyzer(language).analyze_code(source_code)
