"""
Code Insights - source-analysis pipeline for C, C++ and Java snippets

Tokenizer, three-address code and quadruple generation, and a flat symbol
table, in pure Python.
"""

__version__ = "0.1.0"
__author__ = "Code Insights Contributors"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexError, tokenize
from .ir import IRGenerator, ThreeAddressCode, generate_tac
from .quadruples import Quadruple, QuadrupleLowering, generate_quadruples
from .symbols import SymbolTableBuilder, SymbolTableEntry, generate_symbol_table
from .analyzer import Analyzer, AnalysisResult, analyze

__all__ = [
    'Lexer',
    'Token',
    'TokenType',
    'LexError',
    'tokenize',
    'IRGenerator',
    'ThreeAddressCode',
    'generate_tac',
    'Quadruple',
    'QuadrupleLowering',
    'generate_quadruples',
    'SymbolTableBuilder',
    'SymbolTableEntry',
    'generate_symbol_table',
    'Analyzer',
    'AnalysisResult',
    'analyze',
]
