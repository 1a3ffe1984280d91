"""
Plain-text renderings of analysis results
"""

from __future__ import annotations

from typing import List, Sequence

from codeinsights.analyzer import AnalysisResult
from codeinsights.ir import ThreeAddressCode
from codeinsights.lexer import Token
from codeinsights.quadruples import Quadruple
from codeinsights.symbols import SymbolTable


def format_tokens(tokens: Sequence[Token]) -> str:
    lines = []
    for tok in tokens:
        lines.append(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.value!r}")
    return "\n".join(lines)


def format_tac(tac: Sequence[ThreeAddressCode]) -> str:
    """One instruction per line, numbered from 1"""
    if not tac:
        return "(empty)"
    return "\n".join(
        f"{i + 1}: {c.op}\t{c.arg1 if c.arg1 is not None else ' '}\t"
        f"{c.arg2 if c.arg2 is not None else ' '}\t=> {c.result}"
        for i, c in enumerate(tac)
    )


def format_quadruples(quads: Sequence[Quadruple]) -> str:
    """One quadruple per line, numbered from 0, `_` for missing arguments"""
    if not quads:
        return "(empty)"
    return "\n".join(
        f"{i}: ({q.op}, {q.arg1 if q.arg1 is not None else '_'}, "
        f"{q.arg2 if q.arg2 is not None else '_'}, {q.result})"
        for i, q in enumerate(quads)
    )


def format_symbol_table(table: SymbolTable) -> str:
    if not table:
        return "(empty)"
    width = max(len(e.name) for e in table.values())
    return "\n".join(
        f"{e.name.ljust(width)}  {e.type}  [{e.scope}]"
        for e in table.values()
    )


SECTIONS = ("tokens", "tac", "quads", "symbols")


def format_result(result: AnalysisResult, sections: Sequence[str] = SECTIONS) -> str:
    """Render the requested sections of a successful analysis"""
    out: List[str] = []
    for section in sections:
        if section == "tokens":
            out += ["== Tokens ==", format_tokens(result.tokens)]
        elif section == "tac":
            out += ["== Three-Address Code ==", format_tac(result.three_address_code)]
        elif section == "quads":
            out += ["== Quadruples ==", format_quadruples(result.quadruples)]
        elif section == "symbols":
            out += ["== Symbol Table ==", format_symbol_table(result.symbol_table)]
        else:
            raise ValueError(f"unknown section '{section}'")
        out.append("")
    return "\n".join(out)
