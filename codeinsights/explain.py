"""codeinsights.explain

Input for the external code-explanation service.

The service itself (a language model behind an API) is not part of this
package. This module only builds the request record and renders the prompt
text it is given; nothing here waits on or reads a response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List
import json

from codeinsights.analyzer import AnalysisResult
from codeinsights.ir import ThreeAddressCode
from codeinsights.quadruples import Quadruple
from codeinsights.report import format_quadruples, format_tac


LANGUAGE_NAMES: Dict[str, str] = {"c": "C", "cpp": "C++", "java": "Java"}


@dataclass
class ExplanationRequest:
    language: str
    source_code: str
    tokens: List[Dict[str, Any]] = field(default_factory=list)
    three_address_code: List[Dict[str, Any]] = field(default_factory=list)
    quadruples: List[Dict[str, Any]] = field(default_factory=list)
    symbol_table: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "ExplanationRequest":
        data = result.to_dict()
        return cls(
            language=data["language"],
            source_code=data["sourceCode"],
            tokens=data["tokens"],
            three_address_code=data["threeAddressCode"],
            quadruples=data["quadruples"],
            symbol_table=data["symbolTable"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "language": self.language,
            "sourceCode": self.source_code,
            "tokens": self.tokens,
            "threeAddressCode": self.three_address_code,
            "quadruples": self.quadruples,
            "symbolTable": self.symbol_table,
        }


TASK = """Provide a clear and concise explanation covering the following points:
*   **Overall Purpose:** What does the source code do?
*   **Key Structures:** Identify and briefly explain major programming constructs (loops, conditionals, functions, classes if applicable).
*   **Tokenization:** Briefly explain what tokens represent and mention any interesting or complex tokens found.
*   **Intermediate Code (TAC/Quads):** Explain the purpose of this representation and relate a small segment of it back to the source code.
*   **Symbol Table:** Explain what the symbol table stores and what a couple of its entries tell us.
*   **Language Features:** Briefly mention any notable {language}-specific features used.

Structure your explanation clearly. Use markdown formatting for readability."""


def _fenced(body: str, info: str = "") -> str:
    return f"```{info}\n{body}\n```"


def build_prompt(request: ExplanationRequest) -> str:
    """Render the prompt text for the explanation service"""
    language = LANGUAGE_NAMES.get(request.language, request.language)
    tac = [ThreeAddressCode(**c) for c in request.three_address_code]
    quads = [Quadruple(**q) for q in request.quadruples]

    parts = [
        "You are an expert compiler design assistant and programmer. "
        f"Your task is to explain a given piece of {language} source code based on its analysis results.",
        "",
        "Here is the source code:",
        _fenced(request.source_code.rstrip("\n"), request.language),
        "",
        "Here are the analysis results:",
        "",
        "**1. Tokens:**",
        _fenced(json.dumps(request.tokens, indent=2), "json") if request.tokens
        else "(No tokens provided or generated)",
        "",
        "**2. Three-Address Code (TAC):**",
        _fenced(format_tac(tac)) if tac else "(No TAC provided or generated)",
        "",
        "**3. Quadruples:**",
        _fenced(format_quadruples(quads)) if quads else "(No Quadruples provided or generated)",
        "",
        "**4. Symbol Table:**",
        _fenced(json.dumps(request.symbol_table, indent=2), "json") if request.symbol_table
        else "(No Symbol Table provided or generated)",
        "",
        "**Your Explanation Task:**",
        "",
        TASK.format(language=language),
    ]
    return "\n".join(parts) + "\n"
