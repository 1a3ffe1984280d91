import json

import pytest

from codeinsights.analyzer import analyze
from codeinsights.explain import ExplanationRequest, build_prompt
from codeinsights.ir import ThreeAddressCode
from codeinsights.quadruples import Quadruple
from codeinsights.report import (
    format_quadruples,
    format_result,
    format_symbol_table,
    format_tac,
)


def test_format_tac():
    tac = [ThreeAddressCode('+', 'a', 'b', 't0'), ThreeAddressCode('=', 't0', None, 'x')]
    assert format_tac(tac) == "1: +\ta\tb\t=> t0\n2: =\tt0\t \t=> x"


def test_format_quadruples():
    quads = [Quadruple('JUMP_FALSE', 't0', 'L0', ''), Quadruple('label', 'L0', None, ':')]
    assert format_quadruples(quads) == "0: (JUMP_FALSE, t0, L0, )\n1: (label, L0, _, :)"


def test_format_empty():
    assert format_tac([]) == "(empty)"
    assert format_quadruples([]) == "(empty)"
    assert format_symbol_table({}) == "(empty)"


def test_format_result_sections():
    text = format_result(analyze("int x = 5;"), ["tac", "symbols"])
    assert "== Three-Address Code ==" in text
    assert "== Symbol Table ==" in text
    assert "== Tokens ==" not in text
    assert "[global]" in text


def test_format_result_unknown_section():
    with pytest.raises(ValueError):
        format_result(analyze("x = 1;"), ["ast"])


def test_request_from_result():
    req = ExplanationRequest.from_result(analyze("int x = 5;", "cpp"))
    data = req.to_dict()
    assert data["language"] == "cpp"
    assert data["sourceCode"] == "int x = 5;"
    assert data["symbolTable"] == {"x": {"name": "x", "type": "int", "scope": "global"}}
    json.dumps(data)


def test_prompt_contents():
    prompt = build_prompt(ExplanationRequest.from_result(analyze("x = a + b;", "java")))
    assert "piece of Java source code" in prompt
    assert "```java\nx = a + b;\n```" in prompt
    assert "1: +\ta\tb\t=> t0" in prompt
    assert "0: (+, a, b, t0)" in prompt
    assert "(No Symbol Table provided or generated)" in prompt
    assert "Java-specific features" in prompt


def test_prompt_without_intermediate_code():
    prompt = build_prompt(ExplanationRequest.from_result(analyze("int y;")))
    assert "(No TAC provided or generated)" in prompt
    assert "(No Quadruples provided or generated)" in prompt
    assert '"y"' in prompt
