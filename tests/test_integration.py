"""Integration tests.

Whole-pipeline runs over the bundled samples and a few realistic snippets.
"""

import pytest
from codeinsights.analyzer import LANGUAGES, analyze
from codeinsights.lexer import TokenType
from codeinsights.samples import SAMPLE_CODE


class TestSamples:
    """Every bundled sample analyzes cleanly"""

    @pytest.mark.parametrize("language", LANGUAGES)
    def test_sample_analyzes(self, language):
        res = analyze(SAMPLE_CODE[language], language)
        assert res.success, res.errors
        assert res.tokens[-1].type == TokenType.EOF
        assert len(res.quadruples) == len(res.three_address_code)
        assert res.symbol_table

    def test_c_sample(self):
        res = analyze(SAMPLE_CODE["c"], "c")
        assert res.tokens[0].type == TokenType.PREPROCESSOR
        assert res.symbol_table["main"].type == "int function"
        assert res.symbol_table["sum"].scope == "main"
        ops = [c.op for c in res.three_address_code]
        assert ops[:4] == ["=", "=", "+", "="]
        assert "if_false" in ops
        assert ops[-1] == "call"

    def test_cpp_sample(self):
        res = analyze(SAMPLE_CODE["cpp"], "cpp")
        table = res.symbol_table
        assert table["using_namespace_std"].type == "directive"
        assert table["Counter"].type == "class"
        assert table["count"].scope == "Counter"
        assert table["y"].scope == "main"

    def test_java_sample(self):
        res = analyze(SAMPLE_CODE["java"], "java")
        table = res.symbol_table
        assert table["Main"].type == "class"
        assert table["main"].type == "void function"
        assert table["rate"].type == "double"
        calls = [c for c in res.three_address_code if c.op == "call"]
        assert [(c.arg1, c.arg2) for c in calls] == [("System.out.println", "1")]


class TestSnippets:

    def test_function_with_loop(self):
        code = """
        int sum(int n) {
            int total = 0;
            int i = 0;
            while (i < n) {
                total = total + i;
            }
            return total;
        }
        """
        res = analyze(code)
        assert res.success
        assert [(c.op, c.arg1, c.arg2, c.result) for c in res.three_address_code] == [
            ("=", "0", None, "total"),
            ("=", "0", None, "i"),
            ("label", "L0", None, ":"),
            ("<", "i", "n", "t0"),
            ("if_false", "t0", None, "goto L1"),
            ("goto", "L0", None, ""),
            ("label", "L1", None, ":"),
        ]
        assert [(q.op, q.arg1, q.arg2, q.result) for q in res.quadruples][4] == ("JUMP_FALSE", "t0", "L1", "")

    def test_comments_and_directives_are_transparent(self):
        with_noise = """
        #include <stdio.h>
        // leading comment
        int x = 1; /* trailing */
        """
        plain = "int x = 1;"
        a, b = analyze(with_noise), analyze(plain)
        assert a.three_address_code == b.three_address_code
        assert a.symbol_table == b.symbol_table
