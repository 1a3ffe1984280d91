from codeinsights.lexer import tokenize
from codeinsights.symbols import SymbolTableBuilder, SymbolTableEntry, generate_symbol_table


def _table(src: str):
    return {k: (v.name, v.type, v.scope) for k, v in generate_symbol_table(tokenize(src)).items()}


def test_simple_declaration():
    table = generate_symbol_table(tokenize("int x = 5;"))
    assert table == {"x": SymbolTableEntry(name="x", type="int", scope="global")}


def test_declaration_without_initializer():
    assert _table("float ratio;") == {"ratio": ("ratio", "float", "global")}


def test_initializer_tail_is_skipped():
    # `foo(` inside the initializer is not a function header
    assert _table("int x = foo(y);") == {"x": ("x", "int", "global")}


def test_function_scope():
    src = """
    int add(int a, int b) {
        int sum = a + b;
        return sum;
    }
    int total;
    """
    assert _table(src) == {
        "add": ("add", "int function", "global"),
        "a": ("a", "int", "add"),
        "b": ("b", "int", "add"),
        "sum": ("sum", "int", "add"),
        "total": ("total", "int", "global"),
    }


def test_void_function():
    assert _table("void run() { }")["run"] == ("run", "void function", "global")


def test_identifier_return_type():
    assert _table("Point origin() { }")["origin"] == ("origin", "Point function", "global")


def test_call_statement_is_not_a_function():
    assert _table("printf(x);") == {}


def test_nested_block_resets_scope():
    src = """
    int main() {
        if (x) { int inner = 1; }
        int after = 2;
    }
    """
    table = _table(src)
    assert table["inner"] == ("inner", "int", "main")
    assert table["after"] == ("after", "int", "global")


def test_class_scope():
    src = "class Counter { int count; };"
    assert _table(src) == {
        "Counter": ("Counter", "class", "global"),
        "count": ("count", "int", "Counter"),
    }


def test_using_namespace():
    table = _table("using namespace std;")
    assert table == {"using_namespace_std": ("using namespace std", "directive", "global")}


def test_java_types():
    src = "String name = \"a\"; boolean ok = true; long big = 5;"
    assert _table(src) == {
        "name": ("name", "String", "global"),
        "ok": ("ok", "boolean", "global"),
        "big": ("big", "long", "global"),
    }


def test_std_string():
    assert _table('std::string s = "hi";') == {"s": ("s", "std::string", "global")}


def test_last_writer_wins():
    assert _table("int x; float x;") == {"x": ("x", "float", "global")}


def test_unknown_shapes_are_ignored():
    assert _table("x = 1; y++; return 0;") == {}


def test_builder_resets_between_runs():
    builder = SymbolTableBuilder()
    builder.build(tokenize("int a() { int b; "))
    table = builder.build(tokenize("int c;"))
    assert list(table) == ["c"]
    assert table["c"].scope == "global"


def test_to_dict():
    assert SymbolTableEntry("x", "int", "global").to_dict() == {"name": "x", "type": "int", "scope": "global"}
