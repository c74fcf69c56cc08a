from binder.src.binder.gocode import (
    Assert, Assign, Call, Composite, ExprStmt, File, Func, If, Imports, Lit, MapOf,
    Not, Panic, Ptr, Qual, Return, Var,
)


def test_literals_are_go_quoted():
    imports = Imports()
    assert Lit('say "hi"\n').render(imports) == '"say \\"hi\\"\\n"'
    assert Lit(3).render(imports) == "3"
    assert Lit(True).render(imports) == "true"


def test_qualified_names_register_imports():
    f = File("demo")
    f.add(Func("hello", [], None, [ExprStmt(Call(Qual("fmt", "Println"), Lit("hi")))]))
    assert f.render() == (
        "package demo\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "func hello() {\n"
        '\tfmt.Println("hi")\n'
        "}\n"
    )


def test_imports_are_sorted_and_aliased_only_when_needed():
    imports = Imports()
    assert imports.qualify("github.com/goby-lang/goby/vm/errors") == "errors"
    assert imports.qualify("fmt") == "fmt"
    assert imports.qualify("example.com/other/errors") == "errors2"
    assert imports.qualify("example.com/go-thing") == "gothing"
    assert imports.render() == (
        "import (\n"
        '\tgothing "example.com/go-thing"\n'
        '\terrors2 "example.com/other/errors"\n'
        '\t"fmt"\n'
        '\t"github.com/goby-lang/goby/vm/errors"\n'
        ")\n"
    )


def test_own_package_is_not_imported():
    imports = Imports(own_path="example.com/game")
    assert Qual("example.com/game", "Player").render(imports) == "Player"
    assert imports.render() == ""


def test_statements_nest_with_tabs():
    fn = Func("check", [("x", "any")], "int", [
        Assign(["v", "ok"], Assert("x", Ptr("Player"))),
        If(Not("ok"), [Panic(Lit("bad"))]),
        Return(Lit(1)),
    ])
    assert fn.render(Imports()) == (
        "func check(x any) int {\n"
        "\tv, ok := x.(*Player)\n"
        "\tif !ok {\n"
        '\t\tpanic("bad")\n'
        "\t}\n"
        "\treturn 1\n"
        "}\n"
    )


def test_var_and_composite():
    imports = Imports()
    assert Var("staticPlayer", Ptr("Player")).render(imports) == "var staticPlayer *Player\n"
    table = Composite(MapOf("string", "int"), [(Lit("a"), Lit(1)), (Lit("bbb"), Lit(2))])
    assert table.render(imports) == 'map[string]int{\n\t"a":   1,\n\t"bbb": 2,\n}'


def test_non_ascii_literals_stay_raw():
    # Go rejects \u escapes of surrogate halves, so astral letters must not be escaped.
    assert Lit("Wanted \U0001d49c").render(Imports()) == '"Wanted \U0001d49c"'
    assert Lit("tab\t").render(Imports()) == '"tab\\t"'
