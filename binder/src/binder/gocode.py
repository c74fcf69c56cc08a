"""
A small Go source builder.

Generators describe Go code as a tree of expressions and statements; this
module turns the tree into text. It owns indentation (tabs, as gofmt does),
literal quoting, and import qualification: a `Qual("path/to/pkg", "Name")`
renders as `pkg.Name` and adds the import to the file.

    f = File("player")
    f.add(Func("hello", [], None, [
        ExprStmt(Call(Qual("fmt", "Println"), Lit("hi"))),
    ]))
    print(f.render())
"""
import json
import re
from dataclasses import dataclass, field
from typing import Optional, Union

INDENT = "\t"


class Imports:
    """Tracks the packages a file references and the alias each one gets."""

    def __init__(self, own_path: Optional[str] = None):
        self.own_path = own_path
        self._aliases: dict[str, str] = {}  # path -> alias

    def qualify(self, path: str) -> Optional[str]:
        """Returns the alias to use for `path`, registering it on first use."""
        if path == self.own_path:
            return None
        alias = self._aliases.get(path)
        if alias is None:
            base = re.sub(r"[^0-9A-Za-z_]", "", path.rsplit("/", 1)[-1]) or "pkg"
            alias, n = base, 1
            taken = set(self._aliases.values())
            while alias in taken:
                n += 1
                alias = f"{base}{n}"
            self._aliases[path] = alias
        return alias

    def render(self) -> str:
        def spec(path: str) -> str:
            alias = self._aliases[path]
            quoted = json.dumps(path)
            return quoted if alias == path.rsplit("/", 1)[-1] else f"{alias} {quoted}"

        paths = sorted(self._aliases)
        if not paths:
            return ""
        if len(paths) == 1:
            return f"import {spec(paths[0])}\n"
        lines = "".join(f"{INDENT}{spec(p)}\n" for p in paths)
        return f"import (\n{lines})\n"


# --- Expressions -------------------------------------------------------------

class Expr:
    def render(self, imports: Imports, indent: int = 0) -> str:
        raise NotImplementedError


Code = Union[Expr, str]


def _expr(code: Code) -> Expr:
    return Id(code) if isinstance(code, str) else code


@dataclass
class Id(Expr):
    name: str

    def render(self, imports, indent=0):
        return self.name


@dataclass
class Lit(Expr):
    """A Go literal built from a Python str, int or bool."""
    value: Union[str, int, bool]

    def render(self, imports, indent=0):
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, int):
            return str(self.value)
        # JSON string escapes are a subset of Go's interpreted string escapes;
        # non-ASCII stays raw since Go rejects \u surrogate pairs.
        return json.dumps(self.value, ensure_ascii=False)


@dataclass
class Qual(Expr):
    """An identifier exported from another package."""
    path: str
    name: str

    def render(self, imports, indent=0):
        alias = imports.qualify(self.path)
        return f"{alias}.{self.name}" if alias else self.name


@dataclass
class Ptr(Expr):
    target: Code

    def render(self, imports, indent=0):
        return "*" + _expr(self.target).render(imports, indent)


@dataclass
class SliceOf(Expr):
    elem: Code

    def render(self, imports, indent=0):
        return "[]" + _expr(self.elem).render(imports, indent)


@dataclass
class MapOf(Expr):
    key: Code
    value: Code

    def render(self, imports, indent=0):
        return f"map[{_expr(self.key).render(imports, indent)}]{_expr(self.value).render(imports, indent)}"


@dataclass
class Dot(Expr):
    target: Code
    name: str

    def render(self, imports, indent=0):
        return f"{_expr(self.target).render(imports, indent)}.{self.name}"


class Call(Expr):
    """A call; `multiline` puts each argument on its own line, gofmt style."""

    def __init__(self, fn: Code, *args: Code, multiline: bool = False):
        self.fn = fn
        self.args = list(args)
        self.multiline = multiline

    def render(self, imports, indent=0):
        head = _expr(self.fn).render(imports, indent)
        if not self.multiline or not self.args:
            inner = ", ".join(_expr(a).render(imports, indent) for a in self.args)
            return f"{head}({inner})"
        pad = INDENT * (indent + 1)
        lines = "".join(f"{pad}{_expr(a).render(imports, indent + 1)},\n" for a in self.args)
        return f"{head}(\n{lines}{INDENT * indent})"


@dataclass
class Index(Expr):
    target: Code
    index: Code

    def render(self, imports, indent=0):
        return f"{_expr(self.target).render(imports, indent)}[{_expr(self.index).render(imports, indent)}]"


@dataclass
class Assert(Expr):
    """Type assertion `x.(T)`."""
    target: Code
    kind: Code

    def render(self, imports, indent=0):
        return f"{_expr(self.target).render(imports, indent)}.({_expr(self.kind).render(imports, indent)})"


@dataclass
class Not(Expr):
    operand: Code

    def render(self, imports, indent=0):
        return "!" + _expr(self.operand).render(imports, indent)


@dataclass
class Binary(Expr):
    left: Code
    op: str
    right: Code

    def render(self, imports, indent=0):
        return f"{_expr(self.left).render(imports, indent)} {self.op} {_expr(self.right).render(imports, indent)}"


@dataclass
class Composite(Expr):
    """
    A keyed composite literal such as a map. Entries are rendered one per
    line with values aligned the way gofmt aligns them.
    """
    kind: Code
    entries: list[tuple[Code, Code]] = field(default_factory=list)

    def render(self, imports, indent=0):
        head = _expr(self.kind).render(imports, indent)
        if not self.entries:
            return head + "{}"
        keys = [_expr(k).render(imports, indent + 1) for k, _ in self.entries]
        width = max(len(k) for k in keys)
        pad = INDENT * (indent + 1)
        lines = "".join(
            f"{pad}{k}:{' ' * (width - len(k) + 1)}{_expr(v).render(imports, indent + 1)},\n"
            for k, (_, v) in zip(keys, self.entries)
        )
        return f"{head}{{\n{lines}{INDENT * indent}}}"


# --- Statements --------------------------------------------------------------

class Stmt:
    def render(self, imports: Imports, indent: int = 0) -> str:
        raise NotImplementedError


def _block(body: list[Stmt], imports: Imports, indent: int) -> str:
    return "".join(s.render(imports, indent) for s in body)


@dataclass
class ExprStmt(Stmt):
    expr: Code

    def render(self, imports, indent=0):
        return f"{INDENT * indent}{_expr(self.expr).render(imports, indent)}\n"


@dataclass
class Assign(Stmt):
    """`a, b := x` (define) or `a = x`."""
    targets: list[str]
    value: Code
    define: bool = True

    def render(self, imports, indent=0):
        op = ":=" if self.define else "="
        return f"{INDENT * indent}{', '.join(self.targets)} {op} {_expr(self.value).render(imports, indent)}\n"


@dataclass
class Return(Stmt):
    value: Optional[Code] = None

    def render(self, imports, indent=0):
        if self.value is None:
            return f"{INDENT * indent}return\n"
        return f"{INDENT * indent}return {_expr(self.value).render(imports, indent)}\n"


@dataclass
class If(Stmt):
    cond: Code
    body: list[Stmt]

    def render(self, imports, indent=0):
        pad = INDENT * indent
        return (
            f"{pad}if {_expr(self.cond).render(imports, indent)} {{\n"
            f"{_block(self.body, imports, indent + 1)}"
            f"{pad}}}\n"
        )


def Panic(message: Code) -> ExprStmt:
    return ExprStmt(Call("panic", message))


# --- Top-level declarations --------------------------------------------------

@dataclass
class Comment(Stmt):
    text: str

    def render(self, imports, indent=0):
        pad = INDENT * indent
        return "".join(f"{pad}// {line}".rstrip() + "\n" for line in self.text.splitlines())


@dataclass
class Var(Stmt):
    name: str
    kind: Optional[Code] = None
    value: Optional[Code] = None

    def render(self, imports, indent=0):
        out = f"{INDENT * indent}var {self.name}"
        if self.kind is not None:
            out += " " + _expr(self.kind).render(imports, indent)
        if self.value is not None:
            out += " = " + _expr(self.value).render(imports, indent)
        return out + "\n"


@dataclass
class Func(Stmt):
    name: str
    params: list[tuple[str, Code]]
    result: Optional[Code]
    body: list[Stmt]
    doc: Optional[str] = None

    def render(self, imports, indent=0):
        params = ", ".join(f"{n} {_expr(t).render(imports, indent)}" for n, t in self.params)
        result = f" {_expr(self.result).render(imports, indent)}" if self.result is not None else ""
        doc = Comment(self.doc).render(imports, indent) if self.doc else ""
        return (
            f"{doc}func {self.name}({params}){result} {{\n"
            f"{_block(self.body, imports, indent + 1)}"
            f"}}\n"
        )


class File:
    """A Go source file: header comment, package clause, imports, declarations."""

    def __init__(self, package: str, header: Optional[str] = None, own_path: Optional[str] = None):
        self.package = package
        self.header = header
        self.own_path = own_path
        self.decls: list[Stmt] = []

    def add(self, decl: Stmt) -> "File":
        self.decls.append(decl)
        return self

    def render(self) -> str:
        # Declarations first: rendering them is what registers the imports.
        imports = Imports(self.own_path)
        body = "\n".join(d.render(imports) for d in self.decls)
        parts = []
        if self.header:
            parts.append(Comment(self.header).render(imports))
        parts.append(f"package {self.package}\n")
        rendered_imports = imports.render()
        if rendered_imports:
            parts.append(rendered_imports)
        if body:
            parts.append(body)
        return "\n".join(parts)
