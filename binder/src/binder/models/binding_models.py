# --- Data models for the binding table ---------------------------------------
from dataclasses import dataclass, field
from typing import Iterator, Optional

from binder.src.binder.errors import UnknownTypeError


@dataclass
class ArgPair:
    """One declared parameter of a method, in declaration order."""
    name: str  # declared name, "" for unnamed parameters
    kind: Optional[str]  # pointer-preserving type name, None if unresolvable
    expr: str  # raw source text of the type expression
    line: int
    col: int
    variadic: bool = False


@dataclass
class MethodDecl:
    """A Go method whose single result is the marker type."""
    name: str  # e.g., "SetHealth"
    receiver_type: str  # bare owning type, pointer stripped
    receiver_name: Optional[str]  # None when the receiver is anonymous
    params: list[ArgPair]
    result_type: str
    line: int
    col: int

    @property
    def is_class_method(self) -> bool:
        return self.receiver_name is None

    @property
    def arity(self) -> int:
        """User-facing argument count; the first parameter is the thread context."""
        return len(self.params) - 1

    def signature(self) -> str:
        params = ", ".join(f"{p.name} {p.expr}".strip() for p in self.params)
        return f"{self.name}({params}) {self.result_type}"


@dataclass
class Binding:
    """Holds everything needed to expose one Go type as a Goby class."""
    class_name: str
    class_methods: list[MethodDecl] = field(default_factory=list)  # func (Class) myFunc
    instance_methods: list[MethodDecl] = field(default_factory=list)  # func (c *Class) myFunc

    def add(self, method: MethodDecl):
        if method.is_class_method:
            self.class_methods.append(method)
        else:
            self.instance_methods.append(method)

    def methods(self) -> Iterator[MethodDecl]:
        yield from self.class_methods
        yield from self.instance_methods

    def static_name(self) -> str:
        return f"static{self.class_name}"

    def static_getter_name(self) -> str:
        return f"static{self.class_name}Instance"

    def binding_name(self, method: MethodDecl) -> str:
        return f"binding{self.class_name}{method.name}"


class BindingTable:
    """
    TypeName -> Binding, in first-sighting order. Bindings are created lazily
    and never removed; a type declaration merges into an existing entry.
    """

    def __init__(self):
        self._bindings: dict[str, Binding] = {}

    def binding_for(self, name: str) -> Binding:
        """Looks up the binding for `name`, creating an empty one on first sight."""
        b = self._bindings.get(name)
        if b is None:
            b = Binding(class_name=name)
            self._bindings[name] = b
        return b

    def declare_type(self, name: str) -> Binding:
        # Methods may precede their type declaration; keep what was found.
        return self.binding_for(name)

    def lookup(self, name: str) -> Binding:
        try:
            return self._bindings[name]
        except KeyError:
            raise UnknownTypeError(name, self.names()) from None

    def names(self) -> list[str]:
        return list(self._bindings)

    def __contains__(self, name: str) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[Binding]:
        return iter(self._bindings.values())

    def __len__(self) -> int:
        return len(self._bindings)


@dataclass
class SourceUnit:
    """The classified view of one Go source file."""
    path: Optional[str]
    package: str
    imports: dict[str, str] = field(default_factory=dict)  # alias -> import path
    bindings: BindingTable = field(default_factory=BindingTable)
