import enum
import logging
from typing import Optional

from binder.src.binder.config import BinderConfig
from binder.src.binder.errors import GenerationError, UnresolvedTypeError
from binder.src.binder.gocode import (
    Assert, Assign, Binary, Call, Code, Dot, File, Func, Id, If, Index, Lit,
    Not, Panic, Ptr, Qual, Return, SliceOf, Stmt, Var,
)
from binder.src.binder.models.binding_models import ArgPair, Binding, MethodDecl, SourceUnit
from binder.src.binder.registration import mapping

logger = logging.getLogger(__name__)

HEADER = "Code generated by goby-binder. DO NOT EDIT."


# --- Failure kinds -----------------------------------------------------------

class Failure(enum.Enum):
    """
    What a generated adapter does when its input is wrong. A bad argument
    count is the caller's mistake and comes back as a Goby error object; a
    receiver or argument of the wrong Go type means dispatch itself is broken,
    so the adapter panics.
    """
    ARGUMENT_COUNT = "argument_count"
    RECEIVER_TYPE = "receiver_type"
    ARGUMENT_TYPE = "argument_type"

    @property
    def recoverable(self) -> bool:
        return self is Failure.ARGUMENT_COUNT


# --- The generator -----------------------------------------------------------

class AdapterGenerator:
    """
    Emits the adapters for one Binding. Each adapter has the VM's fixed
    method signature

        func(receiver vm.Object, line int, t *vm.Thread, args []vm.Object) vm.Object

    checks the argument count and types, and forwards to the Go method.
    """

    def __init__(self, binding: Binding, unit: SourceUnit, config: Optional[BinderConfig] = None):
        self.binding = binding
        self.unit = unit
        self.config = config or BinderConfig()

    def bind_methods(self, f: File) -> File:
        """Adds the registration block, the static receiver and every adapter to `f`."""
        b = self.binding
        f.add(mapping(b, self.unit.package, self.config))
        if b.class_methods:
            for decl in self.static_receiver():
                f.add(decl)
        for m in b.class_methods:
            f.add(self.bind_class_method(m))
        for m in b.instance_methods:
            f.add(self.bind_instance_method(m))
        return f

    def static_receiver(self) -> list[Stmt]:
        """
        The shared receiver for class methods: one per type, created on first
        use. Nothing here is synchronized; the VM has to serialize calls.
        """
        b = self.binding
        getter = Func(
            b.static_getter_name(), [], Ptr(b.class_name),
            [
                If(Binary(b.static_name(), "==", "nil"), [
                    Assign([b.static_name()], Call("new", b.class_name), define=False),
                ]),
                Return(b.static_name()),
            ],
            doc=f"{b.static_getter_name()} returns the receiver shared by all {b.class_name} class methods.\n"
                "It is not safe for concurrent use.",
        )
        return [Var(b.static_name(), Ptr(b.class_name)), getter]

    def bind_class_method(self, m: MethodDecl) -> Func:
        """Class methods run against the type's shared static receiver."""
        r = Assign(["r"], Call(self.binding.static_getter_name()))
        return self._body([r], m)

    def bind_instance_method(self, m: MethodDecl) -> Func:
        """Instance methods narrow the VM receiver to the Go type."""
        r = Assign(["r", "ok"], Assert("receiver", Ptr(self.binding.class_name)))
        return self._body([r, If(Not("ok"), [self._fail(Failure.RECEIVER_TYPE)])], m)

    # -- helpers --------------------------------------------------------------

    def _vm(self, name: str) -> Qual:
        return Qual(self.config.vm_pkg, name)

    def _errors(self, name: str) -> Qual:
        return Qual(self.config.errors_pkg, name)

    def _fail(self, failure: Failure, want: Optional[int] = None,
              index: Optional[int] = None, kind: Optional[str] = None) -> Stmt:
        if failure.recoverable:
            return Return(Call(
                Dot(Call(Dot("t", "VM")), "InitErrorObject"),
                self._errors("ArgumentError"),
                "line",
                self._errors("WrongNumberOfArgumentFormat"),
                Lit(want),
                Call("len", "args"),
            ))
        if failure is Failure.RECEIVER_TYPE:
            wanted = f"Impossible receiver type. Wanted {self.binding.class_name} got %s"
            return Panic(Call(Qual("fmt", "Sprintf"), Lit(wanted), "receiver"))
        return Panic(Lit(f"Argument {index} must be {kind}"))

    def _type_code(self, arg: ArgPair, m: MethodDecl) -> Code:
        """
        A parameter type as Go code. Qualified types go through the import the
        source file uses for that package, so the generated file imports it too.
        """
        if arg.variadic:
            raise GenerationError(
                f"{self._where(arg)}: {self.binding.class_name}.{m.name}: variadic parameters can't be bound"
            )
        if arg.kind is None:
            raise UnresolvedTypeError(
                f"{self._where(arg)}: {self.binding.class_name}.{m.name}: "
                f"cannot resolve parameter type {arg.expr!r}"
            )
        kind = arg.kind
        stars = len(kind) - len(kind.lstrip("*"))
        bare = kind[stars:]
        code: Code = Id(bare)
        if "." in bare:
            alias, member = bare.split(".", 1)
            path = self.unit.imports.get(alias)
            if path is None:
                logger.warning("%s: no import found for package %r, emitting %s as written",
                               self._where(arg), alias, kind)
            else:
                code = Qual(path, member)
        for _ in range(stars):
            code = Ptr(code)
        return code

    def _where(self, arg: ArgPair) -> str:
        return f"{self.unit.path or '<source>'}:{arg.line + 1}:{arg.col + 1}"

    def _body(self, receiver: list[Stmt], m: MethodDecl) -> Func:
        """Builds the part shared by class and instance adapters."""
        if not m.params:
            raise GenerationError(
                f"{self.binding.class_name}.{m.name} must take the thread as its first parameter"
            )

        want = m.arity
        body: list[Stmt] = list(receiver)
        body.append(If(
            Binary(Call("len", "args"), "!=", Lit(want)),
            [self._fail(Failure.ARGUMENT_COUNT, want=want)],
        ))

        call_args: list[Code] = ["t"]
        for i, arg in enumerate(m.params[1:]):
            name = f"arg{i}"
            body.append(Assign([name, "ok"], Assert(Index("args", Lit(i)), self._type_code(arg, m))))
            body.append(If(Not("ok"), [self._fail(Failure.ARGUMENT_TYPE, index=i, kind=arg.kind)]))
            call_args.append(name)

        body.append(Return(Call(Dot("r", m.name), *call_args)))

        return Func(
            self.binding.binding_name(m),
            [
                ("receiver", self._vm("Object")),
                ("line", "int"),
                ("t", Ptr(self._vm("Thread"))),
                ("args", SliceOf(self._vm("Object"))),
            ],
            self._vm("Object"),
            body,
        )


def generate(unit: SourceUnit, type_name: str, config: Optional[BinderConfig] = None) -> str:
    """
    Generates the bindings file for `type_name` and returns it as text.
    Raises UnknownTypeError if the unit never declared or bound that type.
    """
    config = config or BinderConfig()
    binding = unit.bindings.lookup(type_name)
    logger.debug(
        "generating %s: %d class methods, %d instance methods",
        type_name, len(binding.class_methods), len(binding.instance_methods),
    )
    f = File(unit.package, header=HEADER)
    AdapterGenerator(binding, unit, config).bind_methods(f)
    return f.render()
