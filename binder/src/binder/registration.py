# --- The init() block that registers a binding with the VM -------------------
import unicodedata

from binder.src.binder.config import BinderConfig
from binder.src.binder.errors import GenerationError
from binder.src.binder.gocode import Call, Composite, ExprStmt, Func, Id, Lit, MapOf, Qual
from binder.src.binder.models.binding_models import Binding, MethodDecl


def _char_class(ch: str) -> int:
    if ch.islower():
        return 1
    if ch.isupper():
        return 2
    if unicodedata.category(ch) == "Nd":
        return 3
    return 4


def split_camel_case(s: str) -> list[str]:
    """
    Splits an identifier into words at case and digit boundaries:
      "SetHealth" -> ["Set", "Health"]
      "HTTPServer" -> ["HTTP", "Server"]
      "Level2Boss" -> ["Level", "2", "Boss"]
    An upper-case run followed by lower-case letters hands its last capital to
    the lower-case word.
    """
    runs: list[list[str]] = []
    last = 0
    for ch in s:
        cls = _char_class(ch)
        if runs and cls == last:
            runs[-1].append(ch)
        else:
            runs.append([ch])
        last = cls

    for i in range(len(runs) - 1):
        if runs[i][0].isupper() and runs[i + 1][0].islower():
            runs[i + 1].insert(0, runs[i].pop())

    return ["".join(r) for r in runs if r]


def external_name(identifier: str) -> str:
    """The name a Go method is registered under in Goby: SetHealth -> set_health."""
    return "_".join(split_camel_case(identifier)).lower()


def method_table(binding: Binding, methods: list[MethodDecl], config: BinderConfig) -> Composite:
    entries: dict[str, MethodDecl] = {}
    for m in methods:
        key = external_name(m.name)
        if key in entries:
            raise GenerationError(
                f"{binding.class_name}.{m.name} and {binding.class_name}.{entries[key].name} "
                f"would both be registered as {key!r}"
            )
        entries[key] = m
    return Composite(
        MapOf("string", Qual(config.vm_pkg, "Method")),
        [(Lit(k), Id(binding.binding_name(entries[k]))) for k in sorted(entries)],
    )


def mapping(binding: Binding, pkg: str, config: BinderConfig) -> Func:
    """
    Generates the init() function that hands both method tables to the VM's
    class registry when the package is loaded.
    """
    register = Call(
        Qual(config.vm_pkg, "RegisterExternalClass"),
        Lit(pkg),
        Call(
            Qual(config.vm_pkg, "ExternalClass"),
            Lit(binding.class_name),
            Lit(f"{pkg}.{config.script_ext}"),
            method_table(binding, binding.class_methods, config),
            method_table(binding, binding.instance_methods, config),
            multiline=True,
        ),
    )
    return Func("init", [], None, [ExprStmt(register)])
