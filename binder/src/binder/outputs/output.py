import json
import os
import tempfile

from binder.src.binder.errors import OutputWriteError
from binder.src.binder.models.binding_models import MethodDecl, SourceUnit


# --- Pretty printing & JSON export ------------------------------------------

def print_summary(unit: SourceUnit):
    """
    Human-friendly printout of what we found.
    """
    print(f"\n=== PACKAGE {unit.package} ===")
    for alias, path in sorted(unit.imports.items()):
        print(f" - {alias}: {path}")

    print("\n=== BINDINGS ===")
    for b in unit.bindings:
        print(f"\n[{b.class_name}]")
        for label, methods in (("class", b.class_methods), ("instance", b.instance_methods)):
            for m in methods:
                print(f"  - {label:<8} {m.signature()}  @ {m.line + 1}:{m.col + 1}")


def _method_json(m: MethodDecl) -> dict:
    return {
        "name": m.name,
        "receiver": m.receiver_name,
        "params": [{"name": p.name, "type": p.kind, "expr": p.expr} for p in m.params],
        "arity": m.arity,
        "line": m.line,
        "col": m.col,
    }


def to_json(unit: SourceUnit) -> str:
    """
    Serializes the binding table to JSON.
    """
    out = {
        "package": unit.package,
        "imports": unit.imports,
        "bindings": [
            {
                "className": b.class_name,
                "classMethods": [_method_json(m) for m in b.class_methods],
                "instanceMethods": [_method_json(m) for m in b.instance_methods],
            }
            for b in unit.bindings
        ],
    }
    return json.dumps(out, indent=2)


# --- Writing the generated unit ---------------------------------------------

def save(text: str, path: str):
    """
    Writes `text` to `path` through a temp file in the same directory, so a
    failed write never leaves a half-written bindings file behind.
    """
    directory = os.path.dirname(os.path.abspath(path))
    try:
        fd, tmp = tempfile.mkstemp(prefix=".binder-", suffix=".go", dir=directory)
    except OSError as e:
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp, 0o644)
        os.replace(tmp, path)
    except OSError as e:
        os.unlink(tmp)
        raise OutputWriteError(f"Failed to write {path}: {e}") from e
    except BaseException:
        os.unlink(tmp)
        raise
