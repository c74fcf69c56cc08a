# --- Type-expression resolution ----------------------------------------------
from binder.src.binder.errors import UnresolvedTypeError
from binder.src.binder.tree_sitter_helpers import node_point, node_text

NAMED_TYPES = ("type_identifier", "identifier", "package_identifier")


def resolve_type(source_bytes: bytes, node, keep_pointer: bool = True) -> str:
    """
    Turns a Go type expression into its canonical name:
      Player        -> "Player"
      *Player       -> "*Player"  (or "Player" with keep_pointer=False)
      vm.Object     -> "vm.Object"
    Receivers want the bare owning type, parameters keep the pointer so the
    generated type assertion matches the declaration.
    """
    if node.type in NAMED_TYPES:
        return node_text(source_bytes, node)

    if node.type == "pointer_type":
        inner = resolve_type(source_bytes, node.named_children[-1], keep_pointer=True)
        return f"*{inner}" if keep_pointer else inner

    if node.type == "qualified_type":
        pkg = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{resolve_type(source_bytes, pkg)}.{node_text(source_bytes, name)}"

    line, col = node_point(node)
    raise UnresolvedTypeError(
        f"{line + 1}:{col + 1}: cannot resolve {node.type} "
        f"{node_text(source_bytes, node)!r} to a type name"
    )


def type_name_from_expr(source_bytes: bytes, node) -> str:
    """The bare type name, pointer stripped. Used for receivers and results."""
    return resolve_type(source_bytes, node, keep_pointer=False)
