import logging
from typing import Optional

from tree_sitter import Language, Node, Parser, Tree

from binder.src.binder.config import BinderConfig
from binder.src.binder.errors import GrammarLoadError, SourceParseError, UnresolvedTypeError
from binder.src.binder.models.binding_models import ArgPair, MethodDecl, SourceUnit
from binder.src.binder.resolver import resolve_type, type_name_from_expr
from binder.src.binder.tree_sitter_helpers import first_error, node_point, node_text, unquote, walk

logger = logging.getLogger(__name__)


# --- Tree-sitter language loading -------------------------------------------

def load_go_language() -> Language:
    """
    Loads the Tree-sitter Go grammar from the tree_sitter_go wheel.
    """
    try:
        import tree_sitter_go
    except ImportError as e:
        raise GrammarLoadError(
            "Could not load Go grammar.\n"
            "- Install `tree-sitter-go` (pip install tree-sitter-go)."
        ) from e
    return Language(tree_sitter_go.language())


# --- The Classifier ----------------------------------------------------------

class BindingClassifier:
    """
    Walks a Tree-sitter Go AST once and sorts every method returning the
    marker type into class methods and instance methods of its receiver type:

        func (Player) New(t *vm.Thread) Object           -> class method
        func (p *Player) Attack(t *vm.Thread, ...) Object -> instance method
    """

    def __init__(self, config: Optional[BinderConfig] = None):
        self.config = config or BinderConfig()
        self.language = load_go_language()
        self.parser = Parser(self.language)

    def parse(self, source: str) -> Tree:
        """
        Parses a single source string into a Tree-sitter tree.
        """
        return self.parser.parse(source.encode("utf-8"))

    def classify_source(self, source: str, file_path: Optional[str] = None) -> SourceUnit:
        """
        Parses & classifies a Go source file. Every call returns a fresh unit;
        nothing is shared between runs.
        """
        source_bytes = source.encode("utf-8")
        tree: Tree = self.parse(source)
        root: Node = tree.root_node

        bad = first_error(root)
        if bad is not None:
            line, col = node_point(bad)
            raise SourceParseError(f"{file_path or '<source>'}:{line + 1}:{col + 1}: syntax error")

        unit = SourceUnit(path=file_path, package="")
        for node in walk(root):
            if node.type == "package_clause":
                unit.package = self._package_name(source_bytes, node)
            elif node.type == "import_spec":
                alias, path = self._import(source_bytes, node)
                unit.imports[alias] = path
            elif node.type in ("type_spec", "type_alias"):
                name_node = node.child_by_field_name("name")
                unit.bindings.declare_type(node_text(source_bytes, name_node))
            elif node.type == "method_declaration":
                self._classify_method(source_bytes, node, unit)
        return unit

    # -- AST helpers ----------------------------------------------------------

    def _package_name(self, source_bytes: bytes, node) -> str:
        for child in node.named_children:
            if child.type == "package_identifier":
                return node_text(source_bytes, child)
        return ""

    def _import(self, source_bytes: bytes, node) -> tuple[str, str]:
        """
        Maps an import spec to (alias, path). Without an explicit name the
        alias is the last path element, which is what `go build` assumes for
        well-behaved packages.
        """
        path = unquote(node_text(source_bytes, node.child_by_field_name("path")))
        name_node = node.child_by_field_name("name")
        alias = node_text(source_bytes, name_node) if name_node else path.rsplit("/", 1)[-1]
        return alias, path

    def _classify_method(self, source_bytes: bytes, node, unit: SourceUnit):
        receiver = node.child_by_field_name("receiver")
        if receiver is None:
            return

        result_type = self._single_result(source_bytes, node)
        if result_type != self.config.marker_type:
            return

        recv_decl = self._declarations(receiver)[0]
        recv_names = recv_decl.children_by_field_name("name")
        name_node = node.child_by_field_name("name")
        line, col = node_point(node)
        try:
            owner = type_name_from_expr(source_bytes, recv_decl.child_by_field_name("type"))
        except UnresolvedTypeError as e:
            # Generic receivers can't be narrowed by a plain type assertion.
            logger.warning("skipping method %s: %s", node_text(source_bytes, name_node), e)
            return

        method = MethodDecl(
            name=node_text(source_bytes, name_node),
            receiver_type=owner,
            receiver_name=node_text(source_bytes, recv_names[0]) if recv_names else None,
            params=self._all_args(source_bytes, node.child_by_field_name("parameters")),
            result_type=result_type,
            line=line,
            col=col,
        )
        unit.bindings.binding_for(owner).add(method)
        logger.debug(
            "%s method %s.%s at %d:%d",
            "class" if method.is_class_method else "instance",
            owner, method.name, line + 1, col + 1,
        )

    def _single_result(self, source_bytes: bytes, node) -> Optional[str]:
        """
        Returns the bare name of the result type when the method declares
        exactly one result, else None. A result whose shape can't be named
        (slices, maps, funcs...) is not the marker, so it is skipped quietly.
        """
        result = node.child_by_field_name("result")
        if result is None:
            return None

        if result.type == "parameter_list":
            decls = self._declarations(result)
            if sum(max(1, len(d.children_by_field_name("name"))) for d in decls) != 1:
                return None
            result = decls[0].child_by_field_name("type")

        try:
            return type_name_from_expr(source_bytes, result)
        except UnresolvedTypeError:
            return None

    def _declarations(self, params_node) -> list:
        return [
            c for c in params_node.named_children
            if c.type in ("parameter_declaration", "variadic_parameter_declaration")
        ]

    def _all_args(self, source_bytes: bytes, params_node) -> list[ArgPair]:
        """
        Flattens a parameter list, one ArgPair per declared name (or one per
        unnamed parameter). Unresolvable types are kept as kind=None so only
        the binding that actually gets generated fails on them.
        """
        args: list[ArgPair] = []
        if params_node is None:
            return args
        for decl in self._declarations(params_node):
            type_node = decl.child_by_field_name("type")
            try:
                kind = resolve_type(source_bytes, type_node)
            except UnresolvedTypeError:
                kind = None
            line, col = node_point(type_node)
            names = [node_text(source_bytes, n) for n in decl.children_by_field_name("name")] or [""]
            for name in names:
                args.append(ArgPair(
                    name=name,
                    kind=kind,
                    expr=node_text(source_bytes, type_node),
                    line=line,
                    col=col,
                    variadic=decl.type == "variadic_parameter_declaration",
                ))
        return args
