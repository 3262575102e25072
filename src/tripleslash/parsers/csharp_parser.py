import re

import tree_sitter_c_sharp
from tree_sitter import Language, Parser

from tripleslash.models import Declaration, Entity, Location, Parameter, Region
from tripleslash.parsers.base import SourceModel

# Declarations that can enclose members
TYPE_NODES = {
    "class_declaration": "class",
    "struct_declaration": "struct",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "record_struct_declaration": "record",
}

# Delegates are types without a body
DELEGATE_NODE = "delegate_declaration"

MEMBER_NODES = {
    "method_declaration": "method",
    "constructor_declaration": "constructor",
    "destructor_declaration": "destructor",
    "property_declaration": "property",
    "indexer_declaration": "indexer",
    "field_declaration": "field",
    "event_field_declaration": "event",
    "event_declaration": "event",
    "operator_declaration": "operator",
    "conversion_operator_declaration": "conversion",
    "enum_member_declaration": "enum_member",
}

# tree-sitter only counts "\n" as a row break
_LONE_CR = re.compile(r"\r(?!\n)")

NAMESPACE_NODES = ("namespace_declaration", "file_scoped_namespace_declaration", "declaration_list")


class CSharpSourceModel(SourceModel):
    """Source model for C# code using tree-sitter.

    The source is parsed once on construction; the model is a snapshot and
    must be rebuilt after the buffer changes.
    """

    def __init__(self, source_code: str):
        self.language = Language(tree_sitter_c_sharp.language())
        self.parser = Parser(self.language)
        self._source = bytes(_LONE_CR.sub("\n", source_code), "utf8")
        self._line_bytes = self._source.split(b"\n")
        self.tree = self.parser.parse(self._source)

    def innermost_type_at(self, location: Location) -> Declaration | None:
        result = None
        candidates = self._collect_types(self.tree.root_node)
        while candidates:
            enclosing = None
            for node in candidates:
                if node.type == DELEGATE_NODE:
                    continue
                if self._location(node.start_point) <= location < self._location(node.end_point):
                    enclosing = node
                    break
            if enclosing is None:
                break
            result = self._declaration(enclosing)
            candidates = self._collect_types(self._body(enclosing))
        return result

    def top_level_types(self) -> list[Declaration]:
        return [self._declaration(node) for node in self._collect_types(self.tree.root_node)]

    def members(self, type_decl: Declaration) -> list[Declaration]:
        body = self._body(type_decl.node)
        if body is None:
            return []
        return [
            self._declaration(child)
            for child in body.children
            if child.type in MEMBER_NODES
        ]

    def nested_types(self, type_decl: Declaration) -> list[Declaration]:
        body = self._body(type_decl.node)
        if body is None or body.type != "declaration_list":
            return []
        return [
            self._declaration(child)
            for child in body.children
            if child.type in TYPE_NODES or child.type == DELEGATE_NODE
        ]

    def resolve(self, declaration: Declaration) -> Entity:
        node = declaration.node
        entity = Entity(
            kind=declaration.kind,
            name=declaration.name,
            region=declaration.region,
            type_parameters=self._extract_type_parameters(node),
        )

        if node.type in ("method_declaration", "constructor_declaration", "operator_declaration",
                         "conversion_operator_declaration", "indexer_declaration", DELEGATE_NODE):
            entity.parameters = self._extract_parameters(node)

        if node.type in ("method_declaration", "operator_declaration",
                         "conversion_operator_declaration", "indexer_declaration", DELEGATE_NODE):
            entity.return_type = self._extract_return_type(node)

        if node.type in ("property_declaration", "indexer_declaration"):
            entity.has_getter, entity.has_setter = self._extract_accessors(node)

        if node.type in TYPE_NODES:
            entity.member_names = [m.name for m in self.members(declaration)]
            entity.nested_type_names = [t.name for t in self.nested_types(declaration)]

        return entity

    def _declaration(self, node) -> Declaration:
        if node.type in TYPE_NODES:
            kind = TYPE_NODES[node.type]
        elif node.type == DELEGATE_NODE:
            kind = "delegate"
        else:
            kind = MEMBER_NODES[node.type]
        region = Region(
            begin=self._location(node.start_point),
            end=self._location(node.end_point),
        )
        return Declaration(kind=kind, name=self._extract_name(node), region=region, node=node)

    def _collect_types(self, node) -> list:
        """Type declarations directly in node, looking through namespaces."""
        if node is None:
            return []
        types = []
        for child in node.children:
            if child.type in TYPE_NODES or child.type == DELEGATE_NODE:
                types.append(child)
            elif child.type in NAMESPACE_NODES:
                types.extend(self._collect_types(child))
        return types

    def _body(self, node):
        if node is None:
            return None
        body = node.child_by_field_name("body")
        if body is not None:
            return body
        for child in node.children:
            if child.type in ("declaration_list", "enum_member_declaration_list"):
                return child
        return None

    def _location(self, point) -> Location:
        """Convert a tree-sitter point (byte column) to a character location."""
        row, byte_column = point
        if row < len(self._line_bytes):
            prefix = self._line_bytes[row][:byte_column]
            return Location(row, len(prefix.decode("utf8", errors="replace")))
        return Location(row, byte_column)

    def _extract_text(self, node) -> str:
        return self._source[node.start_byte:node.end_byte].decode("utf8", errors="replace")

    def _extract_name(self, node) -> str:
        """Extract the declared name of a node."""
        if node.type in ("field_declaration", "event_field_declaration"):
            # Name of the first declarator: int a, b; documents as "a"
            for child in node.children:
                if child.type == "variable_declaration":
                    for declarator in child.children:
                        if declarator.type == "variable_declarator":
                            return self._extract_name(declarator)
            return ""

        if node.type == "indexer_declaration":
            return "this"

        if node.type in ("operator_declaration", "conversion_operator_declaration"):
            operator = node.child_by_field_name("operator")
            if operator is not None:
                return "operator " + self._extract_text(operator)
            target = node.child_by_field_name("type")
            return "operator " + self._extract_text(target) if target is not None else "operator"

        name_node = node.child_by_field_name("name")
        if name_node is not None:
            return self._extract_text(name_node)
        for child in node.children:
            if child.type == "identifier":
                return self._extract_text(child)
        return ""

    def _extract_parameters(self, node) -> list[Parameter]:
        """Extract the parameter list of a method-like node.

        Args:
            node: Declaration node with a (bracketed) parameter list

        Returns:
            List of Parameter objects, in declaration order
        """
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            for child in node.children:
                if child.type in ("parameter_list", "bracketed_parameter_list"):
                    params_node = child
                    break
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type != "parameter":
                continue
            name_node = child.child_by_field_name("name")
            type_node = child.child_by_field_name("type")
            if name_node is None:
                continue
            parameters.append(Parameter(
                name=self._extract_text(name_node),
                type=self._extract_text(type_node) if type_node else None,
            ))
        return parameters

    def _extract_type_parameters(self, node) -> list[str]:
        type_params = node.child_by_field_name("type_parameters")
        if type_params is None:
            for child in node.children:
                if child.type == "type_parameter_list":
                    type_params = child
                    break
        if type_params is None:
            return []

        names = []
        for child in type_params.children:
            if child.type == "type_parameter":
                names.append(self._extract_name(child))
        return names

    def _extract_return_type(self, node) -> str | None:
        """Return type of a method-like node, None for void."""
        if node.type == "conversion_operator_declaration":
            type_node = node.child_by_field_name("type")
        else:
            type_node = node.child_by_field_name("returns")
            if type_node is None:
                type_node = node.child_by_field_name("type")
        if type_node is None:
            return None
        return_type = self._extract_text(type_node)
        return None if return_type == "void" else return_type

    def _extract_accessors(self, node) -> tuple[bool, bool]:
        """Report (has_getter, has_setter) of a property or indexer."""
        accessors = node.child_by_field_name("accessors")
        if accessors is None:
            for child in node.children:
                if child.type == "accessor_list":
                    accessors = child
                    break
        if accessors is None:
            # Expression-bodied: int Count => 3;
            return True, False

        has_getter = has_setter = False
        for accessor in accessors.children:
            if accessor.type != "accessor_declaration":
                continue
            keyword = self._extract_text(accessor)
            for part in keyword.split():
                if part.startswith("get"):
                    has_getter = True
                    break
                if part.startswith("set") or part.startswith("init"):
                    has_setter = True
                    break
        return has_getter, has_setter
