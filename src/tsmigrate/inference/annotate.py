"""Walk a JavaScript syntax tree once and annotate its declaration sites.

Parameters, variable declarators, catch clauses and React component classes
each get their own handler. All handlers record insertions in one
``TextEditor`` over the original bytes; interfaces synthesized from usages are
inserted at the start of the file in the order they are discovered.
"""

import logging
from dataclasses import dataclass, field as dataclass_field

from tree_sitter import Node

from tsmigrate.core.ast import (
    FUNCTION_KINDS,
    Range,
    child_of_kind,
    descendants,
    downcast,
    field,
    find_ancestor,
    is_field_of,
    named_children,
    node_text,
    parse_source,
)
from tsmigrate.inference.naming import GLOBAL_TYPE_NAMES, claim_type_name, to_pascal_case
from tsmigrate.inference.patterns import annotate_pattern
from tsmigrate.inference.text_edit import TextEditor
from tsmigrate.inference.type_definition import TypeDescriptor, render_interface
from tsmigrate.inference.usages import gather_usages
from tsmigrate.models import AnnotatedSource, Diagnostic

logger = logging.getLogger(__name__)

REACT_COMPONENT_CLASSES = frozenset({"Component", "PureComponent"})

_CLASS_KINDS = frozenset({"class_declaration", "class"})
_BOM = b"\xef\xbb\xbf"
_FOR_KINDS = frozenset({"for_statement", "for_in_statement"})
_TYPE_DECLARATION_KINDS = frozenset(
    {
        "interface_declaration",
        "type_alias_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "enum_declaration",
    }
)


@dataclass
class _FileContext:
    editor: TextEditor
    file_start: Range
    created_type_names: set[str]
    interfaces: list[str] = dataclass_field(default_factory=list)
    component_props: dict[Range, str] = dataclass_field(default_factory=dict)
    diagnostics: list[Diagnostic] = dataclass_field(default_factory=list)

    def report(self, diagnostic: Diagnostic | None) -> None:
        if diagnostic is not None:
            self.diagnostics.append(diagnostic)


def infer_and_annotate(source: str, language: str = "typescript") -> str:
    """Return ``source`` with inferred TypeScript annotations inserted."""
    return annotate_source(source, language).source


def annotate_source(source: str, language: str = "typescript", allow_errors: bool = True) -> AnnotatedSource:
    source_bytes = source.encode("utf-8")
    root = parse_source(source_bytes, language, allow_errors=allow_errors).root_node
    context = _FileContext(
        editor=TextEditor(source_bytes),
        file_start=_file_start(root, source_bytes),
        created_type_names=_declared_type_names(root) | GLOBAL_TYPE_NAMES,
    )

    for node in descendants(root):
        if node.type == "formal_parameters":
            _annotate_parameters(node, context)
        elif node.type == "variable_declarator":
            _annotate_declarator(node, context)
        elif node.type == "catch_clause":
            _annotate_catch(node, context)
        elif node.type in _CLASS_KINDS:
            _annotate_component_class(node, context)

    return AnnotatedSource(
        source=context.editor.apply(),
        interfaces=context.interfaces,
        diagnostics=context.diagnostics,
    )


def _file_start(root: Node, source: bytes) -> Range:
    """Insertion point for interfaces: the file start, after any BOM and ``#!`` line."""
    offset = len(_BOM) if source.startswith(_BOM) else 0
    first = downcast(root.children[0], "hash_bang_line") if root.children else None
    if first is not None:
        newline = source.find(b"\n", first.end_byte)
        offset = newline + 1 if newline != -1 else first.end_byte
    return Range(offset, offset)


def _declared_type_names(root: Node) -> set[str]:
    names: set[str] = set()
    for statement in named_children(root):
        declaration = field(statement, "declaration") if statement.type == "export_statement" else statement
        declaration = downcast(declaration, *_TYPE_DECLARATION_KINDS)
        if declaration is None:
            continue
        name = field(declaration, "name")
        if name is not None:
            names.add(node_text(name))
    return names


def _emit_interface(context: _FileContext, base_name: str, descriptor: TypeDescriptor | None) -> str:
    name = claim_type_name(base_name, context.created_type_names)
    context.editor.insert_before(context.file_start, render_interface(name, descriptor))
    context.interfaces.append(name)
    return name


def _annotate_parameters(parameters: Node, context: _FileContext) -> None:
    scope = find_ancestor(parameters, FUNCTION_KINDS)
    if scope is None:
        scope = parameters.parent
    for parameter in named_children(parameters):
        if parameter.type != "required_parameter":
            continue
        pattern = field(parameter, "pattern")
        if pattern is None or child_of_kind(parameter, "type_annotation") is not None:
            continue

        created_type = None
        if pattern.type == "identifier" and scope is not None:
            name = node_text(pattern)
            created_type = _constructor_props_type(scope, name, context)
            if created_type is None:
                usages = gather_usages(scope, name)
                logger.debug("Parameter %s usages: %s", name, usages)
                if usages is not None:
                    created_type = _emit_interface(context, to_pascal_case(name), usages)

        context.report(
            annotate_pattern(context.editor, pattern, default=field(parameter, "value"), created_type=created_type)
        )


def _constructor_props_type(scope: Node, name: str, context: _FileContext) -> str | None:
    """The component's own ``Props`` interface for ``constructor(props)``."""
    if name != "props" or scope.type != "method_definition":
        return None
    method_name = field(scope, "name")
    if method_name is None or node_text(method_name) != "constructor":
        return None
    body = scope.parent
    declaration = body.parent if body is not None else None
    if declaration is None:
        return None
    return context.component_props.get(Range.of(declaration))


def _annotate_declarator(declarator: Node, context: _FileContext) -> None:
    declaration = declarator.parent
    loop = declaration.parent if declaration is not None else None
    if loop is not None and loop.type in _FOR_KINDS and not is_field_of(loop, "body", declaration):
        return

    pattern = field(declarator, "name")
    if pattern is None:
        return
    value = field(declarator, "value")
    logger.debug("Declarator %s = %s", node_text(pattern), value.type if value is not None else None)

    if value is None or _is_nullish(value):
        expression = None
    elif value.type == "array" and not named_children(value):
        expression = value
    else:
        return

    context.report(
        annotate_pattern(
            context.editor,
            pattern,
            annotated=child_of_kind(declarator, "type_annotation") is not None,
            expression=expression,
        )
    )


def _is_nullish(value: Node) -> bool:
    if value.type in ("null", "undefined"):
        return True
    return value.type == "identifier" and node_text(value) == "undefined"


def _annotate_catch(catch: Node, context: _FileContext) -> None:
    parameter = field(catch, "parameter")
    if parameter is None:
        return
    context.report(
        annotate_pattern(
            context.editor,
            parameter,
            annotated=child_of_kind(catch, "type_annotation") is not None,
            created_type="any",
        )
    )


def _annotate_component_class(declaration: Node, context: _FileContext) -> None:
    heritage = child_of_kind(declaration, "class_heritage")
    if heritage is None:
        return
    extends = child_of_kind(heritage, "extends_clause")
    if extends is None:
        extends = heritage
    superclass = field(extends, "value")
    if superclass is None:
        candidates = named_children(extends)
        superclass = candidates[0] if candidates else None
    if superclass is None or not _is_react_component(superclass):
        return
    if child_of_kind(extends, "type_arguments") is not None:
        return

    body = field(declaration, "body")
    if body is None:
        return
    props = gather_usages(body, "props")
    state = gather_usages(body, "state")
    logger.debug("Component props: %s, state: %s", props, state)

    if state is not None:
        props_name = _emit_interface(context, "Props", props)
        state_name = _emit_interface(context, "State", state)
        type_arguments = f"<{props_name}, {state_name}>"
    elif props is not None:
        props_name = _emit_interface(context, "Props", props)
        type_arguments = f"<{props_name}>"
    else:
        context.editor.insert_after(Range.of(superclass), "<any, any>")
        return
    context.component_props[Range.of(declaration)] = props_name
    context.editor.insert_after(Range.of(superclass), type_arguments)


def _is_react_component(superclass: Node) -> bool:
    if superclass.type == "identifier":
        return node_text(superclass) in REACT_COMPONENT_CLASSES
    if superclass.type == "member_expression":
        prop = field(superclass, "property")
        return prop is not None and node_text(prop) in REACT_COMPONENT_CLASSES
    return False
