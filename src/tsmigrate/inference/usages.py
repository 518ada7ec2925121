"""Collect the property accesses made on one binding within a scope.

Three shapes feed the descriptor:

* member chains rooted at the binding, ``name.a.b`` or ``this.name.a.b``;
* object destructuring of the binding (or of a chain rooted at it);
* object literals assigned to the binding or to one of its fields.
"""

import logging

from tree_sitter import Node

from tsmigrate.core.ast import descendants, field, is_field_of, named_children, node_text
from tsmigrate.inference.type_definition import Branch, Leaf, TypeDescriptor, add_field, is_empty

logger = logging.getLogger(__name__)

_ASSIGNMENT_KINDS = frozenset({"assignment_expression", "augmented_assignment_expression"})
_CLASS_FIELD_KINDS = frozenset({"public_field_definition", "field_definition"})


def gather_usages(scope: Node, name: str) -> TypeDescriptor | None:
    """Build a descriptor of every field of ``name`` used inside ``scope``.

    Returns ``None`` when the binding is never accessed through a field.
    """
    root: TypeDescriptor = Leaf()
    for node in descendants(scope):
        if node.type == "member_expression":
            if _is_rooted_at(node, name):
                root = _add_member_chain(root, node)
        elif node.type == "variable_declarator":
            root = _add_destructuring(root, field(node, "name"), field(node, "value"), name)
        elif node.type == "assignment_expression":
            root = _add_object_literal(root, field(node, "left"), field(node, "right"), name)
        elif node.type in _CLASS_FIELD_KINDS:
            root = _add_class_field(root, node, name)

    if is_empty(root):
        return None
    logger.debug("Found usages of %s: %s", name, root)
    return root


def _property_name(node: Node | None) -> str | None:
    if node is None:
        return None
    if node.type in ("property_identifier", "identifier"):
        return node_text(node)
    if node.type == "string":
        text = node_text(node)[1:-1]
        return text if text.isidentifier() else None
    return None


def _is_rooted_at(member: Node, name: str) -> bool:
    """``name.x`` or ``this.name.x``, where ``member`` is the access of ``x``."""
    obj = field(member, "object")
    if obj is None:
        return False
    if obj.type == "identifier":
        return node_text(obj) == name
    if obj.type == "member_expression":
        this = field(obj, "object")
        prop = field(obj, "property")
        return this is not None and this.type == "this" and prop is not None and node_text(prop) == name
    return False


def _add_member_chain(root: TypeDescriptor, innermost: Node) -> TypeDescriptor:
    names: list[str] = []
    outer = innermost
    current: Node | None = innermost
    while current is not None:
        prop = _property_name(field(current, "property"))
        if prop is None:
            break
        names.append(prop)
        outer = current
        parent = current.parent
        if parent is None or parent.type != "member_expression" or not is_field_of(parent, "object", current):
            break
        current = parent

    if not names:
        return root

    descriptor: TypeDescriptor = Leaf(_usage_expression(outer))
    for prop in reversed(names[1:]):
        descriptor = Branch({prop: descriptor})
    return add_field(root, names[0], descriptor)


def _usage_expression(member: Node) -> Node | None:
    """The call or assignment a member access takes part in, if any."""
    parent = member.parent
    if parent is None:
        return None
    if parent.type == "call_expression" and is_field_of(parent, "function", member):
        return parent
    if parent.type in _ASSIGNMENT_KINDS and is_field_of(parent, "left", member):
        return parent
    return None


def _access_path(expression: Node | None, name: str) -> list[str] | None:
    """Field path of ``expression`` relative to the binding.

    ``name`` and ``this.name`` give ``[]``, ``name.a.b`` gives ``["a", "b"]``;
    anything not rooted at the binding gives ``None``.
    """
    path: list[str] = []
    node = expression
    while node is not None:
        if node.type == "identifier":
            return list(reversed(path)) if node_text(node) == name else None
        if node.type != "member_expression":
            return None
        obj = field(node, "object")
        prop = _property_name(field(node, "property"))
        if obj is None or prop is None:
            return None
        if obj.type == "this" and prop == name:
            return list(reversed(path))
        path.append(prop)
        node = obj
    return None


def _attach(root: TypeDescriptor, path: list[str], shape: TypeDescriptor) -> TypeDescriptor:
    if not path:
        if isinstance(shape, Branch):
            for key, child in shape.fields.items():
                root = add_field(root, key, child)
        return root
    for prop in reversed(path[1:]):
        shape = Branch({prop: shape})
    return add_field(root, path[0], shape)


def _add_destructuring(root: TypeDescriptor, pattern: Node | None, value: Node | None, name: str) -> TypeDescriptor:
    if pattern is None or pattern.type != "object_pattern":
        return root
    path = _access_path(value, name)
    if path is None:
        return root
    return _attach(root, path, _pattern_descriptor(pattern))


def _pattern_descriptor(pattern: Node) -> TypeDescriptor:
    shape: TypeDescriptor = Leaf()
    for element in named_children(pattern):
        if element.type == "shorthand_property_identifier_pattern":
            shape = add_field(shape, node_text(element), Leaf())
        elif element.type == "object_assignment_pattern":
            left = field(element, "left")
            if left is not None and left.type == "shorthand_property_identifier_pattern":
                shape = add_field(shape, node_text(left), Leaf(field(element, "right")))
        elif element.type == "pair_pattern":
            key = _property_name(field(element, "key"))
            value = field(element, "value")
            if key is not None and value is not None:
                shape = add_field(shape, key, _pattern_value_descriptor(value))
    return shape


def _pattern_value_descriptor(value: Node) -> TypeDescriptor:
    if value.type == "object_pattern":
        return _pattern_descriptor(value)
    if value.type == "assignment_pattern":
        left = field(value, "left")
        if left is not None and left.type == "object_pattern":
            return _pattern_descriptor(left)
        return Leaf(field(value, "right"))
    return Leaf()


def _add_object_literal(root: TypeDescriptor, left: Node | None, right: Node | None, name: str) -> TypeDescriptor:
    if right is None or right.type != "object":
        return root
    path = _access_path(left, name)
    if path is None:
        return root
    return _attach(root, path, _object_descriptor(right))


def _add_class_field(root: TypeDescriptor, definition: Node, name: str) -> TypeDescriptor:
    key = field(definition, "name")
    if key is None:
        key = field(definition, "property")
    value = field(definition, "value")
    if _property_name(key) != name or value is None or value.type != "object":
        return root
    return _attach(root, [], _object_descriptor(value))


def _object_descriptor(literal: Node) -> TypeDescriptor:
    shape: TypeDescriptor = Leaf()
    for member in named_children(literal):
        if member.type == "shorthand_property_identifier":
            shape = add_field(shape, node_text(member), Leaf())
        elif member.type == "pair":
            key = _property_name(field(member, "key"))
            value = field(member, "value")
            if key is None:
                continue
            if value is not None and value.type == "object" and named_children(value):
                shape = add_field(shape, key, _object_descriptor(value))
            else:
                shape = add_field(shape, key, Leaf(value))
    return shape
