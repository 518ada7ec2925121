"""Recursive type descriptors built from property usages.

A descriptor is either a ``Leaf`` (a single field, optionally carrying the
expression that tells us its type) or a ``Branch`` (an object shape mapping
field names to further descriptors). Scanning starts from ``Leaf()`` and grows
the tree through ``add_field``; rendering turns the result into the body of a
TypeScript interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

from tsmigrate.inference.resolver import resolve_type

INDENT = "    "


@dataclass
class Leaf:
    expression: Node | None = None


@dataclass
class Branch:
    fields: dict[str, TypeDescriptor] = field(default_factory=dict)


TypeDescriptor = Leaf | Branch


def add_field(parent: TypeDescriptor, name: str, child: TypeDescriptor) -> TypeDescriptor:
    """Add ``child`` under ``name`` and return the (possibly promoted) parent.

    A leaf parent is promoted to a branch. An existing field of the same name
    is merged with ``child`` rather than replaced.
    """
    if isinstance(parent, Leaf):
        return Branch({name: child})
    existing = parent.fields.get(name)
    parent.fields[name] = child if existing is None else merge(existing, child)
    return parent


def merge(left: TypeDescriptor, right: TypeDescriptor) -> TypeDescriptor:
    """Union two descriptors for the same field; nested shapes win over leaves."""
    if isinstance(left, Branch):
        if isinstance(right, Branch):
            for name, child in right.fields.items():
                add_field(left, name, child)
        return left
    if isinstance(right, Branch):
        return right
    return left if left.expression is not None else right


def is_empty(descriptor: TypeDescriptor) -> bool:
    return isinstance(descriptor, Leaf) and descriptor.expression is None


def render(descriptor: TypeDescriptor, name: str | None = None, depth: int = 0) -> str:
    """Render a descriptor as interface members.

    At depth 0 a branch renders only its members; deeper branches are wrapped
    in ``name: { ... },``. Members are always sorted by name.
    """
    indent = INDENT * depth
    if isinstance(descriptor, Leaf):
        ts_type = resolve_type(descriptor.expression) or "any"
        return f"{indent}{name}: {ts_type},\n"

    body = "".join(render(descriptor.fields[key], key, depth + 1) for key in sorted(descriptor.fields))
    if depth == 0:
        return body
    return f"{indent}{name}: {{\n{body}{indent}}},\n"


def render_interface(name: str, descriptor: TypeDescriptor | None) -> str:
    body = render(descriptor) if isinstance(descriptor, Branch) else ""
    return f"interface {name} {{\n{body}}}\n\n"
