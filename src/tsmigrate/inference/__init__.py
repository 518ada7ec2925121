from tsmigrate.inference.annotate import annotate_source, infer_and_annotate
from tsmigrate.inference.naming import claim_type_name, to_pascal_case
from tsmigrate.inference.resolver import resolve_type
from tsmigrate.inference.text_edit import Edit, OffsetOutOfRangeError, TextEditor
from tsmigrate.inference.type_definition import Branch, Leaf, TypeDescriptor, add_field, merge, render
from tsmigrate.inference.usages import gather_usages

__all__ = [
    "Branch",
    "Edit",
    "Leaf",
    "OffsetOutOfRangeError",
    "TextEditor",
    "TypeDescriptor",
    "add_field",
    "annotate_source",
    "claim_type_name",
    "gather_usages",
    "infer_and_annotate",
    "merge",
    "render",
    "resolve_type",
    "to_pascal_case",
]
