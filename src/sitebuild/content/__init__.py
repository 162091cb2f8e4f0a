"""Content node models, discovery, and field derivation."""

from .deriver import FieldRegistrar, derive_fields, on_create_node
from .models import ContentError, ContentKind, ContentNode, DerivedFields, PageDescriptor, SourcePath

__all__ = [
    "ContentError",
    "ContentKind",
    "ContentNode",
    "DerivedFields",
    "FieldRegistrar",
    "PageDescriptor",
    "SourcePath",
    "derive_fields",
    "on_create_node",
]
