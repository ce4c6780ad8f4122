"""Query DSL building blocks."""

from docscout.dsl.builder import BoolType, QueryFragmentBuilder
from docscout.dsl.registry import ExtensionRegistry
from docscout.dsl.sort import FieldSort

__all__ = ["BoolType", "ExtensionRegistry", "FieldSort", "QueryFragmentBuilder"]
