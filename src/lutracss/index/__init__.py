# lutracss.index - Symbol index module
from lutracss.index.variable import Origin, Variable
from lutracss.index.symbol_index import SymbolIndex
from lutracss.index.extractors import (
    extract_cssprop_tags,
    extract_declarations,
    extract_property_rules,
)

__all__ = [
    "Origin",
    "Variable",
    "SymbolIndex",
    "extract_cssprop_tags",
    "extract_declarations",
    "extract_property_rules",
]
