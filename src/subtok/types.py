"""
Core types for subword tokenization.
"""

from typing import TypeAlias

Symbol: TypeAlias = str
SymbolPair: TypeAlias = tuple[Symbol, Symbol]
Segmentation: TypeAlias = tuple[Symbol, ...]
WordFrequencies: TypeAlias = dict[str, int]
