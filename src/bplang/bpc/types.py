"""
BP Type System
==============

This module defines BP's type tags, their mapping onto C primitive types,
and the symbol table produced by type resolution.

Type Tags
---------
| Tag | TypeTag | Literal accepted | C type               |
|-----|---------|------------------|----------------------|
| m   | NUMERIC | integer          | long long (64-bit)   |
| c   | TEXT    | string           | char[] (NUL-ended)   |

The tag set is closed. Adding a type means a new TypeTag member, a row in
TAG_KEYWORDS and C_TYPES, and the matching arm in the resolver and code
generator.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional

from bplang.errors import SourceLocation
from bplang.bpc.errors import InternalError


# =============================================================================
# Type Tags
# =============================================================================

class TypeTag(Enum):
    """Declared type of a BP variable."""
    NUMERIC = auto()    # m
    TEXT = auto()       # c

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def keyword(self) -> str:
        """The declaration prefix that selects this tag."""
        return TAG_KEYWORDS_REVERSE[self]

    @property
    def c_type(self) -> str:
        """The C primitive type a variable of this tag is declared with."""
        return C_TYPES[self]

    @property
    def literal_kind(self) -> str:
        """Human-readable name of the literal this tag accepts."""
        return LITERAL_KINDS[self]


# Declaration prefix -> tag
TAG_KEYWORDS: dict[str, TypeTag] = {
    "m": TypeTag.NUMERIC,
    "c": TypeTag.TEXT,
}

TAG_KEYWORDS_REVERSE: dict[TypeTag, str] = {tag: kw for kw, tag in TAG_KEYWORDS.items()}

C_TYPES: dict[TypeTag, str] = {
    TypeTag.NUMERIC: "long long",
    TypeTag.TEXT: "char",
}

LITERAL_KINDS: dict[TypeTag, str] = {
    TypeTag.NUMERIC: "integer literal",
    TypeTag.TEXT: "string literal",
}

# Range of the C type backing NUMERIC
NUMERIC_MIN = -(2 ** 63)
NUMERIC_MAX = 2 ** 63 - 1


def tag_for_keyword(keyword: str) -> Optional[TypeTag]:
    """Return the tag for a declaration prefix, or None if it is not one."""
    return TAG_KEYWORDS.get(keyword)


def fits_numeric(value: int) -> bool:
    """True if `value` is representable by the NUMERIC C type."""
    return NUMERIC_MIN <= value <= NUMERIC_MAX


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    A resolved BP variable.

    Attributes:
        name: Variable name as written in BP
        type_tag: Resolved type
        index: Declaration order (0 for the first declaration)
        location: Where the variable was declared
    """
    name: str
    type_tag: TypeTag
    index: int
    location: SourceLocation


@dataclass
class SymbolTable:
    """
    Mapping from variable name to Symbol, in declaration order.

    Built once by the TypeResolver. After freeze() the table is read-only
    and is handed to the code generator for that single translation run.
    """
    _symbols: dict[str, Symbol] = field(default_factory=dict)
    _frozen: bool = False

    def declare(self, name: str, type_tag: TypeTag, location: SourceLocation) -> Symbol:
        """Add a new symbol. The caller checks for duplicates first."""
        if self._frozen:
            raise InternalError(f"symbol table is frozen, cannot declare '{name}'", location)
        if name in self._symbols:
            raise InternalError(f"'{name}' declared twice in symbol table", location)

        symbol = Symbol(name, type_tag, len(self._symbols), location)
        self._symbols[name] = symbol
        return symbol

    def freeze(self) -> "SymbolTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def names(self) -> list[str]:
        return list(self._symbols)

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())
