"""
BP Translator
=============

This package translates BP, a small statically-typed scripting language,
into C source that any hosted C compiler can build.

- A lexer (tokenizer) for BP source
- A recursive descent parser producing an AST
- A type resolver producing the symbol table
- A code generator emitting C

Pipeline
--------
    BP Source → Lexer → Parser → AST → Type Resolver → Code Generator → C

The generated C can then be compiled and run with bprun, or with any C
compiler directly.

Usage
-----
>>> from bplang.bpc import translate
>>> print(translate('m x = 1; show x;'))

Language
--------
    m count = 10;          // numeric variable (64-bit signed)
    c greeting = "hello";  // text variable
    show greeting;         // prints hello
    show count;            // prints 10
    show "done";           // prints done
"""

from bplang.bpc.compiler import (
    BPCompiler,
    CompilerOptions,
    CompilerResult,
    translate,
    translate_file,
)
from bplang.bpc.errors import (
    BPCError,
    LexError,
    UnterminatedStringError,
    InvalidCharacterError,
    BPSyntaxError,
    UnexpectedTokenError,
    MissingTokenError,
    BPSemanticError,
    TypeMismatchError,
    DuplicateDeclarationError,
    UndeclaredVariableError,
    InternalError,
)
from bplang.bpc.lexer import BPLexer, BPTokenType, BPToken
from bplang.bpc.parser import BPParser, parse_source
from bplang.bpc.resolver import TypeResolver, resolve
from bplang.bpc.codegen import CodeGenerator
from bplang.bpc.types import TypeTag, Symbol, SymbolTable
from bplang.bpc.ast import (
    ASTNode,
    ASTPrinter,
    ProgramNode,
    VariableDeclaration,
    PrintStatement,
    IntegerLiteral,
    StringLiteral,
    IdentifierExpression,
)

__all__ = [
    # Main API
    "BPCompiler",
    "CompilerOptions",
    "CompilerResult",
    "translate",
    "translate_file",
    # Errors
    "BPCError",
    "LexError",
    "UnterminatedStringError",
    "InvalidCharacterError",
    "BPSyntaxError",
    "UnexpectedTokenError",
    "MissingTokenError",
    "BPSemanticError",
    "TypeMismatchError",
    "DuplicateDeclarationError",
    "UndeclaredVariableError",
    "InternalError",
    # Stages
    "BPLexer",
    "BPTokenType",
    "BPToken",
    "BPParser",
    "parse_source",
    "TypeResolver",
    "resolve",
    "CodeGenerator",
    # Types
    "TypeTag",
    "Symbol",
    "SymbolTable",
    # AST
    "ASTNode",
    "ASTPrinter",
    "ProgramNode",
    "VariableDeclaration",
    "PrintStatement",
    "IntegerLiteral",
    "StringLiteral",
    "IdentifierExpression",
]
