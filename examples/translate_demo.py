#!/usr/bin/env python3
"""
BP Translator Demo
==================

This script demonstrates how to use bplang from Python to:
1. Translate BP source to C
2. Inspect the token stream, AST, and symbol table
3. Report translation errors
4. Compile and run a program with the system C compiler

Usage:
    pip install -e .
    python examples/translate_demo.py
"""

import shutil
from pathlib import Path

from bplang.bpc import BPCompiler, CompilerOptions, ASTPrinter, BPCError
from bplang.toolchain import build_and_run


def main():
    source = 'm variable01 = 1; c variable02 = "hi"; show variable02; show variable01;'

    # ==========================================================================
    # 1. Translate
    # ==========================================================================
    compiler = BPCompiler(CompilerOptions(keep_tokens=True))
    result = compiler.compile_source(source, "demo.bp")

    print("Generated C:")
    print(result.c_source)

    # ==========================================================================
    # 2. Inspect intermediate products
    # ==========================================================================
    print(f"Tokens ({result.token_count}):")
    for token in result.tokens:
        print(f"  {token!r}")

    print("\nAST:")
    print(ASTPrinter().print(result.ast))

    print("\nSymbols:")
    for symbol in result.symbols:
        print(f"  {symbol.name}: {symbol.type_tag} ({symbol.type_tag.c_type})")

    # ==========================================================================
    # 3. Errors carry file, line, column, and a caret under the problem
    # ==========================================================================
    print("\nError reporting:")
    for bad in ('m x = "hello";', "m x = 1", "show y;"):
        try:
            compiler.compile_source(bad, "bad.bp")
        except BPCError as e:
            print(e)
            print()

    # ==========================================================================
    # 4. Compile and run (needs a C compiler)
    # ==========================================================================
    hello = Path(__file__).with_name("hello.bp")
    if shutil.which("cc") is None:
        print("No C compiler on PATH, skipping run")
        return

    outcome = build_and_run(hello, capture=True)
    print(f"Running {hello.name}:")
    print(outcome.stdout, end="")
    print(f"Exit status: {outcome.returncode}")


if __name__ == "__main__":
    main()
