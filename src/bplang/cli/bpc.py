"""
bpc - BP Translator Command-Line Interface
==========================================

Translates a BP program into C source.

Usage Examples
--------------
Basic translation:
    $ bpc hello.bp

With output file:
    $ bpc hello.bp -o out.c

Print the C to stdout:
    $ bpc -S hello.bp

Inspect the front end:
    $ bpc --tokens hello.bp
    $ bpc --ast hello.bp
"""

from pathlib import Path
from typing import Optional

import click

from bplang import __version__
from bplang.bpc import BPCompiler, CompilerOptions
from bplang.bpc.ast import ASTPrinter
from bplang.cli.errors import (
    handle_cli_exception,
    reject_input_overwrite,
    setup_logging,
)


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input.c)",
)
@click.option(
    "-S", "--stdout", "to_stdout",
    is_flag=True,
    help="Write the generated C to stdout instead of a file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--comments",
    is_flag=True,
    help="Annotate the C output with the BP source lines",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="bpc")
def main(
    input_file: Path,
    output: Optional[Path],
    to_stdout: bool,
    tokens: bool,
    ast: bool,
    comments: bool,
    verbose: bool,
) -> None:
    """
    Translate a BP program to C.

    INPUT_FILE is the BP source file (.bp) to translate.

    \b
    Examples:
        bpc hello.bp                 # Outputs hello.c
        bpc hello.bp -o out.c        # Specify output file
        bpc -S hello.bp              # Print C to stdout
        bpc --ast hello.bp           # Dump the syntax tree
    """
    setup_logging(verbose)

    if output is None:
        output = input_file.with_suffix(".c")

    options = CompilerOptions(output_comments=comments, keep_tokens=tokens)

    try:
        if not (tokens or ast or to_stdout):
            reject_input_overwrite(output, input_file)

        if verbose:
            click.echo(f"Translating {input_file}...", err=True)

        result = BPCompiler(options).compile_file(input_file)

        if tokens:
            for token in result.tokens:
                click.echo(repr(token))
            return

        if ast:
            click.echo(ASTPrinter().print(result.ast))
            return

        if to_stdout:
            click.echo(result.c_source, nl=False)
            return

        output.write_text(result.c_source, encoding="utf-8")

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens", err=True)
            click.echo(f"Parsed: {len(result.ast.statements)} statements", err=True)
            click.echo(f"Resolved: {len(result.symbols)} variables", err=True)
            click.echo(f"Wrote {len(result.c_source)} bytes to {output}", err=True)

        click.echo(f"Translated {input_file} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
