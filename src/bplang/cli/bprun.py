"""
bprun - Translate, Compile, and Run a BP Program
================================================

Combines the whole toolchain (bpc → cc → run) into a single command. The
generated C and the binary live in a temporary directory which is removed
afterwards unless -k/--keep is given.

Usage Examples
--------------
Run a program:
    $ bprun hello.bp

Use a specific C compiler:
    $ bprun --cc clang hello.bp

Verbose mode (shows each pipeline stage):
    $ bprun -v hello.bp

Keep the generated C next to the source:
    $ bprun -k hello.bp

Pipeline Architecture
---------------------
    ┌──────────┐     ┌──────────┐     ┌──────────┐
    │ .bp file │────▶│  .c file │────▶│  binary  │────▶ exit status
    │ (source) │ bpc │  (temp)  │ cc  │  (temp)  │ run
    └──────────┘     └──────────┘     └──────────┘

Each stage runs only if the previous one succeeded. The exit status of
bprun is the exit status of the program itself, or 1 when translation or
C compilation failed.

Environment Variables
---------------------
BP_CC, BP_CFLAGS, and BP_RUN_TIMEOUT configure the toolchain; see
bplang.toolchain.config. --cc overrides BP_CC.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Optional

import click

from bplang import __version__
from bplang.cli.errors import (
    handle_cli_exception,
    reject_input_overwrite,
    setup_logging,
)
from bplang.toolchain import ProgramRunner, ToolchainConfig, build_program


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--cc",
    "cc",
    metavar="CC",
    help="C compiler to use (default: $BP_CC or cc)",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also copy the compiled binary to this path",
)
@click.option(
    "-k", "--keep",
    is_flag=True,
    help="Keep the generated C file next to the source",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show each pipeline stage",
)
@click.version_option(version=__version__, prog_name="bprun")
def main(
    input_file: Path,
    cc: Optional[str],
    output: Optional[Path],
    keep: bool,
    verbose: bool,
) -> None:
    """
    Translate a BP program to C, compile it, and run it.

    INPUT_FILE is the BP source file (.bp) to run.

    \b
    Examples:
        bprun hello.bp               # Translate, compile, and run
        bprun --cc clang hello.bp    # Choose the C compiler
        bprun -k hello.bp            # Keep hello.c for inspection
        bprun -o hello hello.bp      # Keep the binary as ./hello
    """
    setup_logging(verbose)

    config = ToolchainConfig.from_env()
    if cc:
        config.cc = cc
    config.keep_intermediates = keep

    try:
        keep_c = input_file.with_suffix(".c") if config.keep_intermediates else None
        for target in (keep_c, output):
            if target is not None:
                reject_input_overwrite(target, input_file)

        with tempfile.TemporaryDirectory(prefix="bprun_") as temp_dir:
            # -----------------------------------------------------------------
            # Steps 1-2: Translate BP to C, compile C to a binary
            # -----------------------------------------------------------------
            artifacts = build_program(input_file, Path(temp_dir), config, keep_c=keep_c)

            if verbose:
                result = artifacts.result
                click.echo(
                    f"[1/3] Translated {input_file.name} → {artifacts.c_file.name}",
                    err=True,
                )
                click.echo(f"      Statements: {len(result.ast.statements)}", err=True)
                click.echo(f"      Variables: {len(result.symbols)}", err=True)
                if artifacts.kept_c is not None:
                    click.echo(f"Kept: {artifacts.kept_c}", err=True)
                click.echo(
                    f"[2/3] Compiled {artifacts.c_file.name} → {artifacts.binary.name}",
                    err=True,
                )
                click.echo(f"      Command: {' '.join(artifacts.command)}", err=True)

            if output is not None:
                shutil.copy2(artifacts.binary, output)
                if verbose:
                    click.echo(f"Kept: {output}", err=True)

            # -----------------------------------------------------------------
            # Step 3: Run the program
            # -----------------------------------------------------------------
            if verbose:
                click.echo(f"[3/3] Running {artifacts.binary.name}", err=True)

            outcome = ProgramRunner(config).run(artifacts.binary, capture=True)

        # Forward the program's output through click so it follows
        # redirected streams
        if outcome.stdout:
            click.echo(outcome.stdout, nl=False)
        if outcome.stderr:
            click.echo(outcome.stderr, nl=False, err=True)

        if verbose:
            click.echo(f"      Exit status: {outcome.returncode}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose, error_type="Build")

    sys.exit(outcome.returncode)


if __name__ == "__main__":
    main()
