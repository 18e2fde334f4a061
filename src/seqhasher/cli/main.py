"""Command-line interface for seqhasher.

    seqhasher [OPTIONS] [INPUT_FILE] [OUTPUT_FILE]
"""

import sys
from pathlib import Path

import click

from seqhasher import __version__
from seqhasher.audit import AuditLogger, generate_run_id
from seqhasher.engine import HasherConfig, HasherResult, run_hasher
from seqhasher.errors import UnsupportedHashError
from seqhasher.hashing import DEFAULT_HASH_TYPE, SUPPORTED_HASH_TYPES, parse_hash_types
from seqhasher.output import STDIN_MARKER
from seqhasher.parse import open_input

__all__ = ["cli"]

STDOUT_MARKER = "-"

_EPILOG = f"""\b
Supported hash types: {", ".join(SUPPORTED_HASH_TYPES)}
If INPUT_FILE is '-', reads from stdin.
If OUTPUT_FILE is '-' or omitted, writes to stdout.
Input may be gzip, bzip2 or xz compressed.

\b
Examples:
  seqhasher input.fasta.gz output.fasta
  seqhasher --headersonly --hash sha1,nthash input.fastq -
  cat input.fasta | seqhasher --name 'Sample' --hash xxhash - - > output.fasta
"""


def _validate_hash_option(
    ctx: click.Context, param: click.Parameter, value: str
) -> tuple[str, ...]:
    """Split --hash and reject unknown algorithms before reading input."""
    try:
        return parse_hash_types(value)
    except (UnsupportedHashError, ValueError) as e:
        raise click.BadParameter(str(e), ctx=ctx, param=param) from e


def _report(result: HasherResult, verbose: bool) -> None:
    """Echo per-record diagnostics and the run summary to stderr."""
    for warning in result.warnings:
        click.secho(f"Warning: {warning}", fg="yellow", err=True)
    for error in result.errors:
        click.secho(f"Error: {error}", fg="red", err=True)

    if verbose:
        click.echo(f"Source name: {result.source_name}", err=True)
        click.echo(f"  Records processed: {result.records_processed}", err=True)
        click.echo(f"  Records skipped: {result.records_skipped}", err=True)
        click.echo(f"  Write errors: {result.write_errors}", err=True)
        click.echo(f"  Warnings: {len(result.warnings)}", err=True)


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EPILOG,
)
@click.version_option(__version__, "-v", "--version", prog_name="seqhasher")
@click.argument("input_file", required=False)
@click.argument("output_file", required=False, default=STDOUT_MARKER)
@click.option(
    "--headersonly",
    "-o",
    "headers_only",
    is_flag=True,
    help="Only output sequence headers, excluding the sequences themselves",
)
@click.option(
    "--hash",
    "-H",
    "hash_types",
    default=DEFAULT_HASH_TYPE,
    show_default=True,
    callback=_validate_hash_option,
    help="Hash algorithm(s), comma-separated (e.g. sha1,xxhash)",
)
@click.option(
    "--nofilename",
    "-n",
    "omit_source_name",
    is_flag=True,
    help="Do not include the file name in the sequence header",
)
@click.option(
    "--casesensitive",
    "-c",
    "case_sensitive",
    is_flag=True,
    help="Take sequence case into account (by default sequences are upper-cased)",
)
@click.option(
    "--name",
    "-f",
    "name_override",
    default=None,
    help="Replace the input file name in the header with this text",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write JSONL audit events to this file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Print a run summary to stderr",
)
@click.pass_context
def cli(
    ctx: click.Context,
    input_file: str | None,
    output_file: str,
    headers_only: bool,
    hash_types: tuple[str, ...],
    omit_source_name: bool,
    case_sensitive: bool,
    name_override: str | None,
    log_path: Path | None,
    verbose: bool,
) -> None:
    """Compute a hash digest for each sequence of a FASTA/FASTQ file.

    Every record header is rewritten as
    [FILE_NAME;]DIGEST[;DIGEST...];ORIGINAL_ID, and the sequence is
    written out whitespace-free (and upper-cased unless --casesensitive).
    """
    if input_file is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    config = HasherConfig(
        hash_types=hash_types,
        headers_only=headers_only,
        omit_source_name=omit_source_name,
        case_sensitive=case_sensitive,
        name_override=name_override,
        input_name=input_file,
    )

    try:
        input_stream = open_input(input_file)
    except OSError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)
    owns_input = input_file != STDIN_MARKER

    if output_file == STDOUT_MARKER:
        output = sys.stdout.buffer
        owns_output = False
    else:
        try:
            output = Path(output_file).open("wb")
        except OSError as e:
            click.secho(f"✗ Error opening output: {e}", fg="red", err=True)
            if owns_input:
                input_stream.close()
            sys.exit(1)
        owns_output = True

    logger = AuditLogger(run_id=generate_run_id(), log_path=log_path) if log_path else None

    try:
        result = run_hasher(
            config,
            output,
            input_stream=input_stream,
            logger=logger,
            command=["seqhasher", *sys.argv[1:]],
        )
    finally:
        if owns_input:
            input_stream.close()
        if owns_output:
            output.close()
        if logger:
            logger.close()

    _report(result, verbose)

    if not result.success:
        click.secho(f"✗ Error: {result.error_message}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
