"""
Main CLI entry point for CiteMatch.

Usage: citematch <reporters file> <data folder>

Uses a reporters file to scan the data folder and writes two CSV files: one
lists the citations and how many times they occurred, the other lists the pin
citations that could not be mapped back to the original citation.
"""

import time
import click
import logging

from citematch.citation.exceptions import CitationMatchError
from citematch.config import load_config, reset_config
from citematch.logging import save_log, setup_logging
from citematch.scanner import DirectoryScanner
from citematch.utils.formatting import (
    saved_message,
    stats_message,
    success_message,
    warning_message,
)


@click.command()
@click.argument(
    "reporters",
    type=click.Path(exists=True, dir_okay=False, readable=True),
)
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a config.yaml (defaults to ~/.config/citematch/config.yaml).",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for the CSV reports (defaults to the data folder).",
)
@click.option(
    "--verbose", is_flag=True, default=False, help="Enable debug-level logging."
)
def cli(reporters, directory, config_path, output_dir, verbose):
    """
    Scan DIRECTORY for citations to the reporters listed in REPORTERS.

    Writes citations.csv (filename, citation, count) and
    unmatched_citations.csv (filename, pin citation) without header rows.
    """
    try:
        reset_config()
        config = load_config(config_path)
    except CitationMatchError as e:
        raise click.ClickException(str(e))

    log_file = setup_logging(verbose=verbose, log_dir=config.log_dir)
    if verbose:
        click.echo(f"[INFO] Logging to: {log_file}")

    start = time.perf_counter()
    try:
        scanner = DirectoryScanner.from_config(
            reporters, directory, config, output_dir=output_dir
        )
        summary = scanner.match_in_directory()
    except CitationMatchError as e:
        logging.error(str(e))
        raise click.ClickException(str(e))
    duration = round(time.perf_counter() - start, 3)

    payload = {
        "reporters_file": reporters,
        "directory": directory,
        "on_read_error": config.on_read_error,
        "matched_output": scanner.matched_path,
        "unmatched_output": scanner.unmatched_path,
        "duration_seconds": duration,
        "timestamp": time.strftime("%Y-%m-%d %H:%M:%S"),
    }
    payload.update(summary.as_dict())
    save_log("citematch_run", payload, config.log_dir, config.log_format)

    click.echo(success_message("Citation matching complete!"))
    click.echo(saved_message(f'Citations saved to: "{scanner.matched_path}"'))
    click.echo(saved_message(f'Unmatched pin citations saved to: "{scanner.unmatched_path}"'))
    click.echo(
        stats_message(
            f"{summary.files_scanned} files scanned, {summary.matched_rows} citations, "
            f"{summary.unmatched_rows} unmatched pin citations"
        )
    )
    if summary.skipped:
        click.echo(warning_message(f"{len(summary.skipped)} files could not be read"))
    if summary.failed_rows:
        click.echo(warning_message(f"{summary.failed_rows} rows could not be written"))


def main():
    """Entry point function for the CiteMatch CLI application."""
    cli()


if __name__ == "__main__":
    main()
