"""
Logging utilities for CiteMatch.

Sets up the run log file and writes the per-run audit log in either JSON or
Markdown format.
"""

import os
import time
import json
import logging

from .config import setup_logging as setup_logging
from .markdown_writers import write_run_summary_markdown


def save_log(tag: str, payload: dict, log_dir: str = None, log_format: str = None) -> str:
    """
    Save an audit log under the log directory in either JSON or Markdown format.

    Args:
        tag: A string identifier for the log (e.g., "citematch_run").
        payload: Dictionary containing the run summary.
        log_dir: Directory for the log; defaults to the configured log_dir.
        log_format: "json" or "markdown"; defaults to the configured log_format.

    Returns:
        Path to the written log file.

    Raises:
        click.ClickException: If there's an error writing the log file.
    """
    import click
    from citematch.config import get_config

    if log_dir is None or log_format is None:
        config = get_config()
        log_dir = log_dir or config.log_dir
        log_format = log_format or config.log_format

    os.makedirs(log_dir, exist_ok=True)
    ts = time.strftime("%Y%m%d-%H%M%S")

    if log_format == "json":
        path = os.path.join(log_dir, f"{tag}_{ts}.json")
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2, default=str)
            logging.debug(f"JSON log saved: {path}")
        except IOError as e:
            raise click.ClickException(f"Failed to save JSON log {path}: {e}")
        return path

    md_path = os.path.join(log_dir, f"{tag}_{ts}.md")
    try:
        with open(md_path, "w", encoding="utf-8") as f:
            write_run_summary_markdown(f, tag, ts, payload)
        logging.debug(f"Markdown log saved: {md_path}")
    except IOError as e:
        raise click.ClickException(f"Failed to save Markdown log {md_path}: {e}")
    return md_path
