#!/usr/bin/env python3
"""
Archive Overlap Analyzer - Main entry point.

Measures how much content a set of archives shares and how much space
keeping one copy of each entry would reclaim.
"""
import sys
import logging
import click

from overlap.models import AppConfig
from overlap.errors import OverlapError
from overlap.analyzer import OverlapAnalyzer
from overlap.report import render_report


def setup_logging(verbose: bool = False, log_file: str = "archive_overlap.log"):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )


@click.command()
@click.argument('archives', nargs=-1, type=click.Path())
@click.option('--source', '-s', multiple=True, help='Directories to search for archives (can specify multiple)')
@click.option('--no-recursive', is_flag=True, help='Only look at the top level of source directories')
@click.option('--workers', default=1, type=int, help='Number of parallel indexing workers')
@click.option('--top', default=10, type=int, help='Number of most wasteful entries to list')
@click.option('--tui', 'use_tui', is_flag=True, help='Show results in the interactive TUI')
@click.option('--log-file', default='archive_overlap.log', help='Log file path')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
def main(archives, source, no_recursive, workers, top, use_tui, log_file, verbose):
    """
    Archive Overlap Analyzer - Estimate savings from deduplicating archive entries.

    Run without arguments to start interactive TUI mode.
    """
    setup_logging(verbose, log_file)

    config = AppConfig(
        source_dirs=list(source),
        archive_paths=list(archives),
        recursive=not no_recursive,
        parallel_workers=workers,
        top_entries=top,
        log_file=log_file
    )

    errors = config.validate()
    if errors:
        click.echo("Configuration errors:", err=True)
        for error in errors:
            click.echo(f"  - {error}", err=True)
        sys.exit(1)

    if use_tui or (not archives and not source):
        from tui.app import OverlapApp
        app = OverlapApp(config)
        app.run()
        return

    try:
        report = OverlapAnalyzer(config).run()
    except OverlapError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for line in render_report(report, top=config.top_entries):
        click.echo(line)


if __name__ == '__main__':
    main()
