# === FILE: site_mirror/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point of SiteMirror.

Commands:
  mirror    Mirror a site into a local directory
  config    Show the configuration loaded from --config

Global options:
  --config PATH       YAML/JSON file with MirrorConfig fields
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only if omitted)
  --log-format FORMAT Logging format string

mirror options:
  --url-list-only     Do not write files, print the visited URLs at the end
  --missing-only      Only download URLs whose target file does not exist yet
  --trust-all-certs   Accept self-signed / invalid TLS certificates
  --concurrency N     Number of concurrent fetch workers
  --timeout SEC       Total timeout per request
  --user-agent UA     User-Agent header
  --report PATH       Write a JSON report of the run

Example:
  site-mirror mirror https://staging.example.com ./mirror / /404.html --trust-all-certs
"""
import sys
import asyncio
from pathlib import Path

import click

from site_mirror import __version__
from site_mirror.config import load_config
from site_mirror.logger import DEFAULT_FORMAT, configure
from site_mirror.engine import start_mirror
from site_mirror.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMirror, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON configuration file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (console only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMirror command group."""
    configure(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('mirror', context_settings=CONTEXT_SETTINGS)
@click.argument('root_url', required=False)
@click.argument('output_dir', required=False, type=click.Path(file_okay=False, path_type=Path))
@click.argument('seeds', nargs=-1)
@click.option('--url-list-only', is_flag=True, help='Do not write files, print visited URLs')
@click.option('--missing-only', is_flag=True, help='Skip URLs whose target file already exists')
@click.option('--trust-all-certs', is_flag=True, help='Accept any TLS certificate')
@click.option('--concurrency', type=click.IntRange(min=1), default=None, help='Concurrent fetch workers')
@click.option('--timeout', type=float, default=None, help='Total timeout per request (seconds)')
@click.option('--user-agent', default=None, help='User-Agent header')
@click.option(
    '--report', 'report_path',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Write a JSON report of the run'
)
@click.pass_context
def mirror(ctx, root_url, output_dir, seeds, url_list_only, missing_only, trust_all_certs,
           concurrency, timeout, user_agent, report_path):
    """Mirror ROOT_URL into OUTPUT_DIR, starting from SEEDS (default "/")."""
    overrides = dict(
        root_url=root_url,
        output_dir=output_dir,
        seeds=list(seeds) or None,
        concurrency=concurrency,
        timeout=timeout,
        user_agent=user_agent,
    )
    # flags only switch behaviour on; the config file may already enable them
    if url_list_only:
        overrides['url_list_only'] = True
    if missing_only:
        overrides['download_missing_only'] = True
    if trust_all_certs:
        overrides['trust_all_certificates'] = True

    try:
        cfg = load_config(ctx.obj['config_path'], **overrides)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Could not load configuration: {e}')

    try:
        summary = asyncio.run(start_mirror(cfg))
    except OSError as e:
        print_error(f'Mirroring failed: {e}')

    if cfg.url_list_only:
        for url in summary.visited:
            click.echo(url)

    if report_path:
        try:
            saved = render_json(summary, cfg, report_path)
        except OSError as e:
            print_error(f'Could not write report: {e}')
        if not cfg.url_list_only:
            click.echo(f'JSON report: {saved}')

    if not summary.ok:
        sys.exit(1)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Print the configuration from --config as JSON."""
    try:
        cfg = load_config(ctx.obj['config_path'])
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Could not load configuration: {e}')
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
