#!/usr/bin/env python3
"""
Main CLI for Windows Font Administration
========================================

This CLI uninstalls registered fonts and bulk-installs fonts from an archive.
"""

import logging
import sys
from pathlib import Path

import click

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

try:
    from src.fontadmin.core.config import AppConfig
    from src.fontadmin.core.exceptions import FontAdminError
    from src.fontadmin.core.models import DeleteOutcome, FontScope
    from src.fontadmin.fonts import ArchiveDownloader, BulkFontInstaller, FontUninstaller
except ImportError as e:
    logger.exception(f"Import failed: {e}")
    logger.exception(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)

DEFAULT_LOG_FILE = Path(__file__).resolve().parent / "fontadmin-install.log"

SCOPE_CHOICE = click.Choice([scope.value for scope in FontScope], case_sensitive=False)

OUTCOME_MESSAGES = {
    DeleteOutcome.DELETED: "deleted {path}",
    DeleteOutcome.DEFERRED: "{path} is in use and will be deleted at next restart",
    DeleteOutcome.MISSING: "{path} was already missing",
    DeleteOutcome.SKIPPED: "{path} is in use and could not be scheduled for deletion",
}


def create_uninstaller(config: AppConfig) -> FontUninstaller:
    """Create a font uninstaller for the current session."""
    return FontUninstaller(config.uninstall)


def create_bulk_installer(config: AppConfig) -> BulkFontInstaller:
    """Create a bulk installer that prompts on the terminal."""
    installer_config = config.installer
    if installer_config.log_file is None:
        installer_config = installer_config.model_copy(update={"log_file": DEFAULT_LOG_FILE})

    return BulkFontInstaller(
        installer_config,
        downloader=ArchiveDownloader(config.download),
        confirm=lambda message: click.confirm(message, default=False),
        echo=click.echo,
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration YAML file (optional)",
)
@click.pass_context
def cli(ctx, verbose, config):
    """Windows font administration CLI."""
    try:
        app_config = AppConfig.from_env_and_yaml(yaml_path=config)
    except FontAdminError as e:
        logger.exception(f"Configuration failed: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(logging.DEBUG if verbose else app_config.log_level)
    ctx.obj = app_config


@cli.command(name="uninstall")
@click.option("--name", "-n", required=True, help='Registered font name, e.g. "Georgia (TrueType)"')
@click.option(
    "--scope",
    "-s",
    type=SCOPE_CHOICE,
    default=FontScope.MACHINE.value,
    show_default=True,
    help="Machine-wide or per-user font",
)
@click.option(
    "--ignore-not-present",
    is_flag=True,
    help="Succeed without changes when the font is not registered",
)
@click.option(
    "--dry-run",
    "--what-if",
    "dry_run",
    is_flag=True,
    help="Show what would be removed without changing anything",
)
@click.option("--confirm", is_flag=True, help="Ask before removing the font")
@click.pass_obj
def uninstall(config, name, scope, ignore_not_present, dry_run, confirm):
    """Uninstall a registered font."""
    should_process = None
    if confirm:

        def should_process(target, action):
            return click.confirm(f'{action} "{target}"?', default=False)

    try:
        uninstaller = create_uninstaller(config)
        result = uninstaller.uninstall(
            name,
            scope=FontScope(scope),
            ignore_not_present=ignore_not_present,
            dry_run=dry_run,
            should_process=should_process,
        )
    except FontAdminError as e:
        logger.exception(f"Uninstall failed: {e}")
        sys.exit(1)

    if result is None:
        click.echo(f"Font '{name}' is not registered; nothing to do")
    elif result.dry_run:
        click.echo(f"What if: uninstall '{result.name}' ({result.scope}) and delete {result.path}")
    else:
        detail = OUTCOME_MESSAGES[result.outcome].format(path=result.path)
        click.echo(f"Uninstalled '{result.name}' ({result.scope}): {detail}")


@cli.command(name="install-bundle")
@click.pass_obj
def install_bundle(config):
    """Download the font archive and install every font for all users."""
    installer = create_bulk_installer(config)
    try:
        result = installer.run()
    except FontAdminError as e:
        logger.exception(f"Bulk install failed: {e}")
        sys.exit(1)
    finally:
        installer.downloader.cleanup()

    for failed in result.get_failed_items():
        logger.warning(f"  - {failed.font_path.name}: {failed.error}")


@cli.command(name="list")
@click.option(
    "--scope",
    "-s",
    type=SCOPE_CHOICE,
    default=FontScope.MACHINE.value,
    show_default=True,
    help="Machine-wide or per-user fonts",
)
@click.pass_obj
def list_fonts(config, scope):
    """List registered fonts."""
    try:
        registrations = create_uninstaller(config).list_registrations(FontScope(scope))
    except FontAdminError as e:
        logger.exception(f"Listing fonts failed: {e}")
        sys.exit(1)

    if not registrations:
        click.echo("No fonts registered.")
        return

    for registration in registrations:
        click.echo(f"{registration.name}\t{registration.value}")


if __name__ == "__main__":
    cli()
