# cli.py - Command line interface for LtiCart
"""
LtiCart CLI - Build IMS Common Cartridges of LTI links from course outlines

COMMANDS:
    lticart build COURSE_FILE [--output PATH] [--package]   Build a cartridge
    lticart verify PATH                                     Check cross references
    lticart init [--force]                                  Write lticart.yaml template
    lticart version                                         Show version information

EXAMPLES:
    # Build output/chinese1/imsmanifest.xml and output/chinese1.imscc
    lticart build examples/chinese1.yaml

    # Custom location, no archive
    lticart build course.yaml -o build/course/imsmanifest.xml --no-package

    # Random identifiers, unique across separate builds
    lticart build course.yaml --strategy random

    # Check a finished package
    lticart verify output/chinese1.imscc
"""

import sys
from pathlib import Path
from typing import Optional

import click

from lticart import __version__
from lticart.config_utils import CONFIG_FILENAME, create_config_template, get_config
from lticart.course_loader import load_course
from lticart.errors import LtiCartError
from lticart.generator import MANIFEST_FILENAME, build_cartridge
from lticart.identifiers import strategy_names
from lticart.log_utils import setup_logging
from lticart.verify import verify_cartridge


class LtiCartContext:
    """Shared context for CLI commands"""

    def __init__(self, verbosity: int = 0):
        self.project_root = Path.cwd()
        self.verbosity = verbosity

    def load_config(self):
        return get_config(self.project_root)


def _fail(error: Exception) -> None:
    click.echo(str(error), err=True)
    sys.exit(1)


@click.group()
@click.option('--verbose', '-v', count=True, help='More output (-vv for debug)')
@click.option('--quiet', '-q', is_flag=True, help='Only show warnings and errors')
@click.pass_context
def cli(ctx, verbose: int, quiet: bool):
    """
    LtiCart - IMS Common Cartridge builder for LTI course outlines

    Turns a YAML/JSON course outline into imsmanifest.xml plus one LTI
    descriptor per launch, optionally zipped into an .imscc package.
    """
    verbosity = -1 if quiet else verbose
    setup_logging(verbosity)
    ctx.obj = LtiCartContext(verbosity)


# ============================================================================
# Build
# ============================================================================

@cli.command()
@click.argument('course_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Manifest path (default: <output_dir>/<course-file-stem>/imsmanifest.xml)')
@click.option('--package/--no-package', default=None,
              help='Zip the cartridge into an .imscc file (default: from config)')
@click.option('--strategy', type=click.Choice(strategy_names()), help='Identifier strategy')
@click.option('--split-assessments/--no-split-assessments', default=None,
              help='Emit a separate item for each assessmentUrl, or leave assessments out')
@click.pass_obj
def build(ctx: LtiCartContext, course_file: str, output: Optional[str], package: Optional[bool],
          strategy: Optional[str], split_assessments: Optional[bool]):
    """
    Build a cartridge from a course outline

    Examples:
        lticart build course.yaml
        lticart build course.yaml -o out/course/imsmanifest.xml --no-package
        lticart build course.yaml --strategy random
    """
    course_path = Path(course_file)

    try:
        config = ctx.load_config()
        if package is None:
            package = config.package
        if split_assessments is None:
            split_assessments = config.split_assessments

        if output:
            manifest_path = Path(output)
        else:
            manifest_path = config.output_dir / course_path.stem / MANIFEST_FILENAME

        course = load_course(course_path)
        click.echo(f"[pkg] Building cartridge: {course.title}")
        click.echo(f"[pkg] Output: {manifest_path}")

        result = build_cartridge(
            course,
            manifest_path,
            create_package=package,
            strategy=strategy or config.id_strategy,
            split_assessments=split_assessments,
        )
    except LtiCartError as e:
        _fail(e)
        return

    click.echo(f"[v] {len(result.resources)} resources written")
    if result.archive_path:
        click.echo(f"[v] Packaged as {result.archive_path}")


# ============================================================================
# Verify
# ============================================================================

@cli.command()
@click.argument('path', type=click.Path(exists=True))
def verify(path: str):
    """
    Check a cartridge for broken references

    PATH may be imsmanifest.xml, the cartridge folder, or an .imscc file.
    """
    try:
        report = verify_cartridge(path)
    except LtiCartError as e:
        _fail(e)
        return

    click.echo(f"[*] {report.item_count} items, {report.resource_count} resources")
    if report.ok:
        click.echo("[v] No problems found")
        return

    for issue in report.issues:
        click.echo(f"[x] {issue}", err=True)
    click.echo(f"\n[x] {len(report.issues)} problem(s) found", err=True)
    sys.exit(1)


# ============================================================================
# Init
# ============================================================================

@cli.command()
@click.option('--force', is_flag=True, help='Overwrite an existing lticart.yaml')
@click.pass_obj
def init(ctx: LtiCartContext, force: bool):
    """Write an lticart.yaml template in the current directory"""
    config_path = ctx.project_root / CONFIG_FILENAME
    if config_path.exists() and not force:
        click.echo(f"[!] {CONFIG_FILENAME} already exists (use --force to overwrite)")
        return

    config_path.write_text(create_config_template(), encoding="utf-8")
    click.echo(f"[v] Created {config_path}")


# ============================================================================
# Version
# ============================================================================

@cli.command()
def version():
    """Show LtiCart version"""
    click.echo(f"LtiCart CLI v{__version__}")
    click.echo("IMS Common Cartridge builder for LTI course outlines")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
