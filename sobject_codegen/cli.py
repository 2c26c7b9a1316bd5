"""
Command-line interface for SObject code generation.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__, generate_async
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    RegistryError,
    list_all_language_info,
)
from .codegen.core.config import (
    ConfigError,
    ConfigManager,
    ObjectConfig,
    get_config_manager,
)
from .fetchers import DescribeError
from .logging_config import configure_logging, get_logger

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sobject-codegen",
        description="Generate typed SObject classes from Salesforce describe metadata",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sobject-codegen --config sobject-gen.json
  sobject-codegen -s Account -s Contact --describe-dir ./describes -l python
  sobject-codegen --list-languages
        """.strip(),
    )

    parser.add_argument("--config", "-c", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--sobject",
        "-s",
        action="append",
        default=[],
        metavar="API_NAME",
        help="SObject to generate (repeatable; replaces sObjects from the config file)",
    )
    parser.add_argument(
        "--no-convert-names",
        action="store_true",
        help="Keep raw api names for objects given with --sobject",
    )
    parser.add_argument("--language", "-l", help="Target language (typescript, python)")
    parser.add_argument("--output", "-o", metavar="FILE", help="Output file (default: stdout)")
    parser.add_argument(
        "--describe-dir",
        metavar="DIR",
        help="Read describe JSON from DIR/<ApiName>.json instead of the REST API",
    )
    parser.add_argument("--instance-url", help="Salesforce instance URL")
    parser.add_argument("--access-token", help="Salesforce OAuth access token")
    parser.add_argument("--api-version", help="REST API version (default: 45.0)")
    parser.add_argument(
        "--no-comments", action="store_true", help="Don't copy help text into doc comments"
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging and generation metadata"
    )
    info_group.add_argument("--version", action="version", version=__version__)

    return parser


def build_config(
    args: argparse.Namespace, manager: ConfigManager | None = None
) -> GeneratorConfig:
    """Merge the config file with command-line overrides."""
    overrides: dict = {}

    if args.sobject:
        overrides["sObjects"] = [
            ObjectConfig(api_name=name, use_naming_convention=not args.no_convert_names)
            for name in args.sobject
        ]
    if args.language:
        overrides["language"] = args.language
    if args.output:
        overrides["outPath"] = args.output
    if args.describe_dir:
        overrides["describeDir"] = args.describe_dir
    if args.instance_url:
        overrides["instanceUrl"] = args.instance_url
    if args.access_token:
        overrides["accessToken"] = args.access_token
    if args.api_version:
        overrides["apiVersion"] = args.api_version
    if args.no_comments:
        overrides["addComments"] = False

    manager = manager or get_config_manager()
    try:
        config = manager.get_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in manager.validate_config(config):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    if not config.sobjects:
        raise CLIError("No sObjects to generate (use --sobject or a config file)")

    return config


def run_generation(config: GeneratorConfig) -> GenerationResult:
    """Run the pipeline behind a rich spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]warming up...", total=None)

        def on_progress(message: str) -> None:
            progress.update(task, description=f"[cyan]{message}")

        return asyncio.run(generate_async(config, on_progress=on_progress))


def write_output(result: GenerationResult, config: GeneratorConfig) -> None:
    """Write generated code to the configured file, or show it."""
    if config.out_path:
        output_path = Path(config.out_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Failed to write to {output_path}: {e}") from e
        console.print(
            f"[green]✓[/green] Generated {len(config.sobjects)} SObject(s) "
            f"to [cyan]{output_path}[/cyan]"
        )
        return

    lexer = "typescript" if result.metadata.get("language") == "typescript" else "python"
    console.print(Syntax(result.code, lexer, theme="monokai"))


def show_metadata(result: GenerationResult) -> None:
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(table)


def list_languages() -> int:
    """List supported languages with details."""
    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {name}", info["file_extension"], info["class"], aliases)

    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] sobject-codegen --config [dim]sobject-gen.json[/dim] "
            "--language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    args = create_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.list_languages:
        return list_languages()

    try:
        config = build_config(args)
        result = run_generation(config)
        write_output(result, config)
    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except (GeneratorError, RegistryError, DescribeError) as e:
        logger.debug("Generation failed", exc_info=True)
        console.print(f"[red]✗ Code generation failed:[/red] {e}")
        return 1

    if args.verbose:
        show_metadata(result)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
