"""
Command-line interface for Dart binding generation.

Reads a serialized WIT package graph and prints or writes the Dart bindings.
"""

import argparse
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    PackageLoadError,
    generate_code,
    get_generator,
    get_language_info,
    is_language_supported,
    list_supported_languages,
    load_config,
    load_package,
)
from .codegen.core.config import INTERFACE_MODES, ConfigError
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_json, load_json_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


console = Console()


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``wit-dartgen``."""
    parser = argparse.ArgumentParser(
        prog="wit-dartgen",
        description="Generate Dart bindings from a resolved WIT package graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wit-dartgen package.json
  wit-dartgen package.json --output bindings.dart --interface-mode call
  wit-dartgen --stdin --no-docs < package.json
  wit-dartgen --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Package JSON file")
    input_group.add_argument("--url", help="URL to fetch the package JSON from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the package JSON from standard input"
    )

    parser.add_argument(
        "--language",
        "-l",
        default="dart",
        help="Target language (default: dart)",
    )
    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")

    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--no-docs", action="store_true", help="Don't emit documentation comments"
    )
    gen_group.add_argument(
        "--file-header", metavar="TEXT", help="Comment text placed at the top of the output"
    )
    gen_group.add_argument(
        "--interface-mode",
        choices=sorted(INTERFACE_MODES),
        help="How interface functions are rendered (default: declaration)",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )
    info_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WIT_DARTGEN_LOG_LEVEL or WARNING)",
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv=None) -> int:
    """
    Entry point for the ``wit-dartgen`` console script.

    Args:
        argv: Argument list; defaults to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    logger.debug("Parsed arguments: %s", args)

    try:
        if args.list_languages:
            return _list_languages()

        if not (args.file or args.url or args.stdin):
            console.print("[red]✗[/red] Input source required (file, --url, or --stdin)")
            return 1

        if not _validate_language(args.language):
            return 1

        document = _get_input_data(args)
        config = _build_config(args)
        return _generate_and_output(document, args.language, config, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {language}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] wit-dartgen [dim]package.json[/dim] "
            "--output [cyan]bindings.dart[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _validate_language(language: str) -> bool:
    """Validate that a language is supported."""
    if not is_language_supported(language):
        supported = list_supported_languages()
        console.print(f"[red]✗ Unsupported language '{language}'[/red]")
        console.print(f"[dim]Supported languages: {', '.join(supported)}[/dim]")
        return False
    return True


def _get_input_data(args: argparse.Namespace):
    """Get the package document from the selected source."""
    try:
        if args.file:
            return load_json(file_path=args.file)[1]
        elif args.url:
            return load_json(url=args.url)[1]
        return load_json_from_stream(sys.stdin)[1]
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace):
    """Build configuration from the config file and CLI overrides."""
    overrides = {}

    if args.no_docs:
        overrides["generate_docs"] = False
    if args.file_header:
        overrides["file_header"] = args.file_header
    if args.interface_mode:
        overrides["interface_mode"] = args.interface_mode

    try:
        config = load_config(
            args.language.lower(),
            custom_config=overrides or None,
            config_file=args.config,
        )
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    return config


def _generate_and_output(document, language: str, config, args: argparse.Namespace) -> int:
    """Generate bindings and handle output with rich formatting."""
    try:
        package = load_package(document)
    except PackageLoadError as e:
        raise CLIError(f"Invalid package document: {e}") from e

    generator = get_generator(language, config)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"[green]Generating {language} bindings...", total=None)
        result = generate_code(generator, package)
        progress.remove_task(task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        console.print(
            f"[green]✓[/green] Generated {language} bindings saved to [cyan]{output_path}[/cyan]"
        )
    else:
        console.print(Syntax(result.code, language, theme="monokai"))

    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
