"""
Command-line interface for form code generation.

Loads a form document, assembles the project and writes it as a ZIP archive
or a directory tree.
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import DEFAULT_PROJECT_NAME, __version__, generate_project
from .codegen.core.config import (
    BackendFramework,
    ConfigError,
    FormLibrary,
    FrontendTemplate,
    GenerationOptions,
    SqlDialect,
    Styling,
    ValidationLibrary,
    get_config_manager,
)
from .codegen.core.generator import GeneratorError
from .codegen.core.schema import GeneratedCodeBundle
from .codegen.core.templates import TemplateError
from .codegen.packager import suggest_archive_name, write_archive, write_bundle
from .codegen.registry import RegistryError, get_registry
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_json, load_json_from_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def _choices(enum_type) -> List[str]:
    return [member.value for member in enum_type]


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="form-codegen",
        description="Generate a React form, SQL schema and backend API from a form document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  form-codegen intake.json --project-name "Customer Intake"
  form-codegen intake.json --preset full-stack-dotnet --output-dir out/
  form-codegen --url https://example.com/forms/42.json --backend express
  form-codegen --stdin --dry-run < intake.json
  form-codegen --list-targets
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Form document (JSON)")
    input_group.add_argument("--url", help="URL to fetch the form document from")
    input_group.add_argument("--stdin", action="store_true", help="Read the form document from standard input")

    parser.add_argument("--project-name", "-n", help="Project name (default: the form title)")
    parser.add_argument("--config", help="Options file path (JSON)")
    parser.add_argument(
        "--preset",
        default="default",
        choices=get_config_manager().list_presets(),
        help="Built-in option preset (default: default)",
    )

    option_group = parser.add_argument_group("generation options")
    option_group.add_argument("--template", choices=_choices(FrontendTemplate), help="Frontend template")
    option_group.add_argument("--form-library", choices=_choices(FormLibrary), help="Form-state library")
    option_group.add_argument(
        "--validation", choices=_choices(ValidationLibrary), help="Validation library"
    )
    option_group.add_argument("--styling", choices=_choices(Styling), help="Styling system")
    option_group.add_argument(
        "--backend",
        choices=_choices(BackendFramework),
        help="Backend framework (implies --include-backend)",
    )
    option_group.add_argument(
        "--include-backend", action="store_true", help="Generate the SQL schema and backend API"
    )
    option_group.add_argument("--sql-dialect", choices=_choices(SqlDialect), help="SQL dialect")
    option_group.add_argument("--tests", action="store_true", help="Generate component tests")
    option_group.add_argument("--docs", action="store_true", help="Generate field and API reference documents")

    output_group = parser.add_argument_group("output")
    destination = output_group.add_mutually_exclusive_group()
    destination.add_argument("--output", "-o", help="ZIP archive path (default: derived from the project name)")
    destination.add_argument("--output-dir", help="Write files into this directory instead of an archive")
    output_group.add_argument("--dry-run", action="store_true", help="List the files that would be generated")
    output_group.add_argument("--list-targets", action="store_true", help="List available emitters and exit")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (default: ``sys.argv[1:]``)

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = create_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    try:
        if args.list_targets:
            return _list_targets()

        source, data = _get_input_data(args)
        options = _build_options(args)
        project_name = args.project_name or _default_project_name(data, source)

        logger.debug("Generating %s from %s", project_name, source)
        bundle = generate_project(data, project_name, options)

        _print_warnings(bundle)
        _print_files(bundle)

        if args.dry_run:
            console.print("[dim]Dry run: nothing written[/dim]")
            return 0

        if args.output_dir:
            written = write_bundle(bundle, args.output_dir)
            console.print(
                f"[green]✓[/green] Wrote {len(written)} files to [cyan]{args.output_dir}[/cyan]"
            )
        else:
            path = write_archive(bundle, args.output or suggest_archive_name(project_name))
            console.print(f"[green]✓[/green] Saved {bundle.file_count} files to [cyan]{path}[/cyan]")
        return 0

    except (
        CLIError,
        ConfigError,
        GeneratorError,
        JSONLoaderError,
        RegistryError,
        TemplateError,
        FileNotFoundError,
    ) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"[red]✗ Unexpected error:[/red] {e}")
        return 1


def _get_input_data(args: argparse.Namespace) -> Tuple[str, Any]:
    if args.stdin:
        return load_json_from_stream(sys.stdin)
    if not args.file and not args.url:
        raise CLIError("No input given. Pass a file, --url or --stdin")
    return load_json(file_path=args.file, url=args.url)


def _default_project_name(data: Any, source: str) -> str:
    if isinstance(data, dict):
        nested = data.get("formStructure") or {}
        title = data.get("name") or data.get("title") or nested.get("title")
        if title:
            return str(title)
    if source != "stdin" and not source.startswith(("http://", "https://")):
        return Path(source).stem
    return DEFAULT_PROJECT_NAME


def _build_options(args: argparse.Namespace) -> GenerationOptions:
    """Merge preset, options file and flags (flags win)."""
    overrides: Dict[str, Any] = {}
    flag_options = {
        "template": args.template,
        "form_library": args.form_library,
        "validation_library": args.validation,
        "styling": args.styling,
        "backend_framework": args.backend,
        "sql_dialect": args.sql_dialect,
    }
    for option, value in flag_options.items():
        if value is not None:
            overrides[option] = value

    if args.include_backend or args.backend:
        overrides["include_backend"] = True
    if args.tests:
        overrides["include_tests"] = True
    if args.docs:
        overrides["include_documentation"] = True

    manager = get_config_manager()
    options = manager.get_options(args.preset, overrides, args.config)
    for problem in manager.validate_options(options):
        logger.info("Option check: %s", problem)
    return options


def _list_targets() -> int:
    """List registered emitters with their aliases."""
    registry = get_registry()

    table = Table(title="📋 Available Targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Category", style="cyan")
    table.add_column("Emitter Class", style="dim")
    table.add_column("Aliases", style="blue")

    for target in registry.list_targets():
        info = registry.get_target_info(target)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {target}", info["category"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] form-codegen [dim]form.json[/dim] --backend [cyan]express[/cyan]\n"
            "[bold]Presets:[/bold] " + ", ".join(get_config_manager().list_presets()),
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _print_files(bundle: GeneratedCodeBundle):
    table = Table(
        title=f"📦 {bundle.project_name}",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Category", style="bold")
    table.add_column("Path", style="green")
    table.add_column("Language", style="dim")

    for generated in bundle.iter_files():
        table.add_row(generated.category.value, generated.archive_path, generated.language)

    console.print(table)
    console.print(f"[bold]{bundle.file_count}[/bold] files")


def _print_warnings(bundle: GeneratedCodeBundle):
    if not bundle.warnings:
        return
    console.print(
        Panel(
            "\n".join(f"[yellow]•[/yellow] {warning}" for warning in bundle.warnings),
            title="⚠️  Warnings",
            border_style="yellow",
        )
    )


if __name__ == "__main__":
    sys.exit(main())
