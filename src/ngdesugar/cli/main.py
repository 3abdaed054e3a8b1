"""Main CLI entry point."""

import json
import logging
import os
import sys

import rich.panel
import rich_click as click
from ngdesugar import __version__
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Cyan theme
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'ngdesugar --help' for more information."
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_COMMANDS_PANEL_BOX = None
click.rich_click.STYLE_OPTIONS_PANEL_BOX = None
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "ngdesugar": [
        {
            "name": "Commands",
            "commands": ["render", "serve"],
        }
    ]
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
    )


@click.group(
    help=f"""
[bold white on cyan] ngdesugar [/] [bold cyan]v{__version__}[/] Expand Angular structural directives.

Run [bold cyan]ngdesugar render BINDING -d ngFor[/] to print the explicit template and directive class.
Run [bold cyan]ngdesugar serve[/] to start the interactive form.
"""
)
@click.version_option(__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    _configure_logging(verbose)


@cli.command()
@click.argument("binding", default="")
@click.option("--directive", "-d", default="ngFor", show_default=True, help="Directive name")
@click.option("--tag", "-t", "tag_name", default="div", show_default=True, help="Host tag name")
@click.option("--json", "as_json", is_flag=True, help="Print a JSON document instead")
@click.option("--strict", is_flag=True, help="Exit with status 1 on parser errors")
def render(binding: str, directive: str, tag_name: str, as_json: bool, strict: bool) -> None:
    """Render the template skeleton and directive source for BINDING."""
    from ngdesugar.compiler.codegen.generator import CodeGenerator
    from ngdesugar.compiler.exceptions import InvalidDirectiveNameError
    from ngdesugar.runtime.app import build_query

    try:
        result = CodeGenerator().generate(tag_name, directive, binding, location="cli")
    except InvalidDirectiveNameError as e:
        raise click.BadParameter(str(e), param_hint="--directive")

    if as_json:
        click.echo(
            json.dumps(
                {
                    "errors": result.errors,
                    "warnings": result.warnings,
                    "skeleton": result.skeleton,
                    "source": result.source,
                    "query": build_query(tag_name, directive, binding),
                },
                indent=2,
            )
        )
    else:
        if result.errors:
            err_console.print(result.errors, style="bold red", markup=False)
        if result.warnings:
            err_console.print(result.warnings, style="yellow", markup=False)
        console.print(
            rich.panel.Panel(Syntax(result.skeleton, "html"), title="Template", expand=False)
        )
        console.print(
            rich.panel.Panel(Syntax(result.source, "typescript"), title="Directive", expand=False)
        )

    if strict and result.errors:
        sys.exit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", envvar="NGDESUGAR_HOST", help="Host to bind to")
@click.option("--port", default=3000, type=int, envvar="NGDESUGAR_PORT", help="Port to bind to")
@click.option("--reload", is_flag=True, help="Reload on source changes")
@click.option("--debug", is_flag=True, help="Enable Starlette debug mode")
def serve(host: str, port: int, reload: bool, debug: bool) -> None:
    """Start the interactive form server."""
    import uvicorn

    if debug:
        # The factory runs in the server process, possibly a reloader child.
        os.environ["NGDESUGAR_DEBUG"] = "1"

    console.print(
        f"🚀 Starting ngdesugar on [link=http://{host}:{port}]http://{host}:{port}[/link]"
    )
    logger.debug("reload=%s debug=%s", reload, debug)

    uvicorn.run(
        "ngdesugar.runtime.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
