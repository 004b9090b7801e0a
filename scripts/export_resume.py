#!/usr/bin/env python3
"""
Resume Export CLI

Renders résumé JSON (the editor's camelCase shape) with a visual template and
exports it to PDF.

Commands:
    templates - List registered templates
    preview   - Write the self-contained HTML preview
    export    - Export a PDF (server-rendered or capture-based)

Examples:\n

    export_resume.py templates                                        # List templates

    export_resume.py preview data/sample_resume.json -t classic       # HTML preview

    export_resume.py export data/sample_resume.json -t tech           # Server-rendered PDF

    export_resume.py export data/sample_resume.json -s capture -o out # Capture-based PDF
"""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.rendering import ExportError, export_resume, parse_strategy
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.templating import ResumeData, ResumeHTMLGenerator, get_default_registry
from vitae.contexts.templating.logger import setup_templating_logger
from vitae.utils.text_processing import sanitize_filename, truncate_display
from vitae.utils.timestamp import now, today

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOGS_PATH", "outs/logs"))
RESULTS_PATH = Path(os.getenv("VITAE_RESULTS_PATH", "outs/results"))


def load_resume(resume_file: Path) -> ResumeData:
    """Read résumé JSON, exiting with a readable error when it is unusable."""
    try:
        data = json.loads(resume_file.read_text(encoding="utf-8"))
        return ResumeData.from_dict(data)
    except (OSError, json.JSONDecodeError, TypeError) as e:
        typer.secho(f"Error: cannot read {resume_file}: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Render résumé JSON with visual templates and export PDFs",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("templates")
def templates_command():
    """
    List registered templates in catalog order.

    Examples:\n

        $ export_resume.py templates
    """
    registry = get_default_registry()
    typer.secho(f"\n{len(registry.template_ids)} templates\n", fg=typer.colors.BLUE, bold=True)
    for config in registry.list_configs():
        marker = "*" if config.recommended else " "
        typer.echo(
            f" {marker} {config.id:<12} {config.name:<24} {config.layout_kind.value:<14} "
            f"{truncate_display(config.description, 48)}"
        )
    typer.echo("\n * recommended\n")


@app.command("preview")
def preview_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Résumé JSON file", exists=True, dir_okay=False),
    ],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (unknown ids use the default)"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="HTML file to write (default: results directory)"),
    ] = None,
):
    """
    Write the self-contained HTML preview of a résumé.

    Examples:\n

        $ export_resume.py preview data/sample_resume.json -t minimalist
    """
    setup_templating_logger(LOGS_PATH / f"preview_{now()}", phase="preview")
    resume = load_resume(resume_file)

    html = ResumeHTMLGenerator().generate_document(resume, template_id)

    if output is None:
        output = RESULTS_PATH / today() / f"{sanitize_filename(resume.display_title)}.html"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    typer.secho("✓ Preview written", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  HTML: {output}\n")


@app.command("export")
def export_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Résumé JSON file", exists=True, dir_okay=False),
    ],
    template_id: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template id (unknown ids use the default)"),
    ] = None,
    strategy: Annotated[
        str,
        typer.Option("--strategy", "-s", help="Export strategy: server or capture"),
    ] = "server",
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Document title, also used for the filename"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the PDF (default: dated results)"),
    ] = None,
):
    """
    Export a résumé to PDF.

    Examples:\n

        $ export_resume.py export data/sample_resume.json                 # Default template

        $ export_resume.py export data/sample_resume.json -t creative     # Two-column template

        $ export_resume.py export data/sample_resume.json -s capture      # Rasterized export
    """
    try:
        export_strategy = parse_strategy(strategy)
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    log_dir = LOGS_PATH / f"export_{now()}"
    setup_rendering_logger(log_dir, strategy=export_strategy.value)
    resume = load_resume(resume_file)

    typer.secho(f"\nExporting: {resume_file.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Template: {template_id or '(default)'}")
    typer.echo(f"Strategy: {export_strategy.value}")
    typer.echo("")

    try:
        result = export_resume(resume, template_id=template_id, strategy=export_strategy, title=title)
    except ExportError as e:
        typer.secho(f"✗ Export failed [{e.category.value}]", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e.message}", fg=typer.colors.RED)
        if e.retryable:
            typer.echo("  This failure is transient; retrying may help.")
        typer.echo(f"  Log: {log_dir / 'render.log'}\n")
        raise typer.Exit(code=1)

    pdf_path = result.write_to(output_dir or RESULTS_PATH / today())

    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  Pages: {result.page_count if result.page_count is not None else '?'}")
    typer.echo(f"  PDF: {pdf_path}")
    typer.echo(f"  Log: {log_dir / 'render.log'}\n")


if __name__ == "__main__":
    app()
