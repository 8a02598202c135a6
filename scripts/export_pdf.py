#!/usr/bin/env python3
"""
Resume Export CLI

Renders a resume document with one of the templates and exports it as a PDF
through the rendering context's export pipeline.

Commands:
    export    - Export a resume to PDF (headless Chromium capture)
    preview   - Write the rendered HTML page of a resume
    templates - List the available templates

Examples:\n

    export_pdf.py export                                   # Export the default resume

    export_pdf.py export my_resume.yaml --template classic # Export a resume YAML

    export_pdf.py export --scale 0.9 --paginate            # Shrink content, allow extra pages

    export_pdf.py preview my_resume.yaml -o preview.html   # Inspect the HTML
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from quill.contexts.editing import EditorSession, TemplateType, default_document, load_document
from quill.contexts.rendering import (
    ExportPipeline,
    PlaywrightRasterizer,
    PreviewSurface,
    View,
    ViewState,
)
from quill.contexts.rendering.logger import setup_rendering_logger
from quill.contexts.templating import render_html
from quill.utils.config import get_settings
from quill.utils.event_logging import LOGS_PATH
from quill.utils.timestamp import now

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", "."))


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


def _open_session(
    resume_yaml: Optional[Path],
    template: Optional[str],
    scale: Optional[float],
    color: Optional[str],
) -> EditorSession:
    """Load the document and apply command-line overrides."""
    document = load_document(resume_yaml) if resume_yaml else default_document()
    if template:
        document = document.set_template(template)
    if scale is not None:
        document = document.set_content_scale(scale)
    if color:
        document = document.set_primary_color(color)
    return EditorSession(document)


app = typer.Typer(
    help="Render resumes with the modern, minimal or classic template and export them to PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("export")
def export_command(
    resume_yaml: Annotated[
        Optional[Path],
        typer.Argument(help="Resume YAML (default: built-in sample resume)"),
    ] = None,
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template: modern, minimal or classic"),
    ] = None,
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", "-s", help="Content scale (clamped to the allowed range)"),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", help="Primary color, e.g. '#1f2937'"),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for the PDF (default: RESULTS_PATH/<today>)"),
    ] = None,
    paginate: Annotated[
        bool,
        typer.Option("--paginate", help="Continue tall content on extra pages instead of clipping"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug messages and where the detailed log was written"),
    ] = False,
):
    """
    Export a resume to PDF.

    Examples:\n

        $ export_pdf.py export                                # Default resume, modern template

        $ export_pdf.py export cv.yaml -t minimal -c '#0f766e'

        $ export_pdf.py export cv.yaml --paginate             # Multi-page output
    """
    try:
        session = _open_session(resume_yaml, template, scale, color)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    settings = get_settings()
    if paginate:
        settings = OmegaConf.merge(settings, {"export": {"paginate": True}})

    rasterizer = PlaywrightRasterizer(page_width_mm=float(settings.export.page.width_mm))
    log_file = setup_rendering_logger(
        LOGS_PATH / f"export_{now()}", rasterizer=rasterizer.name, verbose=verbose
    )

    typer.secho(
        f"\nExporting: {session.document.personal_info.full_name or '<unnamed>'}",
        fg=typer.colors.BLUE,
        bold=True,
    )
    typer.echo(f"Template: {session.document.template.value}")
    typer.echo(f"Content scale: {session.document.content_scale:.2f}")
    typer.echo("")

    view_state = ViewState(View.EDITOR)
    surface = PreviewSurface(session, view_state)
    pipeline = ExportPipeline(
        session,
        view_state,
        surface,
        rasterizer,
        output_dir=output_dir,
        settings=settings,
    )

    result = asyncio.run(pipeline.export())

    typer.echo("")
    if result.success:
        typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  PDF: {display_path(result.pdf_path)}")
        typer.echo(f"  Pages: {result.page_count}")
        if result.clipped:
            typer.secho(
                "  Content is taller than one page and was clipped (try --scale or --paginate)",
                fg=typer.colors.YELLOW,
            )
    else:
        typer.secho(f"✗ Export failed in state '{result.failed_in.value}'", fg=typer.colors.RED, bold=True)
        for error in result.errors:
            typer.secho(f"  - {error}", fg=typer.colors.RED)

    if verbose:
        typer.echo(f"  Log: {display_path(log_file)}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("preview")
def preview_command(
    resume_yaml: Annotated[
        Optional[Path],
        typer.Argument(help="Resume YAML (default: built-in sample resume)"),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="HTML file to write"),
    ] = Path("preview.html"),
    template: Annotated[
        Optional[str],
        typer.Option("--template", "-t", help="Template: modern, minimal or classic"),
    ] = None,
    scale: Annotated[
        Optional[float],
        typer.Option("--scale", "-s", help="Content scale (clamped to the allowed range)"),
    ] = None,
    color: Annotated[
        Optional[str],
        typer.Option("--color", "-c", help="Primary color, e.g. '#1f2937'"),
    ] = None,
):
    """
    Write the rendered HTML of a resume without exporting it.

    Examples:\n

        $ export_pdf.py preview cv.yaml -t classic -o classic.html
    """
    try:
        session = _open_session(resume_yaml, template, scale, color)
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    html = render_html(session.document, photo_resolver=session.resolve_photo)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    typer.secho(f"\n✓ Wrote {display_path(output)}\n", fg=typer.colors.GREEN, bold=True)


@app.command("templates")
def templates_command():
    """List the available templates."""
    typer.echo("")
    for template in TemplateType:
        typer.echo(f"  {template.value}")
    typer.echo("")


if __name__ == "__main__":
    app()
