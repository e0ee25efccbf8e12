"""CLI entry point for wagit."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

import typer
from rich import print as rprint
from rich.markup import escape

from wagit.activity import EVENTS, read_activity_log
from wagit.config import Config

app = typer.Typer(help="WhatsApp reply webhook and GitHub file-edit wizard.")

UI_SCRIPT = Path(__file__).resolve().parent / "ui" / "app.py"


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes (development)"),
) -> None:
    """Run the WhatsApp webhook server."""
    import uvicorn

    config = Config.load()
    for issue in config.validate():
        rprint(f"[yellow]Config warning: {issue}[/yellow]")
    rprint(f"Reply mode: [bold]{config.reply_mode}[/bold]")
    if config.uses_inference:
        rprint(f"Inference server: {config.ollama_url or '(not set)'}")
        rprint(f"Candidate models: {', '.join(config.inference_models)}")

    uvicorn.run(
        "wagit.webhook.server:app",
        host=host,
        port=port,
        reload=reload,
        log_level=config.log_level.lower(),
    )


@app.command()
def ui(
    port: int = typer.Option(8501, help="Port for the Streamlit server"),
    simple: bool = typer.Option(False, "--simple", help="Use the plain presentation"),
) -> None:
    """Launch the GitHub edit wizard in the browser."""
    env = dict(os.environ)
    if simple:
        env["WAGIT_SIMPLE_UI"] = "1"
    command = [
        sys.executable, "-m", "streamlit", "run", str(UI_SCRIPT),
        "--server.port", str(port),
    ]
    raise typer.Exit(subprocess.call(command, env=env))


@app.command()
def check() -> None:
    """Validate webhook configuration."""
    config = Config.load()
    issues = config.validate()
    if issues:
        for issue in issues:
            rprint(f"[red]Config error: {issue}[/red]")
        raise typer.Exit(1)

    rprint("[green]Configuration OK[/green]")
    rprint(f"  Reply mode:     {config.reply_mode}")
    rprint(f"  Sender:         {config.twilio_whatsapp_from}")
    if config.uses_inference:
        rprint(f"  Inference URL:  {config.ollama_url}")
        rprint(f"  Models:         {', '.join(config.inference_models)}")
    rprint(f"  Activity log:   {config.log_path}")


@app.command()
def activity(
    limit: int = typer.Option(20, help="Number of entries to show"),
    event: str = typer.Option(None, help=f"Only show one event type ({', '.join(EVENTS)})"),
) -> None:
    """Show recent webhook activity."""
    config = Config.load()
    entries = read_activity_log(limit=limit, event=event, log_path=config.log_path)
    if not entries:
        rprint(f"[yellow]No activity recorded in {config.log_path}[/yellow]")
        return

    for entry in entries:
        ts = entry.get("timestamp", "")[:19]
        name = entry.get("event", "unknown")
        color = "red" if entry.get("error") or name in ("reply_failed", "config_error") else "green"
        summary = entry.get("body") or entry.get("reply") or entry.get("model") or ""
        line = f"{ts}  [{color}]{name}[/{color}]"
        if entry.get("sender"):
            line += f"  {escape(entry['sender'])}"
        if summary:
            line += f"  {escape(repr(str(summary)[:80]))}"
        if entry.get("error"):
            line += f"  ({escape(str(entry['error']))})"
        rprint(line)


if __name__ == "__main__":
    app()
