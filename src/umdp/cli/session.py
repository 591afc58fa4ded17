"""CLI: umdp new|join|status"""

import json

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from umdp.models.session import SessionState

console = Console()


def _load_state():
    from umdp.cli.main import _require_state
    return _require_state()


def _save_state(state: SessionState) -> None:
    from umdp.cli.main import _save_state
    _save_state(state)


def _start(session_id=None) -> SessionState:
    try:
        state = SessionState.new(session_id)
    except ValidationError as e:
        console.print(f"[red]Invalid session id: {e.errors()[0]['msg']}[/red]")
        raise SystemExit(1)
    _save_state(state)
    return state


@click.command("new")
def new_cmd():
    """Start a new session with a generated id."""
    state = _start()
    console.print(f"[green]Session started: {escape(state.session_id)}[/green]")
    console.print("[dim]Share this id with the other party. Alice (A) speaks first.[/dim]")


@click.command("join")
@click.argument("session_id")
def join_cmd(session_id: str):
    """Join an existing session by id."""
    if not session_id.strip():
        console.print("[red]Session ID cannot be empty.[/red]")
        raise SystemExit(1)
    state = _start(session_id.strip())
    console.print(f"[green]Session joined: {escape(state.session_id)}[/green]")


@click.command("status")
@click.option("--json-output", "--json", is_flag=True)
def status_cmd(json_output: bool):
    """Show the current session ledger."""
    state = _load_state()
    last = state.last_sender.value if state.last_sender else None
    if json_output:
        click.echo(json.dumps({"session_id": state.session_id, "sequence": state.sequence, "last_sender": last}))
        return
    table = Table(title="Session")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("ID", state.session_id)
    table.add_row("Sequence", str(state.sequence))
    table.add_row("Last sender", last or "-")
    table.add_row("Waiting", f"{last} (for a response)" if last else "nobody")
    console.print(table)
