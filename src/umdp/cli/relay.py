"""CLI: umdp send, umdp relay, umdp chat"""

from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from umdp.errors import UMDPError
from umdp.models.session import Party, SessionState
from umdp.relay import PARTY_NAMES, RelaySimulator
from umdp.session import Session

console = Console()
err_console = Console(stderr=True)

STATUS_STYLES = {"ok": "green", "error": "red", "info": "blue"}


def _require_state() -> SessionState:
    from umdp.cli.main import _require_state
    return _require_state()


def _load_state() -> Optional[SessionState]:
    from umdp.cli.main import _load_state
    return _load_state()


def _save_state(state: SessionState) -> None:
    from umdp.cli.main import _save_state
    _save_state(state)


def _fail(error: UMDPError) -> None:
    from umdp.cli.main import _fail
    _fail(error)


@click.command("send")
@click.argument("sender", type=click.Choice(["A", "B"]))
@click.argument("message")
def send_cmd(sender: str, message: str):
    """Pack MESSAGE from SENDER into a datagram for the relay."""
    if not message.strip():
        console.print("[red]Message cannot be empty.[/red]")
        raise SystemExit(1)
    session = Session.restore(_require_state())
    try:
        datagram = session.pack(message, sender)
    except UMDPError as e:
        _fail(e)
    click.echo(datagram)
    err_console.print(f"[dim]Datagram from {PARTY_NAMES[Party(sender)]} ready for relay.[/dim]")


@click.command("relay")
@click.argument("datagram", required=False)
def relay_cmd(datagram: Optional[str]):
    """Validate DATAGRAM (or stdin) and deliver it to the other party."""
    raw = datagram if datagram is not None else click.get_text_stream("stdin").read()
    if not raw.strip():
        console.print("[red]Relay input cannot be empty.[/red]")
        raise SystemExit(1)
    session = Session.restore(_require_state())
    try:
        delivery = session.unpack(raw)
    except UMDPError as e:
        _fail(e)
    _save_state(session.state)
    console.print(
        f"[green]Delivered to {PARTY_NAMES[delivery.receiver]}[/green] "
        f"[dim](seq {delivery.state.sequence})[/dim]: {escape(delivery.message)}"
    )


CHAT_HELP = """Commands:
  /a <message>      Alice sends
  /b <message>      Bob sends
  /relay [datagram] Deliver the pending (or pasted) datagram
  /status           Show the ledger
  /new              Start a new session
  /join <id>        Join a session by id
  /quit             Exit"""


def _show_status(sim: RelaySimulator) -> None:
    style = STATUS_STYLES[sim.status.type]
    console.print(f"[{style}]{escape(sim.status.text)}[/{style}]")


def _handle(sim: RelaySimulator, line: str) -> bool:
    """Run one REPL line. Returns False when the user quits."""
    cmd, _, arg = line.strip().partition(" ")
    cmd = cmd.lower()
    if cmd in ("/quit", "/exit"):
        return False
    if cmd in ("/a", "/b"):
        datagram = sim.send(cmd[1].upper(), arg)
        click.echo(datagram)
    elif cmd == "/relay":
        delivery = sim.relay(arg or None)
        _save_state(sim.session.state)
        console.print(f"[green]{PARTY_NAMES[delivery.receiver]} received:[/green] {escape(delivery.message)}")
    elif cmd == "/status":
        last = sim.session.last_sender
        console.print(
            f"[dim]session {escape(sim.session.session_id)} · seq {sim.session.sequence} · "
            f"waiting: {PARTY_NAMES[last] if last else 'nobody'}[/dim]"
        )
        return True
    elif cmd == "/new":
        sim.start()
        _save_state(sim.session.state)
    elif cmd == "/join":
        if not arg.strip():
            raise ValueError("Session ID cannot be empty.")
        sim.start(arg.strip())
        _save_state(sim.session.state)
    else:
        console.print(escape(CHAT_HELP))
        return True
    _show_status(sim)
    return True


@click.command("chat")
@click.option("--fresh", is_flag=True, help="Ignore the saved session and start a new one.")
def chat_cmd(fresh: bool):
    """Interactive relay simulation: Alice, Bob and you in one terminal."""
    state = None if fresh else _load_state()
    sim = RelaySimulator(state=state)
    if state is None:
        _save_state(sim.session.state)
    _show_status(sim)
    console.print("[cyan]Type /help for commands (Ctrl+C to exit)[/cyan]\n")
    try:
        while True:
            line = click.prompt("relay", prompt_suffix="> ")
            try:
                if not _handle(sim, line):
                    break
            except UMDPError as e:
                console.print(f"[red]Protocol error ({e.code}):[/red] {escape(e.message)}")
            except ValueError as e:
                console.print(f"[red]{escape(str(e))}[/red]")
    except (KeyboardInterrupt, EOFError, click.Abort):
        pass
