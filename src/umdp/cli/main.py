"""
UMDP CLI — `umdp` command.

Commands:
  umdp new                  Start a session with a generated id
  umdp join <session-id>    Start a session with a supplied id
  umdp status               Show the session ledger
  umdp send <A|B> <message> Pack a message into a datagram
  umdp relay [datagram]     Validate and deliver a datagram (stdin if omitted)
  umdp chat                 Interactive relay simulation
"""

import logging
import os
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install umdp[cli]")

from pydantic import ValidationError

from umdp.errors import UMDPError
from umdp.models.session import SessionState

console = Console()
err_console = Console(stderr=True)
STATE_FILE = Path.home() / ".umdp" / "session.json"


def _state_file() -> Path:
    override = os.environ.get("UMDP_STATE_FILE")
    return Path(override) if override else STATE_FILE


def _load_state() -> Optional[SessionState]:
    try:
        return SessionState.model_validate_json(_state_file().read_text())
    except (FileNotFoundError, ValidationError):
        return None


def _require_state() -> SessionState:
    state = _load_state()
    if state is None:
        console.print("[red]No active session. Run `umdp new` or `umdp join` first.[/red]")
        raise SystemExit(1)
    return state


def _save_state(state: SessionState) -> None:
    path = _state_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state.model_dump_json(indent=2))


def _fail(error: UMDPError) -> None:
    console.print(f"[red]Protocol error ({error.code}):[/red] {escape(error.message)}")
    raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log protocol decisions to stderr.")
def main(verbose: bool):
    """UMDP — relay datagrams between two parties by copy and paste."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# Register subcommands from separate modules
from umdp.cli.session import new_cmd, join_cmd, status_cmd
from umdp.cli.relay import send_cmd, relay_cmd, chat_cmd

main.add_command(new_cmd)
main.add_command(join_cmd)
main.add_command(status_cmd)
main.add_command(send_cmd)
main.add_command(relay_cmd)
main.add_command(chat_cmd)


if __name__ == "__main__":
    main()
