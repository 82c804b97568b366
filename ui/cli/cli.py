"""CLI entrypoint for webtop."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Simulated desktop window engine")
config_app = typer.Typer(help="Configuration commands")
telemetry_app = typer.Typer(help="Telemetry commands")


@app.command("demo")
def demo_cmd() -> None:
    """Run the reference window scenario."""
    commands.demo()


@app.command("replay")
def replay_cmd(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML operation script"),
    telemetry: bool = typer.Option(False, "--telemetry", help="Print recorded telemetry"),
) -> None:
    """Apply a scripted sequence of window operations."""
    commands.replay(script=script, show_telemetry=telemetry)


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


@telemetry_app.command("test")
def telemetry_test_cmd() -> None:
    """Send sample telemetry events."""
    commands.telemetry_test()


app.add_typer(config_app, name="config")
app.add_typer(telemetry_app, name="telemetry")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
