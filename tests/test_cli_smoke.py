"""Smoke test: the Typer app loads and prints its help"""

from typer.testing import CliRunner
from mdsite.cli.cli import app

def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
