"""Developer tasks for the WebDriver client, powered by Invoke."""

from __future__ import annotations

import os
import pathlib
import subprocess
from typing import Iterable

from invoke import task

ROOT = pathlib.Path(__file__).parent.resolve()
ENV = dict(os.environ)
RESULTS_DIR = ROOT / "results"
TEST_SUITES = {
    "unit": "tests/unit",
    "mcp": "tests/fastmcp",
    "robot": "tests/lib",
}


def _run(command: Iterable[str] | str) -> None:
    cmd = command if isinstance(command, str) else " ".join(command)
    subprocess.run(cmd, shell=True, check=True, cwd=ROOT, env=ENV)


@task(help={"suite": "One of unit, mcp or robot; runs everything when omitted."})
def tests(_context, suite=None):
    """Run the pytest suites."""
    target = TEST_SUITES[suite] if suite else "tests/"
    _run(["uv", "run", "pytest", target])


@task
def coverage(_context):
    """Run the tests under coverage and write reports to results/."""
    RESULTS_DIR.mkdir(exist_ok=True)
    _run(["uv", "run", "coverage", "erase"])
    _run(
        [
            "uv",
            "run",
            "coverage",
            "run",
            "--source=src/webdriverclient",
            "-m",
            "pytest",
            "tests/",
            "--junitxml=results/pytest.xml",
        ]
    )
    _run(["uv", "run", "coverage", "report", "--show-missing"])
    _run(["uv", "run", "coverage", "xml", "-o", "results/coverage.xml"])


@task
def lint(_context):
    """Check formatting and types."""
    _run(["uv", "run", "black", "--check", "src", "tests", "tasks.py"])
    _run(["uv", "run", "mypy", "src/webdriverclient"])


@task(help={"transport": "stdio, http or sse", "port": "Port for http/sse"})
def serve(_context, transport="stdio", port=None):
    """Start the MCP server."""
    cmd = ["uv", "run", "webdriverclient-mcp", "--transport", transport]
    if port:
        cmd += ["--port", str(port)]
    _run(cmd)


@task
def build(_context):
    """Build sdist and wheel."""
    _run(["uv", "build"])
