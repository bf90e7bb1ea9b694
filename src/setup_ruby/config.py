"""Action inputs and runner settings."""
from pathlib import Path
from typing import Mapping

from setup_ruby.types import Inputs

INPUT_DEFAULTS = {
    "ruby-version": "default",
    "bundler": "default",
    "working-directory": ".",
}


def get_input(environ: Mapping[str, str], name: str) -> str:
    """Read an action input the way the runner passes it, as INPUT_<NAME>."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    return environ.get(key, "").strip()


def load_inputs(environ: Mapping[str, str]) -> Inputs:
    """Build inputs, falling back to defaults for empty values."""
    values = {
        name: get_input(environ, name) or default
        for name, default in INPUT_DEFAULTS.items()
    }
    return Inputs(
        ruby_version=values["ruby-version"],
        bundler=values["bundler"],
        working_directory=Path(values["working-directory"]),
    )


def log_level(environ: Mapping[str, str]) -> str:
    """DEBUG when the workflow run has step debug logging enabled."""
    return "DEBUG" if environ.get("RUNNER_DEBUG") == "1" else "INFO"
