"""Runner workflow command syntax."""


def set_env_command(name: str, value: str) -> str:
    return f"::set-env name={name}::{value}"


def set_output_command(name: str, value: str) -> str:
    return f"::set-output name={name}::{value}"


def escape_data(message: str) -> str:
    """Escape a command message; the runner reads one command per line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error_command(message: str) -> str:
    return "::error::" + escape_data(message)
