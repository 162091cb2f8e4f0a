"""Development server overrides for serving through a tunneled public URL."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import shlex
import subprocess
from typing import Any, Callable, Mapping
from urllib.parse import urlparse


LOGGER = logging.getLogger(__name__)

DEVELOP_STAGE = "develop"
DEFAULT_DEV_PORT = 8000
DEFAULT_TUNNEL_COMMAND = "gp url"
TUNNEL_PUBLIC_PORT = 443
DEFAULT_TUNNEL_TIMEOUT_SECONDS = 15.0

CommandRunner = Callable[[list[str]], str]


@dataclass(slots=True)
class TunnelError(RuntimeError):
    command: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (command={self.command})"


@dataclass(frozen=True, slots=True)
class DevServerOverrides:
    public_path: str
    public_host: str
    disable_host_check: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "output": {"publicPath": self.public_path},
            "devServer": {
                "public": self.public_host,
                "disableHostCheck": self.disable_host_check,
            },
        }


def _run_command(argv: list[str]) -> str:
    completed = subprocess.run(
        argv,
        check=True,
        capture_output=True,
        text=True,
        timeout=DEFAULT_TUNNEL_TIMEOUT_SECONDS,
    )
    return completed.stdout


def resolve_tunnel_host(
    port: int = DEFAULT_DEV_PORT,
    *,
    command: str = DEFAULT_TUNNEL_COMMAND,
    run_command: CommandRunner = _run_command,
) -> str:
    """Ask the tunnel CLI for the public URL of ``port`` and return its host."""

    argv = [*shlex.split(command), str(port)]
    command_text = " ".join(argv)
    try:
        output = run_command(argv)
    except (OSError, subprocess.SubprocessError) as exc:
        raise TunnelError(command=command_text, message=f"Tunnel URL lookup failed: {exc}") from exc

    url_text = output.strip()
    host = urlparse(url_text).hostname
    if not host:
        raise TunnelError(command=command_text, message=f"Tunnel command returned no URL: {url_text!r}")
    return host


def dev_server_overrides(
    stage: str,
    *,
    port: int = DEFAULT_DEV_PORT,
    command: str = DEFAULT_TUNNEL_COMMAND,
    run_command: CommandRunner = _run_command,
) -> DevServerOverrides | None:
    """Return tunnel overrides for the ``develop`` stage, ``None`` for any other stage."""

    if stage != DEVELOP_STAGE:
        return None

    host = resolve_tunnel_host(port, command=command, run_command=run_command)
    public_host = f"{host}:{TUNNEL_PUBLIC_PORT}"
    LOGGER.info("Dev server will be served through %s", public_host)
    return DevServerOverrides(
        public_path=f"https://{public_host}/",
        public_host=public_host,
    )


def apply_overrides(config: Mapping[str, Any], overrides: DevServerOverrides | None) -> dict[str, Any]:
    """Merge overrides into a bundler config, keeping unrelated ``output`` keys."""

    merged = dict(config)
    if overrides is None:
        return merged

    output = dict(merged.get("output") or {})
    output["publicPath"] = overrides.public_path
    merged["output"] = output

    dev_server = dict(merged.get("devServer") or {})
    dev_server["public"] = overrides.public_host
    dev_server["disableHostCheck"] = overrides.disable_host_check
    merged["devServer"] = dev_server
    return merged
