"""CLI entrypoint printing a bundler config patched for the dev server tunnel."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from sitebuild.config import BuildSettings
from sitebuild.devserver.tunnel import DEVELOP_STAGE, TunnelError, apply_overrides, dev_server_overrides


load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print bundler config with dev server tunnel overrides")
    parser.add_argument("--stage", default=DEVELOP_STAGE, help="Build stage name")
    parser.add_argument("--port", type=int, default=None, help="Local dev server port")
    parser.add_argument("--config", default=None, help="JSON bundler config to merge overrides into")
    return parser.parse_args(argv)


def _load_config(path: str | None) -> dict[str, Any]:
    if path is None:
        return {}
    loaded = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(loaded, dict):
        raise ValueError(f"Bundler config must be a JSON object: {path}")
    return loaded


def _print_error(error: Exception, stage: str) -> None:
    print(json.dumps({"error": str(error), "stage": stage}, ensure_ascii=True, indent=2))


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)

    try:
        settings = BuildSettings.from_env()
        config = _load_config(args.config)
    except (ValueError, OSError) as error:
        LOGGER.error("Configuration error: %s", error)
        _print_error(error, "config")
        return 2

    port = args.port if args.port is not None else settings.dev_port
    try:
        overrides = dev_server_overrides(args.stage, port=port, command=settings.tunnel_command)
    except TunnelError as error:
        LOGGER.error("Tunnel lookup failed: %s", error)
        _print_error(error, args.stage)
        return 1

    print(json.dumps(apply_overrides(config, overrides), ensure_ascii=True, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
