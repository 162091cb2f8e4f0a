from __future__ import annotations

import subprocess

import pytest

from sitebuild.devserver.tunnel import (
    DevServerOverrides,
    TunnelError,
    apply_overrides,
    dev_server_overrides,
)


class _FakeRunner:
    def __init__(self, output: str = "", error: Exception | None = None) -> None:
        self._output = output
        self._error = error
        self.calls: list[list[str]] = []

    def __call__(self, argv: list[str]) -> str:
        self.calls.append(argv)
        if self._error is not None:
            raise self._error
        return self._output


@pytest.mark.parametrize("stage", ["build-javascript", "build-html", "develop-html", ""])
def test_non_develop_stages_are_a_no_op(stage: str) -> None:
    runner = _FakeRunner("https://8000-abc.ws.example.io\n")

    assert dev_server_overrides(stage, run_command=runner) is None
    assert runner.calls == []


def test_develop_stage_uses_tunnel_host_on_port_443() -> None:
    runner = _FakeRunner("https://8000-abc.ws.example.io/\n")

    overrides = dev_server_overrides("develop", run_command=runner)

    assert runner.calls == [["gp", "url", "8000"]]
    assert overrides == DevServerOverrides(
        public_path="https://8000-abc.ws.example.io:443/",
        public_host="8000-abc.ws.example.io:443",
        disable_host_check=True,
    )


def test_custom_port_and_command_are_passed_through() -> None:
    runner = _FakeRunner("https://tunnel.example.com")

    dev_server_overrides("develop", port=9000, command="tunnelctl url --raw", run_command=runner)

    assert runner.calls == [["tunnelctl", "url", "--raw", "9000"]]


def test_command_failure_raises_tunnel_error() -> None:
    runner = _FakeRunner(error=subprocess.CalledProcessError(1, ["gp", "url", "8000"]))

    with pytest.raises(TunnelError, match="gp url 8000"):
        dev_server_overrides("develop", run_command=runner)


def test_missing_binary_raises_tunnel_error() -> None:
    runner = _FakeRunner(error=FileNotFoundError("gp"))

    with pytest.raises(TunnelError, match="lookup failed"):
        dev_server_overrides("develop", run_command=runner)


def test_unparseable_output_raises_tunnel_error() -> None:
    with pytest.raises(TunnelError, match="no URL"):
        dev_server_overrides("develop", run_command=_FakeRunner("not a url"))


def test_apply_overrides_keeps_existing_output_keys() -> None:
    config = {"output": {"path": "/public", "publicPath": "/"}, "mode": "development"}
    overrides = DevServerOverrides(public_path="https://h.example:443/", public_host="h.example:443")

    merged = apply_overrides(config, overrides)

    assert merged == {
        "output": {"path": "/public", "publicPath": "https://h.example:443/"},
        "mode": "development",
        "devServer": {"public": "h.example:443", "disableHostCheck": True},
    }
    assert config["output"]["publicPath"] == "/"


def test_apply_without_overrides_returns_copy() -> None:
    config = {"output": {"publicPath": "/"}}

    assert apply_overrides(config, None) == config


def test_overrides_serialize_to_bundler_shape() -> None:
    overrides = DevServerOverrides(public_path="https://h:443/", public_host="h:443")

    assert overrides.to_dict() == {
        "output": {"publicPath": "https://h:443/"},
        "devServer": {"public": "h:443", "disableHostCheck": True},
    }
