"""Tests for the ``inv-fallback doctor`` command (cli/doctor.py).

Instances are probed through a scripted transport — no internet.

Coverage:
* Doctor returns SUCCESS when at least one instance answers.
* Doctor returns GENERAL_ERROR when every instance is down.
* Individual check functions return correct tuples.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from conftest import X, Y, contacted, scripted_transport
from inv_fallback.cli import exit_codes
from inv_fallback.cli.doctor import (
    _probe_row,
    _python_version_check,
    _requests_version_check,
    run_doctor,
)
from inv_fallback.config import ClientConfig
from inv_fallback.core.fallback_client import FallbackResolverClient
from inv_fallback.core.models import InstanceFailure, InstanceList, InstanceProbe
from inv_fallback.exceptions import InstanceUnavailableError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _config() -> ClientConfig:
    return ClientConfig(instances=InstanceList([X, Y]))


def _patch_client(monkeypatch: pytest.MonkeyPatch, script: dict[str, Any]):  # type: ignore[no-untyped-def]
    transport = scripted_transport(script)
    monkeypatch.setattr(
        "inv_fallback.cli.doctor.build_client",
        lambda config: FallbackResolverClient(config.instances, transport),
    )
    return transport


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestChecks:
    def test_python_version(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status or "FAIL" in status

    def test_requests_installed(self) -> None:
        label, _value, status = _requests_version_check()
        assert label == "requests"
        assert "OK" in status

    @patch.dict("sys.modules", {"requests": None})
    def test_requests_missing(self) -> None:
        _label, value, status = _requests_version_check()
        assert value == "NOT INSTALLED"
        assert "FAIL" in status

    def test_probe_row_ok(self) -> None:
        label, value, status = _probe_row(InstanceProbe(instance=X, ok=True, elapsed=0.25))
        assert label == X
        assert value == "250 ms"
        assert "OK" in status

    def test_probe_row_down(self) -> None:
        failure = InstanceFailure(instance=X, reason="HTTP 502", cause="http_status")
        _label, value, status = _probe_row(
            InstanceProbe(instance=X, ok=False, elapsed=0.1, failure=failure),
        )
        assert value == "HTTP 502"
        assert "DOWN" in status


# ---------------------------------------------------------------------------
# run_doctor
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_success_when_one_instance_up(self, monkeypatch: pytest.MonkeyPatch) -> None:
        transport = _patch_client(
            monkeypatch,
            {X: InstanceUnavailableError("HTTP 500", cause="http_status"), Y: []},
        )
        assert run_doctor(_config()) == exit_codes.SUCCESS
        assert contacted(transport) == [
            f"{X}/api/v1/trending?",
            f"{Y}/api/v1/trending?",
        ]

    def test_failure_when_all_down(self, monkeypatch: pytest.MonkeyPatch) -> None:
        down = InstanceUnavailableError("Timed out", cause="timeout")
        _patch_client(monkeypatch, {X: down, Y: down})
        assert run_doctor(_config()) == exit_codes.GENERAL_ERROR

    def test_session_closed_after_probing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        session = MagicMock()
        session.get.return_value.status_code = 200
        session.get.return_value.json.return_value = []
        monkeypatch.setattr("requests.Session", MagicMock(return_value=session))

        assert run_doctor(_config()) == exit_codes.SUCCESS
        assert session.get.call_count == 2
        session.close.assert_called_once_with()

    def test_markup_in_failure_reason_is_escaped(self) -> None:
        failure = InstanceFailure(instance=X, reason="Request failed: [/bold]", cause="network")
        _label, value, _status = _probe_row(
            InstanceProbe(instance=X, ok=False, elapsed=0.1, failure=failure),
        )
        assert value == r"Request failed: \[/bold]"

    def test_output_lists_instances(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        _patch_client(monkeypatch, {X: [], Y: []})
        run_doctor(_config())
        err = capsys.readouterr().err
        assert "x.example" in err
        assert "y.example" in err
