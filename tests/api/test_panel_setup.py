from __future__ import annotations

import pytest

from api.sketch_runner import panel as panel_mod
from engine.ui.parameters.state import SpikeSettings


def test_disabled_panel_is_none() -> None:
    assert panel_mod.setup_panel(SpikeSettings(), False) is None


def test_start_failure_falls_back(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    def _boom(self) -> None:
        raise RuntimeError("no display")

    monkeypatch.setattr(panel_mod.ParameterWindowController, "start", _boom)
    with caplog.at_level("WARNING"):
        assert panel_mod.setup_panel(SpikeSettings(), True) is None
    assert "continuing without it" in caplog.text
