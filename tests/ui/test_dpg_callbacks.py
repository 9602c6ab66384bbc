from __future__ import annotations

import pytest

pytest.importorskip("dearpygui")
pytest.importorskip("pyglet")

from engine.ui.parameters import dpg_window  # noqa: E402
from engine.ui.parameters.dpg_window import ParameterWindow  # noqa: E402
from engine.ui.parameters.state import SpikeSettings  # noqa: E402


def _window(settings: SpikeSettings) -> ParameterWindow:
    """ビューポートを作らずにコールバックだけを持つウィンドウ。"""
    win = ParameterWindow.__new__(ParameterWindow)
    win._settings = settings
    win._driver = None
    win._closing = False
    return win


def test_slider_snaps_value_and_requests_update() -> None:
    settings = SpikeSettings()
    win = _window(settings)

    win._on_slider(None, 12.3456, "spike_detail")
    assert settings.spike_detail == pytest.approx(12.35)
    req = settings.consume_requests()
    assert req.update and not req.reset

    win._on_slider(None, 1.234, "spike_length")
    assert settings.spike_length == pytest.approx(1.23)
    assert settings.consume_requests().update


def test_invalid_slider_value_queues_nothing(caplog: pytest.LogCaptureFixture) -> None:
    settings = SpikeSettings()
    win = _window(settings)
    before = settings.spike_detail

    with caplog.at_level("WARNING"):
        win._on_slider(None, "not-a-number", "spike_detail")
        win._on_slider(None, float("nan"), "spike_length")
    win._on_slider(None, 3.0, "unknown")

    assert settings.spike_detail == before
    assert not settings.consume_requests().pending
    assert "ignored invalid slider value" in caplog.text


def test_regenerate_button_requests_reset() -> None:
    settings = SpikeSettings()
    win = _window(settings)
    win._on_regenerate(None, None, None)
    req = settings.consume_requests()
    assert req.reset
    assert not settings.consume_requests().pending


def test_driver_runs_on_pyglet_clock(monkeypatch: pytest.MonkeyPatch) -> None:
    scheduled: list[tuple[object, float]] = []
    unscheduled: list[object] = []
    monkeypatch.setattr(
        dpg_window.pyglet.clock, "schedule_interval", lambda fn, dt: scheduled.append((fn, dt))
    )
    monkeypatch.setattr(dpg_window.pyglet.clock, "unschedule", unscheduled.append)

    win = _window(SpikeSettings())
    win._start_driver()
    win._start_driver()
    assert scheduled == [(win._tick, dpg_window.DRIVER_INTERVAL)]

    win._stop_driver()
    win._stop_driver()
    assert unscheduled == [win._tick]
