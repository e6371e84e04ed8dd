from busyline.core.env import SpinnerSettings, load_settings


def test_defaults_from_empty_environment():
    assert load_settings({}) == SpinnerSettings()


def test_values_from_environment():
    settings = load_settings({
        "BUSYLINE_TICK_MS": "250",
        "BUSYLINE_ABORT_MESSAGE": "Cancelled",
        "BUSYLINE_PLATFORM": "windows",
        "NO_COLOR": "1",
        "BUSYLINE_NO_INTERRUPT": "yes",
    })
    assert settings.tick_ms == 250
    assert settings.abort_message == "Cancelled"
    assert settings.platform == "windows"
    assert settings.color is False
    assert settings.handle_interrupts is False


def test_tick_is_clamped():
    assert load_settings({"BUSYLINE_TICK_MS": "0"}).tick_ms == 1


def test_invalid_tick_falls_back(caplog):
    settings = load_settings({"BUSYLINE_TICK_MS": "fast"})
    assert settings.tick_ms == 100
    assert "BUSYLINE_TICK_MS" in caplog.text


def test_interrupt_flag_needs_truthy_value():
    assert load_settings({"BUSYLINE_NO_INTERRUPT": "0"}).handle_interrupts is True


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("BUSYLINE_ABORT_MESSAGE", "Stopped by user")
    assert load_settings().abort_message == "Stopped by user"
