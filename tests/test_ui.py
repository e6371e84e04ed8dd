import pytest

from busyline.cli.ui import spinning
from busyline.core.models import ExitStatus


def test_spinning_success(recorder, quiet_settings):
    with spinning("Fetching", done="Fetched", renderer=recorder, settings=quiet_settings, platform="linux") as spin:
        assert spin.running
        spin.update_message("Fetching page 2")

    assert recorder.of("final") == [("✓", "Fetched", ExitStatus.SUCCESS)]


def test_spinning_error_reraises(recorder, quiet_settings):
    with pytest.raises(ValueError):
        with spinning("Parsing", renderer=recorder, settings=quiet_settings, platform="linux"):
            raise ValueError("bad token")

    assert recorder.of("final") == [("✗", "Parsing: bad token", ExitStatus.ERROR)]


def test_spinning_error_without_text_names_exception(recorder, quiet_settings):
    with pytest.raises(KeyError):
        with spinning("Lookup", renderer=recorder, settings=quiet_settings, platform="linux"):
            raise KeyError()

    [(_, message, _)] = recorder.of("final")
    assert message == "Lookup: KeyError"
