import logging
import platform

import pytest

from gamesrv import version


@pytest.fixture
def build_info(monkeypatch):
    monkeypatch.setattr(version, "BUILD_TIME", "2024-01-01")
    monkeypatch.setattr(version, "GIT_TAG", "v1.2.3")
    monkeypatch.setattr(version, "GIT_COMMIT", "abc123")


def test_version_string(build_info):
    text = version.version_string()
    assert text.endswith("\n")
    assert text.splitlines() == [
        "BuildTime: 2024-01-01",
        "GitTag: v1.2.3",
        "GitCommit: abc123",
        "PythonVersion: " + platform.python_version(),
    ]


def test_log_version(build_info, caplog):
    caplog.set_level(logging.INFO, logger="gamesrv.version")
    version.log_version()
    messages = [r.getMessage() for r in caplog.records if r.name == "gamesrv.version"]
    assert messages[:3] == ["BuildTime: 2024-01-01", "GitTag: v1.2.3", "GitCommit: abc123"]
    assert len(messages) == 4


@pytest.mark.parametrize("argv", [[], ["version"]])
def test_main_prints_version(build_info, capsys, argv):
    assert version.main(argv) == 0
    assert capsys.readouterr().out == version.version_string() + "\n"


def test_main_rejects_unknown_command():
    with pytest.raises(SystemExit):
        version.main(["other"])