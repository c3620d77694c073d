import sys
from pathlib import Path

from utils import constants


def test_env_override_wins(monkeypatch, tmp_path):
    monkeypatch.setenv("SVWB_TRACKER_HOME", str(tmp_path))

    assert constants._default_base_dir() == tmp_path


def test_frozen_app_uses_local_appdata(monkeypatch, tmp_path):
    monkeypatch.delenv("SVWB_TRACKER_HOME", raising=False)
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))

    assert constants._default_base_dir() == tmp_path / constants.APP_NAME


def test_source_checkout_uses_repo_root(monkeypatch):
    monkeypatch.delenv("SVWB_TRACKER_HOME", raising=False)
    monkeypatch.delattr(sys, "frozen", raising=False)

    assert constants._default_base_dir() == Path(constants.__file__).resolve().parent.parent
