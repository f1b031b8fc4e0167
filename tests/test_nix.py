import subprocess
from unittest import mock

import pytest

from happscaffold.errors import NixSetupError
from happscaffold.nix import (
    EXTRA_EXPERIMENTAL_FEATURES_LINE,
    HOLOCHAIN_NIX_VERSION,
    add_extra_experimental_features,
    flake_nix,
    setup_nix_developer_environment,
)


def _conf(home):
    return home / ".config" / "nix" / "nix.conf"


def test_flake_nix_contents():
    flake = flake_nix()
    assert f"dir=versions/{HOLOCHAIN_NIX_VERSION}" in flake
    assert 'description = "Template for Holochain app development";' in flake
    assert flake.count("{") == flake.count("}")
    assert flake.startswith("{") and flake.endswith("}")


def test_add_features_creates_config(tmp_path):
    add_extra_experimental_features(tmp_path)
    assert _conf(tmp_path).read_text() == EXTRA_EXPERIMENTAL_FEATURES_LINE


def test_add_features_is_idempotent(tmp_path):
    add_extra_experimental_features(tmp_path)
    add_extra_experimental_features(tmp_path)
    assert _conf(tmp_path).read_text() == EXTRA_EXPERIMENTAL_FEATURES_LINE


def test_add_features_appends_to_existing(tmp_path):
    conf = _conf(tmp_path)
    conf.parent.mkdir(parents=True)
    conf.write_text("sandbox = false\n")
    add_extra_experimental_features(tmp_path)
    assert conf.read_text() == "sandbox = false\n" + EXTRA_EXPERIMENTAL_FEATURES_LINE


def test_add_features_without_home():
    with pytest.raises(NixSetupError):
        add_extra_experimental_features(None)


def test_setup_refused_on_windows(tmp_path):
    with mock.patch("happscaffold.nix.sys.platform", "win32"):
        with pytest.raises(NixSetupError) as info:
            setup_nix_developer_environment(tmp_path)
    assert info.value.reason == "Windows doesn't support nix"


@pytest.fixture
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    return home_dir


def test_setup_fails_when_nix_fails(tmp_path, home):
    failed = subprocess.CompletedProcess(args=[], returncode=1)
    with mock.patch("happscaffold.nix.sys.platform", "linux"), mock.patch(
        "happscaffold.nix.subprocess.run", return_value=failed
    ):
        with pytest.raises(NixSetupError):
            setup_nix_developer_environment(tmp_path)


def test_setup_runs_flake_update(tmp_path, home):
    ok = subprocess.CompletedProcess(args=[], returncode=0)
    with mock.patch("happscaffold.nix.sys.platform", "linux"), mock.patch(
        "happscaffold.nix.subprocess.run", return_value=ok
    ) as run:
        setup_nix_developer_environment(tmp_path)
    assert run.call_args.args[0] == ["nix", "flake", "update"]
    assert run.call_args.kwargs["cwd"] == tmp_path
    assert EXTRA_EXPERIMENTAL_FEATURES_LINE in _conf(home).read_text()