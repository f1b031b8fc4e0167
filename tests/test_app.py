from pathlib import Path

import pytest

from happscaffold.app import (
    AppFileTree,
    bundled_dnas_paths,
    choose_app,
    find_app_manifests,
    get_or_choose_app_manifest_path_for_dna_manifest,
    read_app_manifest,
)
from happscaffold.errors import (
    AppManifestNotFoundError,
    NoAppsFoundForDnaError,
    PathNotFoundError,
)
from happscaffold.manifest import AppManifest, AppRoleManifest, DnaManifest


def _happ(name, roles=()):
    return AppManifest(name=name, description=None, roles=list(roles)).to_yaml()


def _tree():
    forum_role = AppRoleManifest(
        name="forum", dna_location="../dnas/forum/workdir/forum.dna"
    )
    return {
        "workdir": {"happ.yaml": _happ("forum_app", [forum_role])},
        "dnas": {
            "forum": {
                "workdir": {"dna.yaml": DnaManifest(name="forum", origin_time=0).to_yaml()}
            }
        },
    }


def _two_apps():
    return {
        "a": {"happ.yaml": _happ("alpha")},
        "b": {"happ.yaml": _happ("beta")},
    }


def test_find_app_manifests():
    manifests = find_app_manifests(_two_apps())
    assert set(manifests) == {Path("a/happ.yaml"), Path("b/happ.yaml")}
    assert manifests[Path("b/happ.yaml")].name == "beta"


def test_get_or_choose_no_app():
    with pytest.raises(AppManifestNotFoundError):
        AppFileTree.get_or_choose({"x": "y"}, None)


def test_get_or_choose_no_app_even_when_named():
    with pytest.raises(AppManifestNotFoundError):
        AppFileTree.get_or_choose({}, "alpha")


def test_get_or_choose_single_app():
    app = AppFileTree.get_or_choose(_tree(), None)
    assert app.app_manifest_path == Path("workdir/happ.yaml")
    assert app.app_manifest.name == "forum_app"


def test_get_or_choose_named_app():
    app = AppFileTree.get_or_choose(_two_apps(), "beta")
    assert app.app_manifest_path == Path("b/happ.yaml")


def test_get_or_choose_named_missing():
    with pytest.raises(AppManifestNotFoundError):
        AppFileTree.get_or_choose(_two_apps(), "gamma")


def test_get_or_choose_asks_with_default(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _prompt: "")
    app = AppFileTree.get_or_choose(_two_apps(), None)
    assert app.app_manifest.name == "alpha"


def test_choose_app_returns_selected(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _prompt: "2")
    path, manifest = choose_app(find_app_manifests(_two_apps()))
    assert path == Path("b/happ.yaml")
    assert manifest.name == "beta"


def test_read_app_manifest_round_trip():
    manifest = read_app_manifest(_tree(), "workdir/happ.yaml")
    assert manifest.name == "forum_app"
    assert [r.name for r in manifest.roles] == ["forum"]


def test_read_app_manifest_missing():
    with pytest.raises(PathNotFoundError):
        read_app_manifest(_tree(), "nowhere/happ.yaml")


def test_bundled_dnas_paths_resolves_relative_to_workdir():
    assert bundled_dnas_paths(_tree(), "workdir/happ.yaml") == [Path("dnas/forum/workdir")]


def test_bundled_dnas_paths_skips_roles_without_location():
    tree = {"happ.yaml": _happ("app", [AppRoleManifest(name="empty")])}
    assert bundled_dnas_paths(tree, "happ.yaml") == []


def test_no_app_found_for_dna():
    tree = _tree()
    tree["workdir"]["happ.yaml"] = _happ("forum_app")
    with pytest.raises(NoAppsFoundForDnaError) as info:
        get_or_choose_app_manifest_path_for_dna_manifest(
            tree, "dnas/forum/workdir/dna.yaml"
        )
    assert info.value.dna_name == "forum"