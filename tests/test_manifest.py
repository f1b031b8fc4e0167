import pytest
import yaml

from happscaffold.errors import ScaffoldError, ZomeAlreadyExistsError
from happscaffold.manifest import (
    AppManifest,
    AppRoleManifest,
    DnaManifest,
    WebAppManifest,
    ZomeManifest,
    check_zome_doesnt_exist,
    empty_dna_manifest,
)


def _zome(name, deps=None):
    return ZomeManifest(
        name=name,
        location=f"../../../target/wasm32-unknown-unknown/release/{name}.wasm",
        dependencies=deps,
    )


def test_zome_manifest_dict_round_trip():
    zome = _zome("posts", ["posts_integrity"])
    assert ZomeManifest.from_dict(zome.to_dict()) == zome


def test_zome_manifest_dict_shape():
    zome = _zome("posts", ["posts_integrity"])
    data = zome.to_dict()
    assert data["bundled"] == zome.location
    assert data["dependencies"] == [{"name": "posts_integrity"}]
    assert data["hash"] is None


def test_zome_manifest_without_location_fails():
    with pytest.raises(ScaffoldError):
        ZomeManifest.from_dict({"name": "posts"})


def test_dna_manifest_yaml_round_trip():
    manifest = DnaManifest(
        name="forum",
        integrity_zomes=[_zome("posts_integrity")],
        coordinator_zomes=[_zome("posts", ["posts_integrity"])],
        origin_time=1676140846503210,
    )
    assert DnaManifest.from_yaml(manifest.to_yaml()) == manifest


def test_dna_manifest_yaml_layout():
    zome = _zome("posts_integrity")
    manifest = DnaManifest(name="forum", integrity_zomes=[zome])
    data = yaml.safe_load(manifest.to_yaml())
    assert data["name"] == "forum"
    assert data["integrity"]["zomes"][0]["bundled"] == zome.location
    assert data["coordinator"]["zomes"] == []


def test_dna_manifest_rejects_invalid_yaml():
    with pytest.raises(ScaffoldError):
        DnaManifest.from_yaml("name: [unclosed")


def test_dna_manifest_rejects_other_version():
    text = DnaManifest(name="forum").to_yaml().replace("'1'", "'2'")
    with pytest.raises(ScaffoldError):
        DnaManifest.from_yaml(text)


def test_empty_dna_manifest():
    manifest = DnaManifest.from_yaml(empty_dna_manifest("forum"))
    assert manifest.name == "forum"
    assert manifest.integrity_zomes == []
    assert manifest.coordinator_zomes == []
    assert isinstance(manifest.origin_time, int) and manifest.origin_time > 0


@pytest.mark.parametrize("section", ["integrity", "coordinator"])
def test_check_zome_doesnt_exist_raises(section):
    existing = _zome("posts")
    manifest = DnaManifest(name="forum")
    getattr(manifest, f"{section}_zomes").append(existing)
    with pytest.raises(ZomeAlreadyExistsError) as info:
        check_zome_doesnt_exist(manifest, _zome("posts"))
    assert info.value.zome_name == "posts"
    assert info.value.dna_name == "forum"


def test_app_manifest_round_trip():
    role = AppRoleManifest(name="forum", dna_location="../dnas/forum/workdir/forum.dna")
    manifest = AppManifest(name="forum", description="A forum", roles=[role])
    assert AppManifest.from_yaml(manifest.to_yaml()) == manifest


def test_app_role_defaults():
    role = AppRoleManifest(name="forum")
    assert role.provisioning == {"strategy": "create", "deferred": False}
    assert role.clone_limit == 0
    assert all(v is None for v in role.modifiers.values())


def test_web_app_manifest_round_trip():
    manifest = WebAppManifest(name="forum", happ_manifest="./forum.happ", ui="../ui/dist.zip")
    assert WebAppManifest.from_yaml(manifest.to_yaml()) == manifest