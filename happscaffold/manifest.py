"""DNA, app and web-app manifests and their YAML form."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from itertools import chain
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from .errors import ScaffoldError, ZomeAlreadyExistsError

MANIFEST_VERSION = "1"
_LOCATION_KINDS = ("bundled", "path", "url")
_MODIFIER_KEYS = ("network_seed", "properties", "origin_time", "quantum_time")


def _yaml_error(message: str) -> ScaffoldError:
    return ScaffoldError(f"YAML serialization error: {message}")


def _load(text: str) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise _yaml_error(str(exc)) from exc
    if not isinstance(data, dict):
        raise _yaml_error("manifest is not a mapping")
    version = data.get("manifest_version")
    if version is None or str(version) != MANIFEST_VERSION:
        raise _yaml_error(f"unsupported manifest_version {version!r}")
    return data


def _dump(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(
        {"manifest_version": MANIFEST_VERSION, **data},
        sort_keys=False,
        allow_unicode=True,
        explicit_start=True,
    )


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _yaml_error(f"{what} is not a mapping")
    return value


def _require(data: Mapping[str, Any], key: str, what: str) -> Any:
    if key not in data or data[key] is None:
        raise _yaml_error(f"{what} has no {key!r} field")
    return data[key]


def _find_location(data: Mapping[str, Any]) -> Optional[Tuple[str, str]]:
    for kind in _LOCATION_KINDS:
        if data.get(kind) is not None:
            return kind, str(data[kind])
    return None


def _read_location(data: Mapping[str, Any], what: str) -> Tuple[str, str]:
    location = _find_location(data)
    if location is None:
        raise _yaml_error(f"{what} has no location")
    return location


@dataclass
class ZomeManifest:
    """One zome entry of a DNA manifest."""

    name: str
    location: str
    location_kind: str = "bundled"
    hash: Optional[str] = None
    dependencies: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "hash": self.hash,
            self.location_kind: self.location,
            "dependencies": None
            if self.dependencies is None
            else [{"name": d} for d in self.dependencies],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ZomeManifest":
        data = _mapping(data, "zome")
        name = str(_require(data, "name", "zome"))
        kind, location = _read_location(data, f"zome {name!r}")
        raw_dependencies = data.get("dependencies")
        dependencies = None
        if raw_dependencies is not None:
            if not isinstance(raw_dependencies, list):
                raise _yaml_error(f"dependencies of zome {name!r} is not a list")
            dependencies = [
                str(_require(_mapping(d, "dependency"), "name", "dependency"))
                for d in raw_dependencies
            ]
        return cls(
            name=name,
            location=location,
            location_kind=kind,
            hash=data.get("hash"),
            dependencies=dependencies,
        )


def _zomes(section: Mapping[str, Any], what: str) -> List[ZomeManifest]:
    zomes = section.get("zomes") or []
    if not isinstance(zomes, list):
        raise _yaml_error(f"{what}.zomes is not a list")
    return [ZomeManifest.from_dict(z) for z in zomes]


@dataclass
class DnaManifest:
    """The contents of a dna.yaml file."""

    name: str
    integrity_zomes: List[ZomeManifest] = field(default_factory=list)
    coordinator_zomes: List[ZomeManifest] = field(default_factory=list)
    origin_time: Any = 0
    network_seed: Optional[str] = None
    properties: Any = None

    def to_yaml(self) -> str:
        return _dump(
            {
                "name": self.name,
                "integrity": {
                    "network_seed": self.network_seed,
                    "properties": self.properties,
                    "origin_time": self.origin_time,
                    "zomes": [z.to_dict() for z in self.integrity_zomes],
                },
                "coordinator": {
                    "zomes": [z.to_dict() for z in self.coordinator_zomes],
                },
            }
        )

    @classmethod
    def from_yaml(cls, text: str) -> "DnaManifest":
        data = _load(text)
        integrity = _mapping(data.get("integrity"), "integrity")
        coordinator = _mapping(data.get("coordinator"), "coordinator")
        return cls(
            name=str(_require(data, "name", "DNA manifest")),
            integrity_zomes=_zomes(integrity, "integrity"),
            coordinator_zomes=_zomes(coordinator, "coordinator"),
            origin_time=integrity.get("origin_time", 0),
            network_seed=integrity.get("network_seed"),
            properties=integrity.get("properties"),
        )


def _default_modifiers() -> Dict[str, Any]:
    return dict.fromkeys(_MODIFIER_KEYS)


def _default_provisioning() -> Dict[str, Any]:
    return {"strategy": "create", "deferred": False}


@dataclass
class AppRoleManifest:
    """One role of an app manifest, with the DNA it provisions."""

    name: str
    dna_location: Optional[str] = None
    dna_location_kind: str = "bundled"
    modifiers: Dict[str, Any] = field(default_factory=_default_modifiers)
    installed_hash: Optional[str] = None
    clone_limit: int = 0
    provisioning: Optional[Dict[str, Any]] = field(default_factory=_default_provisioning)

    def _to_dict(self) -> Dict[str, Any]:
        dna: Dict[str, Any] = {}
        if self.dna_location is not None:
            dna[self.dna_location_kind] = self.dna_location
        dna["modifiers"] = dict(self.modifiers)
        dna["installed_hash"] = self.installed_hash
        dna["clone_limit"] = self.clone_limit
        return {"name": self.name, "provisioning": self.provisioning, "dna": dna}

    @classmethod
    def _from_dict(cls, data: Any) -> "AppRoleManifest":
        data = _mapping(data, "role")
        name = str(_require(data, "name", "role"))
        dna = _mapping(data.get("dna"), f"dna of role {name!r}")
        location = _find_location(dna)
        modifiers = _default_modifiers()
        modifiers.update(_mapping(dna.get("modifiers"), "modifiers"))
        provisioning = data.get("provisioning")
        return cls(
            name=name,
            dna_location=location[1] if location else None,
            dna_location_kind=location[0] if location else "bundled",
            modifiers=modifiers,
            installed_hash=dna.get("installed_hash"),
            clone_limit=int(dna.get("clone_limit") or 0),
            provisioning=dict(provisioning) if provisioning is not None else None,
        )


@dataclass
class AppManifest:
    """The contents of a happ.yaml file."""

    name: str
    description: Optional[str] = None
    roles: List[AppRoleManifest] = field(default_factory=list)

    def to_yaml(self) -> str:
        return _dump(
            {
                "name": self.name,
                "description": self.description,
                "roles": [r._to_dict() for r in self.roles],
            }
        )

    @classmethod
    def from_yaml(cls, text: str) -> "AppManifest":
        data = _load(text)
        roles = data.get("roles") or []
        if not isinstance(roles, list):
            raise _yaml_error("roles is not a list")
        return cls(
            name=str(_require(data, "name", "app manifest")),
            description=data.get("description"),
            roles=[AppRoleManifest._from_dict(r) for r in roles],
        )


@dataclass
class WebAppManifest:
    """The contents of a web-happ.yaml file."""

    name: str
    happ_manifest: str
    ui: str
    happ_manifest_kind: str = "bundled"
    ui_kind: str = "bundled"

    def to_yaml(self) -> str:
        return _dump(
            {
                "name": self.name,
                "ui": {self.ui_kind: self.ui},
                "happ_manifest": {self.happ_manifest_kind: self.happ_manifest},
            }
        )

    @classmethod
    def from_yaml(cls, text: str) -> "WebAppManifest":
        data = _load(text)
        ui_kind, ui = _read_location(_mapping(data.get("ui"), "ui"), "ui")
        happ_kind, happ = _read_location(
            _mapping(data.get("happ_manifest"), "happ_manifest"), "happ_manifest"
        )
        return cls(
            name=str(_require(data, "name", "web app manifest")),
            happ_manifest=happ,
            ui=ui,
            happ_manifest_kind=happ_kind,
            ui_kind=ui_kind,
        )


def empty_dna_manifest(dna_name: str) -> str:
    """Return the YAML of a DNA manifest with no zomes, originating now."""
    origin_time = time.time_ns() // 1000
    return DnaManifest(name=dna_name, origin_time=origin_time).to_yaml()


def check_zome_doesnt_exist(dna_manifest: DnaManifest, zome_manifest: ZomeManifest) -> None:
    """Raise ZomeAlreadyExistsError if the DNA already has a zome of that name."""
    for zome in chain(dna_manifest.coordinator_zomes, dna_manifest.integrity_zomes):
        if zome.name == zome_manifest.name:
            raise ZomeAlreadyExistsError(zome_manifest.name, dna_manifest.name)