"""The cargo workspace of a scaffolded app."""

from __future__ import annotations

import copy
import json
import os
import subprocess
from collections.abc import MutableMapping
from pathlib import Path, PurePath
from typing import Any, Dict, List, Optional, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import CargoMetadataError, MalformedFileError, ScaffoldError
from .file_tree import FileTree, file_content, insert_file

PathLike = Union[str, "os.PathLike[str]"]

_WORKSPACE_CARGO_TOML = Path("Cargo.toml")

_WORKSPACE_TEMPLATE = """[workspace]
members = [
  "dnas/*/zomes/coordinator/*",
  "dnas/*/zomes/integrity/*",
]
resolver = "2"

[profile.dev]
opt-level = "z"

[profile.release]
opt-level = "z"
"""


def _malformed(reason: str) -> MalformedFileError:
    return MalformedFileError(_WORKSPACE_CARGO_TOML, reason)


def workspace_cargo_toml() -> str:
    """Return the root Cargo.toml of a new app."""
    return _WORKSPACE_TEMPLATE


def get_workspace_cargo_toml(app_file_tree: FileTree) -> tomlkit.TOMLDocument:
    """Parse the root Cargo.toml of the app."""
    text = file_content(app_file_tree, _WORKSPACE_CARGO_TOML)
    try:
        return tomlkit.parse(text)
    except TOMLKitError as exc:
        raise ScaffoldError(f"TOML deserialization error: {exc}") from exc


def _add_workspace_dependency(app_file_tree: FileTree, crate_name: str, location: Any) -> FileTree:
    new_tree = copy.deepcopy(app_file_tree)
    document = get_workspace_cargo_toml(new_tree)
    workspace = document.get("workspace")
    if workspace is None:
        raise _malformed("no workspace table found in workspace root")
    if not isinstance(workspace, MutableMapping):
        raise _malformed("workspace key is not a table")

    dependencies = workspace.get("dependencies")
    if dependencies is None:
        dependencies = tomlkit.table()
        dependencies[crate_name] = location
        workspace["dependencies"] = dependencies
    elif isinstance(dependencies, MutableMapping):
        dependencies[crate_name] = location
    else:
        raise _malformed("workspace.dependencies is not a table")

    insert_file(new_tree, _WORKSPACE_CARGO_TOML, tomlkit.dumps(document))
    return new_tree


def add_workspace_external_dependency(
    app_file_tree: FileTree, crate_name: str, crate_version: str
) -> FileTree:
    """Return a copy of the tree with a versioned workspace dependency added."""
    return _add_workspace_dependency(app_file_tree, crate_name, crate_version)


def add_workspace_path_dependency(
    app_file_tree: FileTree, crate_name: str, path_from_workspace_root: PathLike
) -> FileTree:
    """Return a copy of the tree with a path workspace dependency added."""
    location = tomlkit.inline_table()
    location["path"] = PurePath(path_from_workspace_root).as_posix()
    return _add_workspace_dependency(app_file_tree, crate_name, location)


def get_workspace_members(app_file_tree: FileTree) -> List[str]:
    """Return the string entries of workspace.members."""
    document = get_workspace_cargo_toml(app_file_tree)
    workspace = document.get("workspace")
    if not isinstance(workspace, MutableMapping):
        raise _malformed("should have a workspace table")
    members = workspace.get("members")
    if members is None:
        raise _malformed("should have a members field in the workspace table")
    if not isinstance(members, list):
        raise _malformed("the members field in the workspace table should be an array")
    return [str(m) for m in members if isinstance(m, str)]


def _workspace_manifest_path() -> Path:
    return (Path.cwd() / _WORKSPACE_CARGO_TOML).resolve(strict=True)


def _run_cargo_metadata(manifest_path: Path) -> Dict[str, Any]:
    command = [
        "cargo",
        "metadata",
        "--format-version",
        "1",
        "--manifest-path",
        str(manifest_path),
    ]
    try:
        completed = subprocess.run(command, stdout=subprocess.PIPE, check=False)
    except OSError as exc:
        raise CargoMetadataError(f"Failed to start `cargo metadata`: {exc}") from exc
    if completed.returncode != 0:
        raise CargoMetadataError("Error during execution of `cargo metadata`")
    try:
        stdout = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CargoMetadataError("Output of `cargo metadata` was not valid utf8") from exc
    line = next((l for l in stdout.splitlines() if l.startswith("{")), None)
    if line is None:
        raise CargoMetadataError("could not find any json in the output of `cargo metadata`")
    try:
        return json.loads(line)
    except json.JSONDecodeError as exc:
        raise CargoMetadataError(f"Failed to interpret `cargo metadata`'s json: {exc}") from exc


def _workspace_packages(metadata: Dict[str, Any]) -> List[Dict[str, Any]]:
    members = set(metadata.get("workspace_members", []))
    return [p for p in metadata.get("packages", []) if p.get("id") in members]


def _relative_to(path: str, base: Path) -> Path:
    return Path(*Path(path).parts[len(base.parts):])


def get_workspace_packages_locations(app_file_tree: FileTree) -> Optional[List[Path]]:
    """Return the manifest paths of the workspace packages, or None if cargo fails."""
    current_dir = Path.cwd()
    manifest_path = _workspace_manifest_path()
    try:
        metadata = _run_cargo_metadata(manifest_path)
    except CargoMetadataError:
        return None
    return [
        _relative_to(p["manifest_path"], current_dir) for p in _workspace_packages(metadata)
    ]


def workspace_package_path(app_file_tree: FileTree, crate_name: str) -> Optional[Path]:
    """Return the manifest path of the named workspace package, if there is one."""
    current_dir = Path.cwd()
    metadata = _run_cargo_metadata(_workspace_manifest_path())
    for package in _workspace_packages(metadata):
        if package.get("name") == crate_name:
            return _relative_to(package["manifest_path"], current_dir)
    return None


def exec_metadata(app_file_tree: FileTree) -> Dict[str, Any]:
    """Run `cargo metadata` on the workspace in the current directory."""
    try:
        manifest_path = _workspace_manifest_path()
    except OSError as exc:
        raise CargoMetadataError(str(exc)) from exc
    return _run_cargo_metadata(manifest_path)