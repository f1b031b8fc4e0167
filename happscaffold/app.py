"""Apps (happ.yaml manifests) inside a file tree."""

from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .dna import read_dna_manifest
from .errors import AppManifestNotFoundError, NoAppsFoundForDnaError, ScaffoldError
from .file_tree import FileTree, file_content, find_files_by_name
from .manifest import AppManifest

PathLike = Union[str, "os.PathLike[str]"]

APP_MANIFEST_FILE_NAME = "happ.yaml"


def _select(prompt: str, items: Sequence[str], default: int = 0) -> int:
    """Ask the user to pick one of ``items``; return its index."""
    print(prompt)
    for number, item in enumerate(items, start=1):
        marker = ">" if number - 1 == default else " "
        print(f"{marker} {number}. {item}")
    while True:
        answer = input(f"Choose [1-{len(items)}] (default {default + 1}): ").strip()
        if not answer:
            return default
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return int(answer) - 1
        print(f"Please enter a number between 1 and {len(items)}.")


@dataclass
class AppFileTree:
    """A file tree together with the app manifest chosen inside it."""

    file_tree: FileTree
    app_manifest_path: Path
    app_manifest: AppManifest

    @classmethod
    def get_or_choose(cls, file_tree: FileTree, app_name: Optional[str]) -> "AppFileTree":
        """Pick the app named ``app_name``, the only app, or ask the user."""
        manifests = find_app_manifests(file_tree)

        if not manifests:
            raise AppManifestNotFoundError()
        if app_name is not None:
            found = next(
                ((p, m) for p, m in manifests.items() if m.name == app_name), None
            )
            if found is None:
                raise AppManifestNotFoundError()
            path, manifest = found
        elif len(manifests) == 1:
            path, manifest = next(iter(manifests.items()))
        else:
            path, manifest = choose_app(manifests)

        return cls(file_tree=file_tree, app_manifest_path=path, app_manifest=manifest)


def choose_app(app_manifests: Dict[Path, AppManifest]) -> Tuple[Path, AppManifest]:
    """Ask the user which of several apps to use."""
    options = list(app_manifests.items())
    selection = _select(
        "Multiple apps were found in this repository, choose one:",
        [m.name for _, m in options],
    )
    return options[selection]


def find_app_manifests(file_tree: FileTree) -> Dict[Path, AppManifest]:
    """Return every app manifest in the tree, keyed by its path."""
    return {
        path: AppManifest.from_yaml(text)
        for path, text in find_files_by_name(file_tree, APP_MANIFEST_FILE_NAME).items()
    }


def read_app_manifest(file_tree: FileTree, app_manifest_path: PathLike) -> AppManifest:
    """Parse the app manifest at ``app_manifest_path``."""
    return AppManifest.from_yaml(file_content(file_tree, app_manifest_path))


def _clean(path: PurePath) -> Path:
    return Path(posixpath.normpath(path.as_posix()))


def bundled_dnas_paths(file_tree: FileTree, app_manifest_path: PathLike) -> List[Path]:
    """Return the folders of the DNA bundles the app refers to, from the tree root."""
    manifest = read_app_manifest(file_tree, app_manifest_path)
    app_workdir = PurePosixPath(PurePath(app_manifest_path).as_posix()).parent

    paths = []
    for role in manifest.roles:
        if role.dna_location is None or role.dna_location_kind != "bundled":
            continue
        bundle_dir = PurePosixPath(role.dna_location).parent
        paths.append(_clean(app_workdir / bundle_dir))
    return paths


def get_or_choose_app_manifest_path_for_dna_manifest(
    file_tree: FileTree, dna_manifest_path: PathLike
) -> Path:
    """Return the path of the app manifest that bundles the given DNA."""
    dna_manifest = read_dna_manifest(file_tree, dna_manifest_path)
    wanted = Path(dna_manifest_path)

    def bundles_dna(app_manifest_path: Path) -> bool:
        try:
            return wanted in bundled_dnas_paths(file_tree, app_manifest_path)
        except ScaffoldError:
            return False

    apps_for_dna = {
        path: manifest
        for path, manifest in find_app_manifests(file_tree).items()
        if bundles_dna(path)
    }

    if not apps_for_dna:
        raise NoAppsFoundForDnaError(dna_manifest.name)
    if len(apps_for_dna) == 1:
        return next(iter(apps_for_dna))
    path, _manifest = choose_app(apps_for_dna)
    return path