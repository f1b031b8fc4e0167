"""DNAs inside an app's file tree and their zome manifests."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, replace
from pathlib import Path, PurePath
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .errors import (
    DnaNotFoundError,
    IntegrityZomeNotFoundError,
    NoDnasFoundError,
)
from .file_tree import FileTree, file_content, find_files_by_name, insert_file
from .manifest import DnaManifest, ZomeManifest, check_zome_doesnt_exist

PathLike = Union[str, "os.PathLike[str]"]

DNA_MANIFEST_FILE_NAME = "dna.yaml"
_WASM_TARGET = ("target", "wasm32-unknown-unknown", "release")


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
class DnaFileTree:
    """A file tree together with the DNA manifest chosen inside it."""

    file_tree: FileTree
    dna_manifest_path: Path
    dna_manifest: DnaManifest

    @classmethod
    def get_or_choose(cls, file_tree: FileTree, dna_name: Optional[str]) -> "DnaFileTree":
        """Pick the DNA named ``dna_name``, the only DNA, or ask the user."""
        manifests = find_dna_manifests(file_tree)

        if dna_name is not None:
            found = next(
                ((p, m) for p, m in manifests.items() if m.name == dna_name), None
            )
            if found is None:
                raise DnaNotFoundError(dna_name)
            path, manifest = found
        elif not manifests:
            raise NoDnasFoundError()
        elif len(manifests) == 1:
            path, manifest = next(iter(manifests.items()))
        else:
            path, manifest = _choose_dna(manifests.items())

        return cls(file_tree=file_tree, dna_manifest_path=path, dna_manifest=manifest)

    @classmethod
    def from_dna_manifest_path(
        cls, file_tree: FileTree, dna_manifest_path: PathLike
    ) -> "DnaFileTree":
        """Read the DNA manifest at ``dna_manifest_path`` in ``file_tree``."""
        manifest = read_dna_manifest(file_tree, dna_manifest_path)
        return cls(
            file_tree=file_tree,
            dna_manifest_path=Path(dna_manifest_path),
            dna_manifest=manifest,
        )


def _choose_dna(
    manifests: Iterable[Tuple[Path, DnaManifest]]
) -> Tuple[Path, DnaManifest]:
    options = list(manifests)
    selection = _select(
        "Multiple DNAs were found in this repository, choose one:",
        [m.name for _, m in options],
    )
    return options[selection]


def find_dna_manifests(file_tree: FileTree) -> Dict[Path, DnaManifest]:
    """Return every DNA manifest in the tree, keyed by its path."""
    return {
        path: DnaManifest.from_yaml(text)
        for path, text in find_files_by_name(file_tree, DNA_MANIFEST_FILE_NAME).items()
    }


def read_dna_manifest(file_tree: FileTree, dna_manifest_path: PathLike) -> DnaManifest:
    """Parse the DNA manifest at ``dna_manifest_path``."""
    return DnaManifest.from_yaml(file_content(file_tree, dna_manifest_path))


def zome_wasm_location(dna_file_tree: DnaFileTree, zome_name: str) -> Path:
    """Return where the zome's wasm is built, relative to the DNA workdir."""
    workdir = PurePath(dna_file_tree.dna_manifest_path).parent
    ups = [".."] * len(workdir.parts)
    return Path(*ups, *_WASM_TARGET, f"{zome_name}.wasm")


def new_coordinator_zome_manifest(
    dna_file_tree: DnaFileTree, name: str, dependencies: Optional[List[str]]
) -> ZomeManifest:
    """Build the manifest entry of a new coordinator zome."""
    return ZomeManifest(
        name=name,
        location=zome_wasm_location(dna_file_tree, name).as_posix(),
        hash=None,
        dependencies=list(dependencies) if dependencies is not None else None,
    )


def new_integrity_zome_manifest(dna_file_tree: DnaFileTree, name: str) -> ZomeManifest:
    """Build the manifest entry of a new integrity zome."""
    return ZomeManifest(
        name=name,
        location=zome_wasm_location(dna_file_tree, name).as_posix(),
        hash=None,
        dependencies=None,
    )


def _write_manifest(dna_file_tree: DnaFileTree, manifest: DnaManifest) -> DnaFileTree:
    file_tree = dna_file_tree.file_tree
    insert_file(file_tree, dna_file_tree.dna_manifest_path, manifest.to_yaml())
    return DnaFileTree.from_dna_manifest_path(file_tree, dna_file_tree.dna_manifest_path)


def add_coordinator_zome_to_manifest(
    dna_file_tree: DnaFileTree, zome_manifest: ZomeManifest
) -> DnaFileTree:
    """Add a coordinator zome to the DNA manifest, checking its dependencies exist."""
    manifest = dna_file_tree.dna_manifest
    check_zome_doesnt_exist(manifest, zome_manifest)

    integrity_names = {z.name for z in manifest.integrity_zomes}
    for dependency in zome_manifest.dependencies or []:
        if dependency not in integrity_names:
            raise IntegrityZomeNotFoundError(dependency, manifest.name)

    new_manifest = replace(
        manifest,
        integrity_zomes=copy.deepcopy(manifest.integrity_zomes),
        coordinator_zomes=[*copy.deepcopy(manifest.coordinator_zomes), zome_manifest],
    )
    return _write_manifest(dna_file_tree, new_manifest)


def add_integrity_zome_to_manifest(
    dna_file_tree: DnaFileTree, zome_manifest: ZomeManifest
) -> DnaFileTree:
    """Add an integrity zome to the DNA manifest."""
    manifest = dna_file_tree.dna_manifest
    check_zome_doesnt_exist(manifest, zome_manifest)

    new_manifest = replace(
        manifest,
        integrity_zomes=[*copy.deepcopy(manifest.integrity_zomes), zome_manifest],
        coordinator_zomes=copy.deepcopy(manifest.coordinator_zomes),
    )
    return _write_manifest(dna_file_tree, new_manifest)