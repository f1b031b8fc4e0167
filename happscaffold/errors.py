"""Exceptions raised while scaffolding."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


class ScaffoldError(Exception):
    """Base class for every error raised by the scaffolding tool."""


class PathNotFoundError(ScaffoldError):
    """A path does not exist in a file tree."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(f"Path was not found: {self.path}")


class FolderAlreadyExistsError(ScaffoldError):
    """The folder to scaffold into already exists."""

    def __init__(self, path: PathLike) -> None:
        self.path = Path(path)
        super().__init__(f"Folder already exists: {self.path}")


class InvalidReservedWordError(ScaffoldError):
    """A name collides with a reserved word."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"Invalid reserved word: {word}")


class InvalidPathError(ScaffoldError):
    """A path cannot be used for the requested operation."""

    def __init__(self, path: PathLike, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid path {self.path}: {reason}")


class NixSetupError(ScaffoldError):
    """The nix development environment could not be set up."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Error setting up the nix environment {reason}")


class AppManifestNotFoundError(ScaffoldError):
    """No happ.yaml was found."""

    def __init__(self) -> None:
        super().__init__("No app manifest (happ.yaml) was found in this directory tree")


class DnaNotFoundError(ScaffoldError):
    """A named DNA does not exist in the app."""

    def __init__(self, dna_name: str) -> None:
        self.dna_name = dna_name
        super().__init__(f'DNA "{dna_name}" was not found in this app')


class NoAppsFoundForDnaError(ScaffoldError):
    """No app bundles the given DNA."""

    def __init__(self, dna_name: str) -> None:
        self.dna_name = dna_name
        super().__init__(f'No apps were found that have the DNA "{dna_name}"')


class NoDnasFoundError(ScaffoldError):
    """No DNA manifests were found."""

    def __init__(self) -> None:
        super().__init__("No DNAs were found")


class MalformedFileError(ScaffoldError):
    """A file could not be understood."""

    def __init__(self, path: PathLike, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Malformed file {self.path}: {reason}")


class DnaAlreadyExistsError(ScaffoldError):
    """A DNA with the same name already exists."""

    def __init__(self, dna_name: str) -> None:
        self.dna_name = dna_name
        super().__init__(f'DNA "{dna_name}" already exists')


class ZomeAlreadyExistsError(ScaffoldError):
    """A zome with the same name already exists in the DNA."""

    def __init__(self, zome_name: str, dna_name: str) -> None:
        self.zome_name = zome_name
        self.dna_name = dna_name
        super().__init__(f'Zome "{zome_name}" already exists in dna "{dna_name}"')


class IntegrityZomeNotFoundError(ScaffoldError):
    """A required integrity zome is missing from the DNA."""

    def __init__(self, zome_name: str, dna_name: str) -> None:
        self.zome_name = zome_name
        self.dna_name = dna_name
        super().__init__(
            f'Integrity zome "{zome_name}" was not found in dna "{dna_name}"'
        )


class InvalidCollectionTypeError(ScaffoldError):
    """An unknown collection type was given."""

    def __init__(self, value: str, allowed: str) -> None:
        self.value = value
        self.allowed = allowed
        super().__init__(
            f'Invalid collection type: "{value}". Allowed collection types: "{allowed}"'
        )


class InvalidArgumentsError(ScaffoldError):
    """The command-line arguments are inconsistent."""

    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(f'Invalid arguments: "{message}"')


class CargoMetadataError(ScaffoldError):
    """Running or parsing `cargo metadata` failed."""

    def __init__(self, message: str) -> None:
        self.detail = message
        super().__init__(message)