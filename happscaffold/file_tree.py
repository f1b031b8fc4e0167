"""In-memory file trees.

A file tree is either a ``str`` (the contents of a file) or a ``dict``
mapping entry names to file trees (a directory).
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path, PurePath
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TypeVar, Union

from .errors import InvalidPathError, PathNotFoundError

FileTree = Union[Dict[str, "FileTree"], str]
PathLike = Union[str, "os.PathLike[str]"]
T = TypeVar("T")

_NOT_A_DIRECTORY = "given path is a file, and we expected it to be a directory"


def _parts(path: PathLike) -> Tuple[str, ...]:
    pure = PurePath(path)
    return pure.parts[1:] if pure.anchor else pure.parts


def _lookup(file_tree: FileTree, path: PathLike) -> FileTree:
    node = file_tree
    for part in _parts(path):
        if not isinstance(node, dict) or part not in node:
            raise PathNotFoundError(path)
        node = node[part]
    return node


def _directory(file_tree: FileTree, folder_path: PathLike) -> Dict[str, FileTree]:
    node = _lookup(file_tree, folder_path)
    if not isinstance(node, dict):
        raise PathNotFoundError(folder_path)
    return node


# --- ignore rules used when loading from disk -------------------------------


@dataclass(frozen=True)
class _IgnoreRule:
    base: str
    pattern: str
    negate: bool
    dir_only: bool
    anchored: bool

    def matches(self, rel_path: str, name: str, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        if self.base:
            prefix = self.base + "/"
            if not rel_path.startswith(prefix):
                return False
            sub = rel_path[len(prefix):]
        else:
            sub = rel_path
        if self.anchored:
            return fnmatchcase(sub, self.pattern)
        return fnmatchcase(name, self.pattern)


def _parse_ignore_file(path: Path, base: str) -> List[_IgnoreRule]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return []
    rules = []
    for line in text.splitlines():
        line = line.rstrip()
        if not line or line.startswith("#"):
            continue
        negate = line.startswith("!")
        if negate:
            line = line[1:]
        if line.startswith("\\"):
            line = line[1:]
        dir_only = line.endswith("/")
        line = line.rstrip("/")
        if line.startswith("**/"):
            line = line[3:]
        anchored = "/" in line
        line = line.lstrip("/")
        if line:
            rules.append(_IgnoreRule(base, line, negate, dir_only, anchored))
    return rules


def _is_ignored(rules: List[_IgnoreRule], rel_path: str, name: str, is_dir: bool) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, name, is_dir):
            ignored = not rule.negate
    return ignored


def _inside_git_repository(root: Path) -> bool:
    return any((d / ".git").exists() for d in (root, *root.parents))


def _walk(
    directory: Path, rel: PurePath, rules: List[_IgnoreRule], use_git: bool
) -> Iterator[Tuple[PurePath, Path]]:
    base = rel.as_posix() if rel.parts else ""
    rules = list(rules)
    if use_git:
        rules += _parse_ignore_file(directory / ".gitignore", base)
    rules += _parse_ignore_file(directory / ".ignore", base)

    for entry in sorted(os.scandir(directory), key=lambda e: e.name):
        entry_rel = rel / entry.name
        is_dir = entry.is_dir()
        if _is_ignored(rules, entry_rel.as_posix(), entry.name, is_dir):
            continue
        yield entry_rel, Path(entry.path)
        if is_dir and not entry.is_symlink():
            yield from _walk(Path(entry.path), entry_rel, rules, use_git)


# --- public API --------------------------------------------------------------


def load_directory_into_memory(path: PathLike) -> Dict[str, FileTree]:
    """Read the directory at ``path`` recursively into a file tree.

    Hidden files are included; ``.ignore`` files, and ``.gitignore`` files
    inside a git repository, are honoured. Files that are not UTF-8 text
    are left out.
    """
    root = Path(path)
    if not root.is_dir():
        raise PathNotFoundError(root)

    file_tree: Dict[str, FileTree] = {}
    use_git = _inside_git_repository(root.resolve())
    for rel, full in _walk(root, PurePath(), [], use_git):
        if full.is_dir():
            create_dir_all(file_tree, rel)
        else:
            try:
                contents = full.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                continue
            insert_file(file_tree, rel, contents)
    return file_tree


def dir_content(file_tree: FileTree, folder_path: PathLike) -> Dict[str, FileTree]:
    """Return a copy of the entries of the directory at ``folder_path``."""
    return copy.deepcopy(_directory(file_tree, folder_path))


def dir_exists(file_tree: FileTree, dir_path: PathLike) -> bool:
    try:
        _directory(file_tree, dir_path)
    except PathNotFoundError:
        return False
    return True


def file_exists(file_tree: FileTree, file_path: PathLike) -> bool:
    try:
        file_content(file_tree, file_path)
    except PathNotFoundError:
        return False
    return True


def file_content(file_tree: FileTree, file_path: PathLike) -> str:
    """Return the contents of the file at ``file_path``."""
    node = _lookup(file_tree, file_path)
    if not isinstance(node, str):
        raise PathNotFoundError(file_path)
    return node


def map_file(file_tree: FileTree, file_path: PathLike, map_fn: Callable[[str], str]) -> None:
    """Replace the contents of a file with ``map_fn`` applied to them."""
    insert_file(file_tree, file_path, map_fn(file_content(file_tree, file_path)))


def insert_file(file_tree: FileTree, file_path: PathLike, content: str) -> None:
    """Write ``content`` at ``file_path``; its folder must already exist."""
    path = PurePath(file_path)
    if not path.name:
        raise InvalidPathError(file_path, "path has no file name")
    _directory(file_tree, path.parent)[path.name] = content


def insert_file_tree_in_dir(
    file_tree: FileTree, folder_path: PathLike, name: str, subtree: FileTree
) -> None:
    """Put ``subtree`` under ``name`` inside the existing folder ``folder_path``."""
    _directory(file_tree, folder_path)[name] = subtree


def _iter_files(file_tree: FileTree, prefix: Path) -> Iterator[Tuple[Path, str]]:
    if not isinstance(file_tree, dict):
        return
    for name, child in file_tree.items():
        child_path = prefix / name
        if isinstance(child, str):
            yield child_path, child
        else:
            yield from _iter_files(child, child_path)


def find_map_files(
    file_tree: FileTree, find_fn: Callable[[Path, str], Optional[T]]
) -> Dict[Path, T]:
    """Map every file through ``find_fn``, keeping results that are not None."""
    found = {}
    for path, contents in _iter_files(file_tree, Path()):
        result = find_fn(path, contents)
        if result is not None:
            found[path] = result
    return dict(sorted(found.items()))


def find_files(
    file_tree: FileTree, predicate: Callable[[Path, str], bool]
) -> Dict[Path, str]:
    """Return the files for which ``predicate(path, contents)`` holds."""
    return find_map_files(
        file_tree, lambda path, contents: contents if predicate(path, contents) else None
    )


def find_files_by_name(file_tree: FileTree, file_name: PathLike) -> Dict[Path, str]:
    """Return every file whose name equals the last component of ``file_name``."""
    wanted = PurePath(file_name).name
    return find_files(file_tree, lambda path, _contents: path.name == wanted)


def flatten_file_tree(file_tree: FileTree) -> Dict[Path, Optional[str]]:
    """Map every path to its file contents, or None for directories."""
    flat: Dict[Path, Optional[str]] = {}

    def walk(node: FileTree, prefix: Path) -> None:
        if not isinstance(node, dict):
            return
        for name, child in node.items():
            child_path = prefix / name
            if isinstance(child, str):
                flat[child_path] = child
            else:
                flat[child_path] = None
                walk(child, child_path)

    walk(file_tree, Path())
    return dict(sorted(flat.items()))


def unflatten_file_tree(flattened_tree: Dict[PathLike, Optional[str]]) -> Dict[str, FileTree]:
    """Build a file tree back from the output of :func:`flatten_file_tree`."""
    file_tree: Dict[str, FileTree] = {}
    for path, contents in sorted(
        ((Path(p), c) for p, c in flattened_tree.items()), key=lambda item: item[0]
    ):
        if contents is None:
            create_dir_all(file_tree, path)
        else:
            create_dir_all(file_tree, path.parent)
            _directory(file_tree, path.parent)[path.name] = contents
    return file_tree


def map_all_files(file_tree: FileTree, map_fn: Callable[[Path, str], str]) -> None:
    """Replace the contents of every file with ``map_fn(path, contents)``."""

    def walk(node: FileTree, prefix: Path) -> None:
        if not isinstance(node, dict):
            return
        for name, child in list(node.items()):
            child_path = prefix / name
            if isinstance(child, dict):
                walk(child, child_path)
            else:
                node[name] = map_fn(child_path, child)

    walk(file_tree, Path())


def create_dir_all(file_tree: FileTree, path: PathLike) -> None:
    """Create the directory at ``path`` and any missing parents."""
    node = file_tree
    for part in _parts(path):
        if not isinstance(node, dict):
            raise InvalidPathError(path, _NOT_A_DIRECTORY)
        node = node.setdefault(part, {})


def build_file_tree(file_tree: FileTree, root: PathLike) -> None:
    """Write the file tree to disk at ``root``, merging with what exists there."""
    target = Path(root)
    if isinstance(file_tree, str):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file_tree, encoding="utf-8")
        return
    target.mkdir(parents=True, exist_ok=True)
    for name, child in file_tree.items():
        build_file_tree(child, target / name)