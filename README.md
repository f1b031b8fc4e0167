# happscaffold

Building blocks for scaffolding hApps: apps, DNAs and zomes. Every change
is made to an in-memory file tree first. Nothing is written to disk until
you write the tree out yourself with `build_file_tree`.

## Installation

```
pip install happscaffold
```

The `test` extra pulls in pytest:

```
pip install "happscaffold[test]"
```

## File trees (`happscaffold.file_tree`)

A file tree is a nested `dict`. A key is a file or directory name. A `str`
value is the contents of a file. A `dict` value is a directory.

```python
from happscaffold.file_tree import (
    build_file_tree,
    file_content,
    insert_file,
    load_directory_into_memory,
)

tree = load_directory_into_memory("my-app")
insert_file(tree, "dnas/README.md", "# DNAs\n")
print(file_content(tree, "dnas/README.md"))
build_file_tree(tree, "my-app")
```

`load_directory_into_memory` includes hidden files. It honours `.ignore`
files, and also `.gitignore` files when the directory is inside a git
repository. It skips files that are not UTF-8 text.

`build_file_tree` merges the tree into whatever is already on disk.

The other functions:

- Reading: `file_content`, `dir_content`, `file_exists`, `dir_exists`.
- Searching: `find_files_by_name`, `find_files`, `find_map_files`. Each returns a `dict` keyed by `Path`, sorted by path.
- Changing: `insert_file`, `insert_file_tree_in_dir`, `create_dir_all`, `map_file`, `map_all_files`.
- Converting: `flatten_file_tree` maps each path to its contents, or to `None` for a directory. `unflatten_file_tree` rebuilds the tree from that mapping.

A missing path raises `PathNotFoundError`. Creating a directory through an
existing file raises `InvalidPathError`.

## Manifests (`happscaffold.manifest`)

The module has dataclasses for the manifests:

- `DnaManifest` for `dna.yaml`, holding `ZomeManifest` entries
- `AppManifest` for `happ.yaml`, holding `AppRoleManifest` entries
- `WebAppManifest`

Each one reads and writes YAML with `from_yaml` and `to_yaml`.
`ZomeManifest` also converts to and from a `dict`.

```python
from happscaffold.manifest import DnaManifest, empty_dna_manifest

manifest = DnaManifest.from_yaml(empty_dna_manifest("forum"))
```

`empty_dna_manifest(name)` returns a DNA manifest with no zomes. Its origin
time is the current time in microseconds.

`check_zome_doesnt_exist` raises `ZomeAlreadyExistsError` when a zome of
the same name is already in the DNA.

## Starting files (`happscaffold.skeleton`)

- `gitignore()` returns the `.gitignore` contents.
- `empty_happ_manifest(app_name, app_description)` returns an app manifest with no roles, as YAML.
- `web_happ_manifest(app_name, happ_path, ui_zip_path)` returns a web-app manifest, as YAML.

## DNAs and apps (`happscaffold.dna`, `happscaffold.app`)

`DnaFileTree` and `AppFileTree` pair a file tree with a manifest found
inside it. Use `get_or_choose(file_tree, name)` to get one:

- If you pass a name, the manifest with that name is used. If none matches, `DnaNotFoundError` or `AppManifestNotFoundError` is raised.
- If you pass `None` and the tree holds one manifest, that one is used.
- If you pass `None` and the tree holds several, you are asked on the terminal to pick one.

`DnaFileTree.from_dna_manifest_path` reads the DNA manifest at a known
path.

`happscaffold.dna` builds zome entries:

- `new_integrity_zome_manifest`
- `new_coordinator_zome_manifest`

Their wasm location comes from `zome_wasm_location`. It is the path
relative to the DNA workdir under `target/wasm32-unknown-unknown/release/`.

Add the entries to the DNA manifest with these functions:

- `add_integrity_zome_to_manifest`
- `add_coordinator_zome_to_manifest`

Both write the manifest back into the tree and return a fresh
`DnaFileTree`. Adding a duplicate zome raises `ZomeAlreadyExistsError`.
Adding a coordinator zome that depends on a missing integrity zome raises
`IntegrityZomeNotFoundError`.

`happscaffold.app` provides these functions:

- `find_app_manifests` and `read_app_manifest` read app manifests.
- `bundled_dnas_paths` lists the folders of the DNA bundles an app refers to.
- `get_or_choose_app_manifest_path_for_dna_manifest` finds the app that bundles a given DNA. If no app does, it raises `NoAppsFoundForDnaError`.

## Collections (`happscaffold.collection`)

`CollectionType.parse` accepts `"global"` or `"by-author"`. Any other
value raises `InvalidCollectionTypeError`.

`choose_collection_type()` asks the user on the terminal which of the two
to use.

## Cargo workspaces (`happscaffold.cargo`)

This module edits the root `Cargo.toml` of the tree. Edits go through
`tomlkit`, so formatting is kept.

- `workspace_cargo_toml()` returns the starting file.
- `add_workspace_external_dependency` and `add_workspace_path_dependency` return a copy of the tree with an entry added to `[workspace.dependencies]`.
- `get_workspace_cargo_toml` parses the root `Cargo.toml`.
- `get_workspace_members` returns the members list.

If the file lacks the expected tables, these functions raise
`MalformedFileError`.

Three functions run `cargo metadata` on the `Cargo.toml` in the current
working directory:

- `exec_metadata` returns the parsed JSON. It raises `CargoMetadataError` on failure.
- `get_workspace_packages_locations` returns the workspace packages' manifest paths. It returns `None` if cargo fails.
- `workspace_package_path` returns the manifest path of one named package.

## Nix (`happscaffold.nix`)

- `flake_nix()` returns a `flake.nix` file.
- `add_extra_experimental_features(home)` makes sure `~/.config/nix/nix.conf` enables `flakes` and `nix-command`.
- `setup_nix_developer_environment(directory)` does the same for the current user, then runs `nix flake update` in `directory`. It raises `NixSetupError` on Windows or when nix fails.

`cargo` and `nix` are started as external programs. They must be
installed for the functions that call them.

## Reserved words

`happscaffold.reserved_words.check_for_reserved_words(word)` raises
`InvalidReservedWordError` when the word matches a reserved name, in any
case style. Reserved names include `type`, `fn`, `hdk` and `EntryHash`.

## Errors

Every failure raises a subclass of `happscaffold.errors.ScaffoldError`.

## What this package does not do

This package is a library. It does not include:

- a command-line program
- template rendering
- generation of zome, entry-type, link-type or collection code

It also never runs `git`. Those steps are left to the code that uses these
building blocks.