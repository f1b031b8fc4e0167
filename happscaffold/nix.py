"""The nix development environment of a scaffolded app."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Union

from .errors import NixSetupError

PathLike = Union[str, "os.PathLike[str]"]

HOLOCHAIN_NIX_VERSION = "0_1"
EXTRA_EXPERIMENTAL_FEATURES_LINE = "extra-experimental-features = flakes nix-command"


def flake_nix() -> str:
    """Return the contents of the app's flake.nix."""
    version = HOLOCHAIN_NIX_VERSION
    return f"""{{
  description = "Template for Holochain app development";

  inputs = {{
    versions.url  = "github:holochain/holochain?dir=versions/{version}";

    holochain-flake.url = "github:holochain/holochain";
    holochain-flake.inputs.versions.follows = "versions";

    nixpkgs.follows = "holochain-flake/nixpkgs";
    flake-parts.follows = "holochain-flake/flake-parts";
  }};

  outputs = inputs:
    inputs.flake-parts.lib.mkFlake
      {{
        inherit inputs;
      }}
      {{
        systems = builtins.attrNames inputs.holochain-flake.devShells;
        perSystem =
          {{ inputs'
          , config
          , pkgs
          , system
          , ...
          }}: {{
            devShells.default = pkgs.mkShell {{
              inputsFrom = [ inputs'.holochain-flake.devShells.holonix ];
              packages = [
                pkgs.nodejs-18_x
                # more packages go here
              ];
            }};
          }};
      }};
}}"""


def _home_dir() -> Optional[Path]:
    try:
        return Path.home()
    except RuntimeError:
        return None


def setup_nix_developer_environment(directory: PathLike) -> None:
    """Enable flakes for the user and run `nix flake update` in ``directory``."""
    if sys.platform == "win32":
        raise NixSetupError("Windows doesn't support nix")

    print("Setting up nix development environment...")

    add_extra_experimental_features(_home_dir())

    completed = subprocess.run(["nix", "flake", "update"], cwd=directory, check=False)
    if completed.returncode != 0:
        raise NixSetupError("")


def add_extra_experimental_features(home: Optional[PathLike]) -> None:
    """Make sure ~/.config/nix/nix.conf enables flakes and nix-command."""
    if home is None:
        raise NixSetupError("Config dir doesn't exist")

    nix_conf_dir = Path(home) / ".config" / "nix"
    nix_conf_dir.mkdir(parents=True, exist_ok=True)

    nix_conf_path = nix_conf_dir / "nix.conf"
    try:
        contents = nix_conf_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        contents = None
    if contents is not None and EXTRA_EXPERIMENTAL_FEATURES_LINE in contents:
        return

    try:
        handle = nix_conf_path.open("a", encoding="utf-8")
    except OSError:
        print("Warning: could not write extra-experimental-features to nix.conf")
        return
    with handle:
        handle.write(EXTRA_EXPERIMENTAL_FEATURES_LINE)