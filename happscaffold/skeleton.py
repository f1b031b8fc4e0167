"""Files every scaffolded app starts with."""

from __future__ import annotations

from typing import Optional

from .manifest import AppManifest, WebAppManifest

_GITIGNORE = """
/node_modules/
/dist/
/target/
/.cargo/
*.happ
*.webhapp
*.zip
*.dna
.hc*
.hc
.running
"""


def gitignore() -> str:
    """Return the contents of the app's .gitignore."""
    return _GITIGNORE


def empty_happ_manifest(app_name: str, app_description: Optional[str]) -> str:
    """Return the YAML of an app manifest with no roles."""
    return AppManifest(name=app_name, description=app_description, roles=[]).to_yaml()


def web_happ_manifest(app_name: str, happ_path: str, ui_zip_path: str) -> str:
    """Return the YAML of a web app manifest bundling the happ and the UI."""
    return WebAppManifest(name=app_name, happ_manifest=happ_path, ui=ui_zip_path).to_yaml()