"""Building blocks for scaffolding hApps: in-memory file trees, manifests, DNAs, apps, cargo and nix helpers."""

__version__ = "0.1.0"