[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "happscaffold"
version = "0.1.0"
description = "In-memory file trees, manifests and workspace helpers for scaffolding hApps, DNAs and zomes"
requires-python = ">=3.10"
keywords = ["scaffolding", "code-generation", "holochain", "manifest", "file-tree", "yaml", "cargo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "pyyaml",
    "tomlkit",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["happscaffold"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
