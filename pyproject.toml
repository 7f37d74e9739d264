[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubeshark"
version = "0.1.0"
description = "Client-side helpers for an API traffic analyzer for Kubernetes: version checks, pod and namespace selection, filtered watches, tar copy, cluster config, proxy paths, Helm references and a hub client."
requires-python = ">=3.10"
keywords = [
    "kubernetes",
    "traffic",
    "monitoring",
    "proxy",
    "helm",
    "pcap",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "requests>=2.28",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["kubeshark"]

[tool.hatch.build.targets.sdist]
include = [
    "kubeshark",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
