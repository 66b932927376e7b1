[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "issuescout"
version = "0.1.0"
description = "Rank open-source issues worth contributing to"
requires-python = ">=3.10"
dependencies = []
keywords = ["issues", "open-source", "contributing", "ranking", "triage", "ledger"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Bug Tracking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
issuescout = "issuescout.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["issuescout"]

[tool.hatch.build.targets.sdist]
include = ["issuescout", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
