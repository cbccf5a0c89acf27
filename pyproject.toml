[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "intsoc"
version = "0.1.0"
description = "Check, fix and track Internet-Drafts and RFC documents across IETF, IRTF, IAB, Independent, IANA and RFC Editor streams"
requires-python = ">=3.10"
keywords = ["ietf", "internet-draft", "rfc", "rfcxml", "idnits", "datatracker", "iana"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Internet",
]
dependencies = [
    "httpx>=0.24",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "respx>=0.20",
]

[project.scripts]
intsoc = "intsoc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["intsoc"]

[tool.hatch.build.targets.sdist]
include = ["intsoc", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
check_untyped_defs = true
