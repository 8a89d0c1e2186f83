[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tikvkit"
version = "0.1.0"
description = "Client-side building blocks for a region-partitioned transactional key-value store: keys, ranges, key codec, backoff, region routing and PD retries"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "key-value",
    "database",
    "distributed",
    "mvcc",
    "region",
    "backoff",
    "memcomparable",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["tikvkit"]

[tool.hatch.build.targets.sdist]
include = ["tikvkit", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
files = ["tikvkit"]
