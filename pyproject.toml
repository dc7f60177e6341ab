[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fcache"
version = "0.1.0"
description = "Thread-safe memoization for expensive one-argument functions, with in-flight deduplication, TTL expiry and LRU capacity limits."
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "memoization", "lru", "ttl", "deduplication", "concurrency"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fcache-example = "fcache.example:main"

[tool.hatch.build.targets.wheel]
packages = ["fcache"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
