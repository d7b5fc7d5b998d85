[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "afina"
version = "0.1.0"
description = "A small memcached-style key-value cache server with a size-bounded LRU storage backend"
requires-python = ">=3.10"
dependencies = []
keywords = ["memcached", "cache", "lru", "key-value", "server"]
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
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["afina"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
