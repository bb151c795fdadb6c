[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lightweb"
version = "0.1.0"
description = "A small asynchronous HTTP/1.1 request router with route tries, request parsing and pluggable serialization."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "router", "async", "routing", "serialization"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["lightweb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
