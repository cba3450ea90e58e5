[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apigen"
version = "0.1.0"
description = "Binding and validation of request parameters driven by field tags, plus a small binary record unpacker"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "api", "validation", "parameters", "binary", "unpack"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
apigen-binpack = "apigen.binpack:main"

[tool.hatch.build.targets.wheel]
packages = ["apigen"]

[tool.pytest.ini_options]
addopts = "-ra"
