[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcquery"
version = "0.1.0"
description = "Query a Minecraft Java Edition server for its status and online players"
requires-python = ">=3.10"
keywords = ["minecraft", "server", "status", "query", "protocol", "varint"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mc-query = "mcquery.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mcquery"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
