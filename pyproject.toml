[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kornshell"
version = "0.1.0"
description = "Korn shell building blocks: emacs-style line editing, key bindings, completion helpers and built-in command logic"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "ksh", "korn", "line-editing", "emacs", "completion", "umask", "echo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kornshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
