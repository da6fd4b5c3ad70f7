[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "strikegame"
version = "0.1.0"
description = "A networked five-action strike game played between a TCP client and server"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "tcp", "socket", "client", "server", "rock-paper-scissors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
strikegame-server = "strikegame.server:main"
strikegame-client = "strikegame.client:main"
strikegame-echo = "strikegame.echo_server:main"

[tool.hatch.build.targets.wheel]
packages = ["strikegame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
