[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "squirrel"
version = "0.1.0"
description = "A small threaded HTTP server with GET routes and static file serving"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static files", "web", "routing"]
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
test = ["pytest"]

[project.scripts]
squirrel = "squirrel.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["squirrel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
