[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "tinywebserv"
version = "0.1.0"
description = "A small HTTP/1.1 static file server with route-based method checks and a simple upload endpoint"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "static", "webserver", "config"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
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
tinywebserv = "tinywebserv.cli:main"

[tool.setuptools.packages.find]
include = ["tinywebserv*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
