[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wirehttp"
version = "0.1.0"
description = "HTTP/1.x building blocks: MIME types, Accept negotiation, request lines, and request and response bodies"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "mime", "accept", "chunked", "content-type", "query-string"]
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

[tool.hatch.build.targets.wheel]
packages = ["wirehttp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
