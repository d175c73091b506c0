[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "capchat"
version = "0.1.0"
description = "Structured JSON logging with level events, a service startup skeleton and a log pretty-printer"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "structured logging", "json", "log formatting", "events"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
capchat-cap = "capchat.cap:main"
capchat-logfmt = "capchat.logfmt:main"

[tool.hatch.build.targets.wheel]
packages = ["capchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
