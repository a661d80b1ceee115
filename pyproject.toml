[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osdrills"
version = "0.1.0"
description = "Operating-systems exercises: a thread-safe keyed queue with a workload driver, and a terminal panel of threaded counters"
requires-python = ">=3.10"
dependencies = []
keywords = ["threads", "concurrency", "queue", "operating systems", "exercises"]
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
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osdrills-counters = "osdrills.counters:main"
osdrills-workload = "osdrills.workload:main"

[tool.hatch.build.targets.wheel]
packages = ["osdrills"]

[tool.pytest.ini_options]
addopts = "-ra"
