[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tuheap"
version = "0.1.0"
description = "A simulated free-list heap allocator with malloc, calloc, realloc and free over a byte arena"
requires-python = ">=3.10"
dependencies = []
keywords = ["allocator", "heap", "malloc", "free-list", "memory"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tuheap-demo = "tuheap.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["tuheap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
