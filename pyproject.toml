[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parley"
version = "0.1.0"
description = "Rich text style resolution: font stacks, font settings, ranged and tree-structured styles"
requires-python = ">=3.10"
dependencies = []
keywords = ["text", "layout", "fonts", "styles", "typography", "css"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Processing :: Fonts",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["parley"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
