[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prismagen"
version = "0.1.0"
description = "DMMF document model, generator AST and engine binary fetcher for a Prisma client code generator"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["prisma", "dmmf", "code-generation", "orm", "schema"]
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["prismagen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
