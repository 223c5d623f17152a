[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "auraekit"
version = "0.1.0"
description = "Field validation, client configuration, X.509 identity details and TypeScript client generation for Aurae tools"
requires-python = ">=3.11"
dependencies = [
    "cryptography",
]
keywords = ["aurae", "validation", "configuration", "x509", "typescript", "codegen"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
auraekit-tsgen = "auraekit.tsgen:main"

[tool.hatch.build.targets.wheel]
packages = ["auraekit"]

[tool.hatch.build.targets.sdist]
include = ["auraekit", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
