[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plumbline"
version = "0.1.0"
description = "Deterministic AI Codebase Maturity Model (ACMM) assessment of source repositories"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "acmm",
    "maturity",
    "ai-readiness",
    "repository-analysis",
    "sarif",
    "quality-assurance",
]
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
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plumbline"]

[tool.hatch.build.targets.sdist]
include = ["plumbline", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
