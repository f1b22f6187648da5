[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "powerai"
version = "1.0.27"
description = "Helpers for AI agent services: registry keys and agent URLs, string, date, file, JSON path, AES and cache utilities"
requires-python = ">=3.10"
keywords = ["agent", "registry", "json-path", "utilities", "datetime", "csv", "aes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "cryptography",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["powerai"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
