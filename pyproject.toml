[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rowifi"
version = "0.1.0"
description = "Data models, bind evaluation and Roblox API access for a Discord verification bot"
requires-python = ">=3.10"
keywords = ["discord", "roblox", "verification", "bot", "binds", "redis", "cbor"]
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
    "Framework :: AsyncIO",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "cbor2>=5.4",
    "httpx>=0.24",
    "redis>=4.5",
    "pymongo>=4.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[tool.hatch.build.targets.wheel]
packages = ["rowifi"]

[tool.hatch.build.targets.sdist]
include = ["rowifi", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
