[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "weatherboard"
version = "0.1.0"
description = "A small web dashboard that shows multi-day weather forecasts for a configured list of places."
requires-python = ">=3.11"
keywords = ["weather", "forecast", "dashboard", "starlette", "jinja2"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "httpx>=0.27",
    "jinja2>=3.1",
    "starlette>=0.37",
    "uvicorn>=0.29",
]

[project.optional-dependencies]
test = [
    "pytest>=8.0",
    "pytest-asyncio>=0.23",
    "respx>=0.21",
    "freezegun>=1.4",
]

[project.scripts]
weatherboard = "weatherboard.app:main"

[tool.hatch.build.targets.wheel]
packages = ["weatherboard"]

[tool.hatch.build.targets.sdist]
include = ["weatherboard", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
