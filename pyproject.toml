[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "progdemos"
version = "0.1.0"
description = "Small, self-contained programs and libraries: an expression evaluator, bit-vector sets, HTML link tools, concurrent pipelines, memoization, network services and more."
requires-python = ">=3.10"
keywords = [
    "expression-evaluator",
    "intset",
    "html",
    "crawler",
    "memoization",
    "concurrency",
    "pipeline",
    "disk-usage",
    "thumbnail",
    "tcp-server",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "html5lib",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
progdemos-surface = "progdemos.surface:main"
progdemos-tempflag = "progdemos.tempconv:main"
progdemos-sorting = "progdemos.sorting:main"
progdemos-toposort = "progdemos.toposort:main"
progdemos-findlinks = "progdemos.links:main"
progdemos-outline = "progdemos.outline:main"
progdemos-title = "progdemos.title:main"
progdemos-fetch = "progdemos.fetch:main"
progdemos-store = "progdemos.store:main"
progdemos-xmlselect = "progdemos.xmlselect:main"
progdemos-du = "progdemos.du:main"
progdemos-thumbnail = "progdemos.thumbnail:main"
progdemos-chat = "progdemos.chat:main"
progdemos-clock = "progdemos.clock:main"
progdemos-reverb = "progdemos.reverb:main"
progdemos-netcat = "progdemos.netcat:main"
progdemos-pipeline = "progdemos.pipeline:main"
progdemos-countdown = "progdemos.countdown:main"
progdemos-spinner = "progdemos.spinner:main"
progdemos-crawl = "progdemos.crawl:main"

[tool.hatch.build.targets.wheel]
packages = ["progdemos"]

[tool.hatch.build.targets.sdist]
include = ["progdemos", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
