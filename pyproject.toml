[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qqfun"
version = "0.1.0"
description = "Game and fun logic for group chat bots: group marriages, wordle, tarot, sign-in scores, sleep tracking and more"
requires-python = ">=3.10"
dependencies = []
keywords = ["chatbot", "qq", "wordle", "tarot", "group chat", "games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["qqfun"]

[tool.pytest.ini_options]
addopts = "-ra"
