[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "palletsim"
version = "0.1.0"
description = "In-memory simulations of blockchain runtime modules: tokens, claims, collectibles, crowdfunds and transaction weights"
requires-python = ">=3.10"
dependencies = []
keywords = ["blockchain", "runtime", "simulation", "pallet", "tokens"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["palletsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
