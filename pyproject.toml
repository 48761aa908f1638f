[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hullserver"
version = "0.1.0"
description = "Convex hull computation with batch tools and TCP command servers sharing a point set"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "convex hull",
    "graham scan",
    "geometry",
    "polygon area",
    "tcp server",
    "reactor",
    "proactor",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hullserver-area = "hullserver.batch:main_area"
hullserver-batch = "hullserver.batch:main"
hullserver-serve = "hullserver.servers:main"
hullserver-threaded = "hullserver.threaded:main"
hullserver-monitored = "hullserver.monitored:main"

[tool.hatch.build.targets.wheel]
packages = ["hullserver"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
