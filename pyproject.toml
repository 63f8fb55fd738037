[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskkit"
version = "0.1.0"
description = "Status-line components, a file-test filter, a menu matcher and a tiling window-management model for minimal desktops"
requires-python = ">=3.10"
dependencies = []
keywords = ["status bar", "tiling", "window manager", "menu", "desktop", "stest"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
deskkit-stest = "deskkit.stest:main"
deskkit-status = "deskkit.status:main"

[tool.hatch.build.targets.wheel]
packages = ["deskkit"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
