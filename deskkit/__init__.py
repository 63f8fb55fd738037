"""Status-line components and command, a file-test filter, a menu model and a tiling window-management model."""

__version__ = "0.1.0"