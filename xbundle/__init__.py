"""Maven version ranges, POM parsing and dependency resolution, and PRI section reading and writing."""

__version__ = "0.1.0"