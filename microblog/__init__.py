"""Microblog API - a small social microblogging backend."""

__version__ = "1.0.0"
