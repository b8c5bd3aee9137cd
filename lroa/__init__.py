# coding: utf-8

"""Generator for route origin authorization tables from DN42 style route
objects."""

__version__ = "1.0"
