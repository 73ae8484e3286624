# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the ys command-line tool.

This package resolves the effective configuration of a YARN cluster before a
job is submitted to it or a client attaches to it. It merges a base
configuration, the session properties file left behind by a previously
started session, and command-line options into one immutable configuration,
and derives the cluster specification (memory of the job manager and task
managers, slots per task manager) and the cluster identity from it.
"""

from .ys import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "properties",
    "resolve",
]
