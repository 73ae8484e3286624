# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for ys.

This module collects the foundational pieces used across the ys codebase:
tool configuration, the error hierarchy, structured logging, and small
shared helpers.
"""
