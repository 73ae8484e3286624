# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Properties and structured data of ys.

This module collects the value types ys operates on: memory sizes, durations,
application IDs, typed configuration options, the immutable `Configuration`,
session records, and the derived cluster specification.
"""
