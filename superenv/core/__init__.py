# SPDX-License-Identifier: MIT
"""Core data types: path lists, dependencies, flag strings, environments."""
