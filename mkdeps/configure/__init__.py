# SPDX-License-Identifier: MIT
"""Configuration loading for mkdeps."""
