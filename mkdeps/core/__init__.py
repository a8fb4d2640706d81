# SPDX-License-Identifier: MIT
"""Include scanning and prerequisite resolution."""
