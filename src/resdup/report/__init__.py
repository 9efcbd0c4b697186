"""Human-readable output for scan results.

This package contains:
- messages: Duplicate diagnostics, registry dump lines and the final summary sentence
"""
