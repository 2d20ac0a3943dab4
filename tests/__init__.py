"""
Tests for questree

This package contains tests for:
- Entry validation and position numbering
- The traversal controller and the replay resolver
- Answer logs, definitions and structural checks
- The runner, the CLI view and the command line
"""
