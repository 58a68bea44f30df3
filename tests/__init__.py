"""
Test suite for cvflow.

Unit tests for the section model, measurement oracles, the pagination engine
and orchestrator, JSON import/export and the CLI.
"""
