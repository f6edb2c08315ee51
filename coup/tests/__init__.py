"""Tests for the Coup rule engine."""
