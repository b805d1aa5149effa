"""Tests for polyexpr.core."""
