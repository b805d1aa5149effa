"""Test suite for the polyexpr package."""
