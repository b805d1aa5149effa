"""Expression trees, expansion and polynomial terms."""
