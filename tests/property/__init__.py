"""Property-based tests (hypothesis) for the quickprop engine."""
