"""HTTP service exposing the measurement engine."""
