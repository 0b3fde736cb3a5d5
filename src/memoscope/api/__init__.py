"""HTTP API exposing the narrative analyzers."""
