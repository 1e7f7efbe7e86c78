"""Command line tools: one per Google API, each printing a JSON envelope."""
