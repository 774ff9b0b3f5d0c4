"""Command line interface for fxledger."""
