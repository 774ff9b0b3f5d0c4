"""fxledger CLI commands."""
