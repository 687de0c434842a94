"""The `eventsite` command-line interface."""
