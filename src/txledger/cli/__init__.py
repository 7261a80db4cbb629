"""Command line interface for txledger."""
