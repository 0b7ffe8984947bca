"""Ledger and billing engine for home milk delivery rounds."""
