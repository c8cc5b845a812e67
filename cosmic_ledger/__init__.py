"""Cosmic ledger: shared-ledger balance engine for personal and team finances."""
