"""
Test suite for vaultplay

Contains:
- tests/unit/          : Unit tests for math, domain, contracts, ledger,
                         vault registries, settlement games and audit
"""
