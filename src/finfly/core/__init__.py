"""Accounts, security and period helpers."""
