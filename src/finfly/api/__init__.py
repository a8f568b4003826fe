"""API module for Finfly.

API layer:
- Validates inputs, reads/writes DB through domain modules
- Verifies bearer tokens on protected routes
- Forbidden: business rules beyond request shaping
"""
