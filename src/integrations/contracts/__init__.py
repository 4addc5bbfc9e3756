"""
Contracts (data models).

This folder defines the request/response shapes for the gateway integration:
- checkout request and encrypted card field
- gateway result returned by every client
- transaction status values and terminal-state rules

Why this exists:
- Ensures consistent data structures across mock and real clients
- Makes integration safer: endpoints rely on stable models, not on ad-hoc dicts

Both mock and real HTTP clients should use these contracts.
"""
