"""
Security helpers for outbound integration payloads.

Card data is encrypted here before it is placed in a gateway request; nothing
in this package logs or stores plaintext.
"""
