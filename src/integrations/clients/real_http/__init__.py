"""
Real HTTP integration clients.

These clients talk to the payment gateway over HTTP:
- Flutterwave v3 /charges (mobile money and card)
- Flutterwave v3 /transactions/{id}/verify

Important:
- Must implement the same interface as the mock clients
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in src/api/dependencies.py only.
"""
