"""
Checkout pipeline.

Pure helpers shared by every payment endpoint:
- formatting: phone / card / expiry masking
- validation: field predicates and error collection
- payloads: gateway request construction

Nothing in this package makes network calls.
"""
