"""
Mock integration clients.

These clients return fake (but realistic) gateway envelopes without calling
any external API. They are used only when INTEGRATIONS_MODE is "mock" or
"test"; a missing SECRET_KEY never selects them.

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients should return data shaped according to src/integrations/contracts/*
"""
