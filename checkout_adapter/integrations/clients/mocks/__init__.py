"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- No processor account is available for local development
- We want to test the HTTP surface end-to-end without network access

Important:
- Mock clients must follow the SAME CheckoutProcessor interface as real clients.
- Mock clients should return data shaped according to checkout_adapter/integrations/contracts/*
"""
