"""
Real HTTP integration clients.

These clients talk to the live payment processor (Stripe) with the secret
key from Settings.

Important:
- Must implement the same CheckoutProcessor interface as the mock clients
- Must return data shaped according to checkout_adapter/integrations/contracts/*

Switching:
The selection of mock vs real clients happens in checkout_adapter/api/app.py only.
"""
