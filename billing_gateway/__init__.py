"""Billing gateway: a thin FastAPI front for Stripe plans and subscriptions."""
