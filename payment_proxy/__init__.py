"""
Payment Relay for the KryptoGO Studio API

This service sits between browser/SDK clients and the upstream payment API,
injecting API credentials, validating payment requests, relaying responses,
and logging payment status webhooks.
"""

__version__ = "1.0.0"
