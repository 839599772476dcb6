"""
API server package: HTTP interface over the explainer and tutor.

Handles request correlation and error shaping, and delegates to the ledger,
market-data and text-generation clients built at startup.
"""
