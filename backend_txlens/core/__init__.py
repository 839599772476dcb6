"""
Core utilities: exceptions and request correlation helpers shared across
the ledger, market, llm, explainer and API layers.
"""
