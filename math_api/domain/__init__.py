"""Pure domain code: error taxonomy, numeric operations, tokens, credentials.

Nothing here imports FastAPI, so the rules can be unit-tested directly and
reused by the smoke runner.
"""
__all__ = ["errors", "operations", "tokens", "credentials"]
