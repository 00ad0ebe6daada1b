"""Multi-provider AI chat API."""
