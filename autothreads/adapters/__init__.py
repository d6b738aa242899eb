"""Adapters — Discord gateway/REST and LLM classifier implementations of the ports."""
