"""LLM client and Langfuse tracing helpers."""
