"""Summary history server: Gemini-backed summarization with a durable JSON history."""
