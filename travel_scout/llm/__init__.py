"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send the search instructions and context to Groq and return the raw reply.
- Surface timeouts and API failures as ServiceError.
"""
