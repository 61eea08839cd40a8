"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the recommendation prompt from rating history and the movie catalog.
- Call the Groq chat-completion endpoint once per request, without retries.
- Translate rate-limit, quota and other upstream failures into service errors.
"""
