"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build the summary prompt from user preferences and the top scored properties.
- Call Groq to write a short natural-language summary of the matches.
- Leave fallback handling to the recommendation engine: summarizers raise on failure.
"""
