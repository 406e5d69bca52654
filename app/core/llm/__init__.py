"""LLM integration layer.

- One Azure OpenAI chat-completion call per request; no retries, no caching.
- Configured from environment variables via `app.core.settings`.
- Prompts and completions are never logged.
"""
