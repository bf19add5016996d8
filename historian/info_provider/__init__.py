"""Provider integrations used by the capability handlers.

- ``info_provider.openrouter``: chat-completions client for the external
  update summarization provider.

Provider concerns stay out of the registry so a deployment can swap the
upstream without touching dispatch.
"""
