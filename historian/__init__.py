"""The Historian.

A small MCP server that helps a user keep up with recent CSS changes. It
exposes three kinds of named capabilities to an orchestrating client:

- **Guidance**: fixed instructions describing how the client should sequence
  the other capabilities.
- **Resource**: the persisted knowledge document recording which CSS concepts
  the user already knows.
- **Actions**: read and update that document, and fetch recent CSS news from
  an external summarization provider.

Subpackages
-----------

- ``historian.capabilities``: capability model, input contracts, the registry
  and the builtin capability set.
- ``historian.knowledge``: the document schema and its file-backed store.
- ``historian.info_provider``: the outbound provider client.
- ``historian.server``: settings and the MCP stdio adapter.
"""

__version__ = "0.0.1"
