from .config import KnowledgeStoreConfig, OpenRouterConfig, Settings, get_settings

__all__ = ["KnowledgeStoreConfig", "OpenRouterConfig", "Settings", "get_settings"]
