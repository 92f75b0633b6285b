"""
WorkSphere AI assistant: keyword intent routing over the WorkSphere data store.
"""
from .api import create_app
from .config import AssistantConfig
from .config_loader import load_config_from_env
from .service import AssistantService

__all__ = ["AssistantConfig", "AssistantService", "create_app", "load_config_from_env"]
