"""Business logic services."""

from newsdesk.services.config_loader import load_prompt_config, load_yaml

__all__ = [
    "load_yaml",
    "load_prompt_config",
]
