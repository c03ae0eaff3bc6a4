from bookrank.infrastructure.config.config_manager import AppConfig

__all__ = ["AppConfig"]
