from .config import load_config, save_config, get_default_config, resolve_dtype

__all__ = ["load_config", "save_config", "get_default_config", "resolve_dtype"]
