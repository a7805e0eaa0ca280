from typing import Any, Literal, Optional
import json
import os

from pydantic import BaseModel, ConfigDict, Field
from loguru import logger

from .events import ObserverEvent


# --- Settings Models ---
class GeneralSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = True
    start_page: str = "Dashboard"
    theme: str = "default"
    min_width: int = 800
    min_height: int = 600
    log_dir: str = "logs"


class RepositorySettings(BaseModel):
    """
    Data-access settings. ``remote`` talks to the REST backend and needs
    ``base_url`` and ``api_key``; ``local`` keeps everything in a JSON file.
    """
    model_config = ConfigDict(validate_assignment=True)

    mode: Literal["remote", "local"] = "remote"
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    local_path: str = "data/bookshop.json"
    timeout: float = 10.0


class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    repository: RepositorySettings = Field(default_factory=RepositorySettings)


# --- Manager ---
class ConfigManager:
    """
    Manages application configuration with persistence and reactivity.
    """
    def __init__(self, filepath: str = "config.json"):
        self.filepath = filepath
        self._data = AppConfig()
        # Set when an existing file could not be read; the file is then left alone
        self.load_error: Optional[str] = None
        self.on_changed = ObserverEvent("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        # validate_assignment raises pydantic.ValidationError on bad values
        setattr(section_obj, key, value)
        self._save()
        self.on_changed.emit(section, key, getattr(section_obj, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                with open(self.filepath, "r", encoding="utf-8") as f:
                    raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}, using defaults: {e}")
                self.load_error = str(e)
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if self.load_error is not None:
            logger.warning(f"Not saving config: {self.filepath} could not be loaded and is kept as is")
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
