"""Runtime settings for extraction, status signalling and storage."""

import os
from pathlib import Path
from typing import Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for settings loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field

DEFAULT_STORAGE_KEY = "activecampaign_data"
DEFAULT_READY_TIMEOUT_MS = 5000


class ExtractorSettings(BaseModel):
    """Settings shared by the page context, the store context and the CLI."""

    storage_key: str = Field(default=DEFAULT_STORAGE_KEY, description="Key the dataset is persisted under")
    db_path: Path = Field(default=Path("ac_extractor.db"), description="SQLite file backing the key-value store")

    ready_timeout_ms: int = Field(
        default=DEFAULT_READY_TIMEOUT_MS,
        gt=0,
        description="How long an extractor waits for its containers to appear",
    )
    retry_delay_ms: int = Field(
        default=500,
        ge=0,
        description="Settle delay between re-injecting page logic and retrying",
    )

    success_duration_ms: int = 3000
    error_duration_ms: int = 5000

    supported_hosts: list[str] = Field(
        default_factory=lambda: ["activecampaign.com", "activehosted.com"],
        description="Host fragments an extraction may be triggered on",
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ExtractorSettings":
        """Load settings from YAML. Supports nested (extraction/indicator/storage) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        extraction = data.get("extraction", {})
        indicator = data.get("indicator", {})
        storage = data.get("storage", {})

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict = {}
        for key, section in (
            ("ready_timeout_ms", extraction),
            ("retry_delay_ms", extraction),
            ("supported_hosts", extraction),
            ("success_duration_ms", indicator),
            ("error_duration_ms", indicator),
            ("storage_key", storage),
            ("db_path", storage),
        ):
            value = _get(key, section, data)
            if value is not None:
                flat[key] = value
        return cls.model_validate(flat)

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "ExtractorSettings":
        """Load from YAML when a path is given, then apply environment overrides."""
        settings = cls.from_yaml(path) if path else cls()
        return settings.with_env_overrides()

    def with_env_overrides(self) -> "ExtractorSettings":
        """Return a copy with AC_EXTRACTOR_* environment variables applied."""
        update: dict = {}
        env_db = os.environ.get("AC_EXTRACTOR_DB")
        if env_db:
            update["db_path"] = Path(env_db)
        env_timeout = os.environ.get("AC_EXTRACTOR_TIMEOUT_MS")
        if env_timeout:
            try:
                update["ready_timeout_ms"] = int(env_timeout)
            except ValueError:
                raise ValueError(f"AC_EXTRACTOR_TIMEOUT_MS must be an integer, got {env_timeout!r}")
        env_hosts = os.environ.get("AC_EXTRACTOR_HOSTS")
        if env_hosts:
            update["supported_hosts"] = [h.strip() for h in env_hosts.split(",") if h.strip()]
        if not update:
            return self
        return self.model_validate({**self.model_dump(), **update})
