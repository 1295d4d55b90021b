"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    analysis_model: str = "claude-haiku-4-5-20251001"
    chat_model: str = "claude-sonnet-4-5-20250929"
    autocomplete_model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 1
    timeout: int = 60

    def __post_init__(self) -> None:
        if not 1 <= self.max_retries <= 5:
            raise ValueError(f"max_retries must be between 1 and 5, got {self.max_retries}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be at least 1 second, got {self.timeout}")


@dataclass(frozen=True)
class EditorConfig:
    autocomplete_idle_seconds: float = 1.0
    autocomplete_min_chars: int = 20
    analysis_debounce_seconds: float = 2.0
    analysis_min_chars: int = 50

    def __post_init__(self) -> None:
        if self.autocomplete_idle_seconds < 0:
            raise ValueError("autocomplete_idle_seconds must not be negative")
        if self.analysis_debounce_seconds < 0:
            raise ValueError("analysis_debounce_seconds must not be negative")


@dataclass(frozen=True)
class StorageConfig:
    db_path: str = "~/.acadewrite/drafts.db"
    draft_key: str = "acade_draft_html"

    @property
    def resolved_db_path(self) -> Path:
        return Path(self.db_path).expanduser()


@dataclass(frozen=True)
class ExportConfig:
    basename: str = "manuscript"


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        editor=EditorConfig(**raw.get("editor", {})),
        storage=StorageConfig(**raw.get("storage", {})),
        export=ExportConfig(**raw.get("export", {})),
    )
