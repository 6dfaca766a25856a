# === FILE: site_crawler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

DEFAULT_USER_AGENT = "BootCrawler/1.0"


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Стартовый (seed) URL обхода.")
    max_concurrency: int = Field(5, ge=1, description="Макс. число одновременных запросов.")
    max_pages: int = Field(100, description="Макс. число различных страниц (минимум 1).")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @field_validator("max_pages", mode="before")
    @classmethod
    def _coerce_max_pages(cls, v: Any) -> Any:
        # неположительное значение поднимается до 1, а не отклоняется
        if isinstance(v, bool):
            return v
        try:
            return max(1, int(v))
        except (TypeError, ValueError):
            return v

    @property
    def seed_url(self) -> str:
        return str(self.base_url)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Читает YAML или JSON (если путь задан), накладывает overrides
    (значения None игнорируются) и возвращает проверенный CrawlerConfig.
    При отсутствии файла конфига бросает FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is not None:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    data.update({key: value for key, value in overrides.items() if value is not None})
    return CrawlerConfig(**data)
