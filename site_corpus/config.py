# === FILE: site_corpus/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера SiteCorpus.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_PRIORITY_KEYWORDS: Tuple[str, ...] = (
    "about",
    "service",
    "product",
    "career",
    "job",
    "team",
    "contact",
    "technology",
    "industry",
    "solution",
    "portfolio",
    "mission",
    "vision",
    "who-we-are",
    "what-we-do",
    "insight",
)


class CrawlerConfig(BaseModel):
    """Параметры одного обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(1500, ge=1, description="Жесткий лимит по числу страниц.")
    navigation_timeout: float = Field(10.0, gt=0, description="Таймаут навигации на страницу (секунд).")
    settle_delay: float = Field(0.4, ge=0, description="Пауза после загрузки DOM (секунд).")
    hover_settle_delay: float = Field(0.1, ge=0, description="Пауза после наведения на меню (секунд).")
    max_chars: int = Field(200_000, ge=1, description="Максимальная длина итогового текста.")
    priority_keywords: Tuple[str, ...] = Field(
        DEFAULT_PRIORITY_KEYWORDS, description="Подстроки URL, поднимающие страницу в очереди."
    )
    headless: bool = Field(True, description="Запускать браузер без окна.")
    browser_args: Tuple[str, ...] = Field(
        ("--no-sandbox", "--disable-setuid-sandbox"), description="Аргументы запуска Chromium."
    )
    user_agent: Optional[str] = Field(None, min_length=1, description="Заголовок User-Agent.")

    @field_validator("priority_keywords", mode="after")
    def _lowercase_keywords(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        cleaned = tuple(k.strip().lower() for k in v if k.strip())
        if not cleaned:
            raise ValueError("priority_keywords must not be empty")
        return cleaned

    @property
    def navigation_timeout_ms(self) -> float:
        return self.navigation_timeout * 1000


_DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    Явно указанный, но отсутствующий файл приводит к FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
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

    return CrawlerConfig(**data)
