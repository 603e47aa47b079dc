# === FILE: scriptscope/config.py ===
"""
Модуль для загрузки и валидации конфигурации ScriptScope.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_OUTPUT_DIR = Path("~/scriptscope_results")


class ScanConfig(BaseModel):
    """Конфигурация одного запуска: сеть, словарь, сохранение результатов."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("ScriptScope/1.0", min_length=1, description="Заголовок User-Agent.")
    wordlist: Optional[Path] = Field(
        None, description="Файл с чувствительными словами (по умолчанию ~/bin/WordList.txt)."
    )
    output_dir: Optional[Path] = Field(
        None, description="Каталог для результатов (по умолчанию ~/scriptscope_results)."
    )
    save_results: bool = Field(True, description="Сохранять ли результаты в файлы.")
    resolution: Literal["join", "concat"] = Field(
        "join", description="Способ превращения относительных ссылок на скрипты в абсолютные."
    )
    script_scanner: Literal["regex", "soup"] = Field(
        "regex", description="Стратегия поиска <script src> на странице."
    )

    @field_validator("wordlist", "output_dir", mode="before")
    def _empty_path_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def results_root(self) -> Path:
        """Каталог для результатов с раскрытым ``~``."""
        return (self.output_dir or DEFAULT_OUTPUT_DIR).expanduser()


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


def load_config(path: Union[str, Path, None]) -> ScanConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScanConfig.
    Без пути берёт configs/default.yaml, а если его нет, то значения по умолчанию.
    Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScanConfig()
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

    return ScanConfig(**data)
