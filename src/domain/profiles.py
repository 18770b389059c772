import logging
import os
from pathlib import Path

import tomlkit

from domain.models import HeightfieldSettings
from shared.constants import PROFILES_DIR, PROFILES_DIR_ENV

logger = logging.getLogger(__name__)


def _profiles_dir() -> Path:
    """
    Determine profiles directory.

    1) HEIGHTFIELD_PROFILES_DIR environment variable, if set.
    2) Otherwise configs/profiles relative to the working directory.
    """
    return Path(os.getenv(PROFILES_DIR_ENV) or PROFILES_DIR)


def ensure_profiles_dir(profiles_dir: Path | None = None) -> Path:
    folder = profiles_dir or _profiles_dir()
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def list_profiles(profiles_dir: Path | None = None) -> list[str]:
    """Список имён профилей без расширения."""
    folder = ensure_profiles_dir(profiles_dir)
    return sorted(p.stem for p in folder.glob('*.toml') if p.is_file())


def profile_path(name: str, profiles_dir: Path | None = None) -> Path:
    """Путь к файлу профиля по имени."""
    return ensure_profiles_dir(profiles_dir) / f'{name}.toml'


def load_profile(name_or_path: str, profiles_dir: Path | None = None) -> HeightfieldSettings:
    """
    Загрузка и валидация профиля TOML -> HeightfieldSettings.

    Поддерживает как имя профиля (без .toml) из каталога profiles,
    так и абсолютный/относительный путь до TOML файла.
    """
    p = Path(name_or_path)
    path = (
        p
        if p.suffix.lower() == '.toml' and p.exists()
        else profile_path(name_or_path, profiles_dir)
    )
    if not path.exists():
        msg = f'Профиль не найден: {path}'
        raise FileNotFoundError(msg)
    data = tomlkit.parse(path.read_text(encoding='utf-8'))
    settings = HeightfieldSettings.model_validate(data.unwrap())
    logger.info(
        'Profile %s: path=%s size=%dx%d range=[%s, %s]',
        path.name,
        settings.path,
        settings.width,
        settings.height,
        settings.min_height,
        settings.max_height,
    )
    return settings


def save_profile(
    name: str, settings: HeightfieldSettings, profiles_dir: Path | None = None
) -> Path:
    """Сохранение профиля в TOML (без атомарности и бэкапов)."""
    path = profile_path(name, profiles_dir)
    text = tomlkit.dumps(settings.model_dump())
    path.write_text(text, encoding='utf-8')
    return path


def delete_profile(name: str, profiles_dir: Path | None = None) -> None:
    """Удаление файла профиля, если он существует."""
    path = profile_path(name, profiles_dir)
    if path.exists():
        path.unlink()
