from pydantic import BaseModel, field_validator, model_validator

from shared.constants import (
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MIN_HEIGHT,
    EXTENSION_LENGTH,
    EXTENSION_TO_FORMAT,
    SourceFormat,
)


class HeightfieldSettings(BaseModel):
    """Параметры загрузки карты высот, хранимые в профиле."""

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    # Путь к PNG или RAW файлу
    path: str

    # Размеры сетки (только для RAW, для PNG берутся из изображения)
    width: int = 0
    height: int = 0

    # Диапазон высот, в который отображаются нормализованные значения
    min_height: float = DEFAULT_MIN_HEIGHT
    max_height: float = DEFAULT_MAX_HEIGHT

    @field_validator('width', 'height')
    @classmethod
    def validate_dimensions(cls, v: int) -> int:
        if v < 0:
            msg = 'Размер сетки не может быть отрицательным'
            raise ValueError(msg)
        return v

    @model_validator(mode='after')
    def validate_height_range(self) -> 'HeightfieldSettings':
        if self.max_height < self.min_height:
            msg = 'max_height должен быть не меньше min_height'
            raise ValueError(msg)
        return self

    @property
    def source_format(self) -> SourceFormat | None:
        """Format implied by the path extension, or None if unrecognized."""
        if len(self.path) <= EXTENSION_LENGTH:
            return None
        return EXTENSION_TO_FORMAT.get(self.path[-EXTENSION_LENGTH:].lower())
