from enum import Enum

# Длина расширения вместе с точкой ('.png', '.raw')
EXTENSION_LENGTH = 4

# Поддерживаемые расширения источников высот
PNG_EXTENSION = '.png'
RAW_EXTENSION = '.raw'

# Делители нормализации
PACKED_HEIGHT_SCALE = 65536.0
PACKED_HIGH_WEIGHT = 256.0
# 1/256: вес младшего канала в упакованной 24-битной высоте
PACKED_LOW_WEIGHT = 0.00390625
RAW16_MAX = 65535.0
RAW8_MAX = 255.0

# Максимальное 24-битное значение упакованной высоты
PACKED_24BIT_MAX = (1 << 24) - 1

# Допустимые разрядности RAW-файлов
RAW_BITS_8 = 8
RAW_BITS_16 = 16

# Минимальные размеры RAW-сетки по каждой оси
RAW_MIN_DIMENSION = 2

# Число каналов в поддерживаемых PNG
PIXEL_CHANNELS_RGB = 3
PIXEL_CHANNELS_RGBA = 4

# Тип хранения высот (экономия памяти против float64)
HEIGHT_DTYPE = 'float32'

# Диапазон высот по умолчанию (нормализованные значения)
DEFAULT_MIN_HEIGHT = 0.0
DEFAULT_MAX_HEIGHT = 1.0

# Порог размера сетки, после которого логируем использование памяти
MEMORY_LOG_THRESHOLD_MB = 64.0

# Каталог профилей загрузки (переопределяется HEIGHTFIELD_PROFILES_DIR)
PROFILES_DIR = 'configs/profiles'
PROFILES_DIR_ENV = 'HEIGHTFIELD_PROFILES_DIR'

# Формат логов CLI
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class SourceFormat(str, Enum):
    """Формат источника карты высот, определяемый по расширению файла."""

    PNG = 'png'
    RAW = 'raw'


EXTENSION_TO_FORMAT: dict[str, SourceFormat] = {
    PNG_EXTENSION: SourceFormat.PNG,
    RAW_EXTENSION: SourceFormat.RAW,
}
