"""
Исключения адаптивного тайлинга

Все ошибки наследуются от ValueError, поэтому CLI обрабатывает их
как некорректный ввод (код возврата 2).
"""


class TilerError(ValueError):
    """Базовая ошибка пакета"""


class CodecError(TilerError):
    """Ошибка кодирования/декодирования бинарного хеша"""


class AggregationError(TilerError):
    """Несогласованная таблица счётчиков или параметры слияния"""
