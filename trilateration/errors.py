class TopSecretError(Exception):
    """Базовая ошибка слоя вызова (декодирование позиции и сообщения)."""
    exit_code = 2

class InsufficientData(TopSecretError):
    """Не хватает данных спутников, либо они геометрически несовместны."""

    def __init__(self, message: str = "not enough satellite data", failure=None):
        super().__init__(message)
        self.failure = failure  # ошибка решателя, если была

class MessageUndecodable(TopSecretError):
    def __init__(self, failure=None):
        super().__init__("could not decode message")
        self.failure = failure

class UnknownSatellite(TopSecretError, KeyError):
    def __init__(self, name: str):
        super().__init__(f"satellite not found: {name}")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]

class InvalidRequest(TopSecretError):
    exit_code = 1
