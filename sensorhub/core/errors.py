"""
Erros de domínio.

Os serviços levantam estas exceções; a camada HTTP (main.py) traduz cada uma
para o status correspondente.
"""


class SensorHubError(Exception):
    """Base de todos os erros de domínio."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ConstraintViolation(SensorHubError):
    """Chave única duplicada, FK inexistente ou escrita em linha imutável."""

    status_code = 409


class AccessDenied(SensorHubError):
    status_code = 403


class MalformedInput(SensorHubError):
    """Valor inválido para um enum (tier, tipo de dispositivo, role)."""

    status_code = 422


class NotFound(SensorHubError):
    status_code = 404
