"""
Exceptions for Restockman.

All errors are RestockError subclasses with a structured code for
programmatic handling:

- ValidationError: bad input (negative threshold, malformed event)
- PersistenceError: store unreachable or read/write failed
- NotFoundError: operation referenced a nonexistent id
- ConflictError: uniqueness violation surfaced from a race
"""

from typing import Any


class RestockError(Exception):
    """
    Structured exception for restocking operations.

    Usage:
        try:
            restock.set_threshold('42', 0)
        except ValidationError as e:
            if e.code == 'INVALID_THRESHOLD':
                print(e.message)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.data!r})"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'error': type(self).__name__,
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, float, bool, type(None))) else str(v)
                for k, v in self.data.items()
            },
        }


class ValidationError(RestockError):
    """Input rejected before reaching the store."""

    _default_messages = {
        'INVALID_THRESHOLD': 'O limite deve ser um inteiro positivo',
        'INVALID_STOCK': 'O estoque deve ser um inteiro não negativo',
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser positiva)',
        'INVALID_EVENT_TYPE': 'Tipo de evento desconhecido',
        'INVALID_INTENT': 'Tipo de alteração de estoque desconhecido',
        'INVALID_POLICY': 'Política de ruptura desconhecida',
        'INVALID_DATE_RANGE': 'Data inicial posterior à data final',
        'CHANGE_MISMATCH': 'Variação não confere com estoque anterior e novo',
        'INSUFFICIENT_STOCK': 'Quantidade insuficiente no estoque',
        'IMMUTABLE_EVENT': 'Eventos de estoque são imutáveis',
    }

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)


class PersistenceError(RestockError):
    """The persistence backend failed; retryable at the UI layer."""

    _default_messages = {
        'WRITE_FAILED': 'Falha ao gravar no banco de dados',
        'READ_FAILED': 'Falha ao ler do banco de dados',
        'DEADLINE_EXCEEDED': 'Prazo da operação expirado',
    }


class NotFoundError(RestockError):
    """Referenced entity does not exist."""

    _default_messages = {
        'ALERT_NOT_FOUND': 'Alerta não encontrado',
        'PRODUCT_NOT_FOUND': 'Produto não encontrado',
    }


class ConflictError(RestockError):
    """A uniqueness constraint rejected the write."""

    _default_messages = {
        'DUPLICATE_ACTIVE_ALERT': 'Já existe um alerta ativo para este produto',
        'DUPLICATE_THRESHOLD': 'Já existe um limite para este produto',
    }
