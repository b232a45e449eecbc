"""
BinaryDesk – Application DTO: User Settings
=============================================
Actualización parcial de preferencias del usuario.

Solo las claves conocidas son aceptadas (extra="forbid"); una clave
desconocida o un valor fuera de rango rechaza TODA la actualización.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from binarydesk.domain.exceptions.domain_errors import InvalidSettingsError


class UserSettingsUpdate(BaseModel):
    """Claves editables de la cuenta. Todas opcionales."""

    model_config = ConfigDict(extra="forbid")

    risk_level: Optional[Literal["low", "medium", "high"]] = None
    max_trade_size: Optional[float] = Field(default=None, gt=0, le=5_000)
    daily_loss_limit: Optional[float] = Field(default=None, ge=0)
    auto_trade: Optional[bool] = None
    sound_enabled: Optional[bool] = None

    @classmethod
    def parse_partial(cls, partial: Dict[str, Any]) -> "UserSettingsUpdate":
        """
        Valida un dict parcial.

        Raises:
            InvalidSettingsError con los errores de pydantic en "details".
        """
        try:
            return cls.model_validate(partial)
        except PydanticValidationError as exc:
            errors = [
                {
                    "field": ".".join(str(p) for p in err["loc"]),
                    "message": err["msg"],
                }
                for err in exc.errors()
            ]
            raise InvalidSettingsError(
                "Configuración de usuario inválida", errors=errors
            ) from exc

    def changes(self) -> Dict[str, Any]:
        """Solo los campos enviados explícitamente."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
