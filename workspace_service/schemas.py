"""Esquemas de entrada/salida del workspace service.

Define los modelos de petición y respuesta para el endpoint `/fragment`,
con los mismos nombres de campo que usa el editor (`expectedNodeType`,
`source`).

Utiliza Pydantic para validación automática y serialización JSON.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .domain.results import FragmentError, FragmentResult, FragmentWarning


# MODELOS DE PETICIÓN

class FragmentReq(BaseModel):
    """
    Modelo de solicitud para el endpoint `/fragment`.

    Atributos:
        expected_node_type (str): etiqueta del tipo de fragmento
                                  ("statement", "expression", ...).
        source (str): texto del fragmento.
    """
    model_config = ConfigDict(populate_by_name=True)

    expected_node_type: str = Field(alias="expectedNodeType")
    source: str


# MODELOS DE RESPUESTA

class FragmentResp(BaseModel):
    """
    Respuesta del endpoint `/fragment`.

    Atributos:
        ok (Optional[Dict[str, Any]]): nodo extraído en caso de éxito.
        error (Optional[FragmentError]): error estructurado en caso de fallo.
        warnings (List[FragmentWarning]): advertencias no fatales.
    """
    ok: Optional[Dict[str, Any]] = None
    error: Optional[FragmentError] = None
    warnings: List[FragmentWarning] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: FragmentResult) -> "FragmentResp":
        return cls.model_validate(result.to_payload())
