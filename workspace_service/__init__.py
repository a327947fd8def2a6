"""Workspace Service.

Servicio de workspace del composer: parsing de fragmentos del lenguaje
(sentencias, expresiones, listas de parámetros, ...) envolviéndolos en un
programa completo y extrayendo el subárbol correspondiente.

Arquitectura:
    - api/: FastAPI endpoints (HTTP layer)
    - domain/: Modelos del dominio (AST, tipos de fragmento, resultados)
    - infrastructure/: Dependencias externas (Lark parser, file I/O)
    - services/: Lógica de negocio y orquestación
    - schemas.py: Request/Response models (Pydantic)

Usage:
    from workspace_service.main import app
    # uvicorn workspace_service.main:app --reload
"""

__version__ = "1.0.0"
