"""FastAPI application exposing document assembly over HTTP."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..assembler import DocumentAssembler
from ..config import ConfigError, FilterConfig, TestDocConfig, validate_precision
from ..logging import get_logger
from ..models import ClassRecord, MethodRecord

logger = get_logger("service")


class MethodPayload(BaseModel):
    name: str
    body_text: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class ClassPayload(BaseModel):
    class_name: str
    package_name: str = ""
    methods: List[MethodPayload] = Field(default_factory=list)


class FilterPayload(BaseModel):
    include_methods: List[str] = Field(default_factory=list)
    exclude_methods: List[str] = Field(default_factory=list)
    include_tags: List[str] = Field(default_factory=list)
    exclude_tags: List[str] = Field(default_factory=list)


class DocumentRequest(BaseModel):
    classes: List[ClassPayload]
    filters: Optional[FilterPayload] = None
    title: Optional[str] = None
    header: Optional[str] = None
    dark_mode: Optional[bool] = None
    display_tags_chart: Optional[bool] = None
    percentage_precision: Optional[int] = None


class HealthResponse(BaseModel):
    status: str


def _default_config() -> TestDocConfig:
    return TestDocConfig()


def _effective_config(base: TestDocConfig, payload: DocumentRequest) -> TestDocConfig:
    filters = base.filters
    if payload.filters is not None:
        filters = filters.merged(FilterConfig.build(**payload.filters.model_dump()))

    overrides: Dict[str, Any] = {
        key: value
        for key, value in (
            ("title", payload.title),
            ("header", payload.header),
            ("dark_mode", payload.dark_mode),
            ("display_tags_chart", payload.display_tags_chart),
        )
        if value is not None
    }
    precision = base.percentage_precision
    if payload.percentage_precision is not None:
        precision = validate_precision(payload.percentage_precision)

    return replace(
        base,
        filters=filters,
        presentation=replace(base.presentation, **overrides),
        percentage_precision=precision,
    )


def _to_records(payload: DocumentRequest) -> List[ClassRecord]:
    return [
        ClassRecord(
            class_name=item.class_name,
            package_name=item.package_name,
            methods=tuple(
                MethodRecord(name=method.name, body_text=method.body_text, tags=tuple(method.tags))
                for method in item.methods
            ),
        )
        for item in payload.classes
    ]


def create_app(config_factory: Callable[[], TestDocConfig] = _default_config) -> FastAPI:
    """Create the FastAPI application serving document models."""

    app = FastAPI(title="testdoc service", version="1.0.0")

    async def get_config() -> TestDocConfig:
        return config_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/documents")
    def build_document(
        payload: DocumentRequest,
        config: TestDocConfig = Depends(get_config),
    ) -> Dict[str, Any]:
        effective = _effective_config(config, payload)
        model = DocumentAssembler(effective).assemble(_to_records(payload))
        logger.debug("Served document model with %d methods", model.total_methods)
        return model.to_dict()

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
