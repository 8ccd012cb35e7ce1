"""HTTP server for the PDF join service using FastAPI."""

import asyncio
import base64
import json
import logging
import time
from typing import Dict, Any, List, Optional, Tuple

from fastapi import FastAPI, HTTPException, UploadFile, File, Form
from fastapi.responses import Response
from pydantic import BaseModel, Field

from . import __version__
from .backends.base import Backend
from .backends.page_join import PageJoinBackend
from .config import get_config
from .exceptions import JoinError

logging.basicConfig(
    level=get_config().log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Pydantic models
class DocumentPayload(BaseModel):
    """One source PDF in a base64 request."""
    name: str = Field("", description="File name used in reports")
    data: str = Field(..., description="Base64-encoded PDF data")


class ProcessRequest(BaseModel):
    """Request body for POST /process (base64 mode)."""
    operation: str = Field(..., description="Operation: list, validate, join")
    documents: List[DocumentPayload] = Field(..., description="Source PDFs in index order")
    options: Dict[str, str] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Response body for GET /health."""
    status: str = "ok"
    operations: List[str]
    version: str = __version__


def _error_detail(code: str, message: str) -> Dict[str, Any]:
    return {"success": False, "error": {"code": code, "message": message}}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="PDF Join Service",
        description="Assemble PDFs from pages of several source documents, with dry-run validation",
        version=__version__,
    )

    backends: List[Backend] = [
        PageJoinBackend(),
    ]

    supported_operations = set()
    for backend in backends:
        if hasattr(backend, "SUPPORTED_OPERATIONS"):
            supported_operations.update(backend.SUPPORTED_OPERATIONS)

    def find_backend(operation: str) -> Optional[Backend]:
        for backend in backends:
            if backend.supports(operation):
                return backend
        return None

    def check_size(name: str, data: bytes) -> None:
        config = get_config()
        max_bytes = config.join.max_file_size_mb * 1024 * 1024
        if len(data) > max_bytes:
            raise HTTPException(
                status_code=400,
                detail=_error_detail(
                    "FILE_TOO_LARGE",
                    f"File '{name}' exceeds {config.join.max_file_size_mb}MB limit",
                ),
            )

    async def read_uploads(files: List[UploadFile]) -> List[Tuple[str, bytes]]:
        documents = []
        for index, upload in enumerate(files):
            name = upload.filename or f"document-{index}.pdf"
            data = await upload.read()
            check_size(name, data)
            documents.append((name, data))
        return documents

    async def run_operation(
        operation: str,
        documents: List[Tuple[str, bytes]],
        options: Dict[str, str],
    ) -> Tuple[bytes, str, Dict[str, Any]]:
        backend = find_backend(operation)
        if backend is None:
            raise HTTPException(
                status_code=400,
                detail={
                    "success": False,
                    "error": {
                        "code": "INVALID_OPERATION",
                        "message": f"Operation '{operation}' is not supported",
                        "details": {"supported_operations": sorted(list(supported_operations))},
                    }
                }
            )

        try:
            return await asyncio.to_thread(backend.process, documents, operation, options)
        except JoinError as e:
            logger.info(f"{operation} rejected: {e}")
            raise HTTPException(status_code=400, detail={"success": False, "error": e.to_dict()})
        except Exception as e:
            logger.exception(f"{operation} failed: {e}")
            raise HTTPException(
                status_code=500,
                detail=_error_detail("PROCESSING_FAILED", str(e)),
            )

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="ok",
            operations=sorted(list(supported_operations)),
            version=__version__,
        )

    @app.get("/ready")
    async def readiness_check():
        return {"status": "ready"}

    @app.post("/api/list")
    async def list_documents(files: List[UploadFile] = File(...)):
        """Report the page count of every uploaded PDF."""
        start_time = time.time()
        documents = await read_uploads(files)
        logger.info(f"List request: {len(documents)} documents")

        output_data, _, metadata = await run_operation("list", documents, {})
        return {
            "success": True,
            "result": json.loads(output_data.decode("utf-8")),
            "metadata": metadata,
            "processing_time_ms": int((time.time() - start_time) * 1000),
        }

    @app.post("/api/validate")
    async def validate_join_list(
        files: List[UploadFile] = File(...),
        join: str = Form(...),
        join_format: str = Form(""),
    ):
        """Check a join list against the uploaded PDFs without building anything."""
        start_time = time.time()
        documents = await read_uploads(files)
        logger.info(f"Validate request: {len(documents)} documents")

        output_data, _, metadata = await run_operation(
            "validate", documents, {"join": join, "join_format": join_format}
        )
        return {
            "success": True,
            "result": json.loads(output_data.decode("utf-8")),
            "metadata": metadata,
            "processing_time_ms": int((time.time() - start_time) * 1000),
        }

    @app.post("/api/join")
    async def join_documents(
        files: List[UploadFile] = File(...),
        join: str = Form(...),
        join_format: str = Form(""),
        output_name: str = Form("output.pdf"),
    ):
        """Build the joined PDF and return it as the response body."""
        start_time = time.time()
        documents = await read_uploads(files)
        logger.info(f"Join request: {len(documents)} documents")

        output_data, _, metadata = await run_operation(
            "join", documents, {"join": join, "join_format": join_format}
        )
        processing_time_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Join completed in {processing_time_ms}ms: output_size={len(output_data)} bytes")

        return Response(
            content=output_data,
            media_type="application/pdf",
            headers={
                "Content-Disposition": f'attachment; filename="{output_name}"',
                "X-Join-Entries": metadata["entries"],
            },
        )

    @app.post("/process")
    async def process_documents(request: ProcessRequest) -> Dict[str, Any]:
        """Run an operation on base64-encoded PDFs (compatible with pyworker pattern)."""
        start_time = time.time()

        documents = []
        for index, payload in enumerate(request.documents):
            name = payload.name or f"document-{index}.pdf"
            try:
                data = base64.b64decode(payload.data, validate=True)
            except Exception as e:
                raise HTTPException(
                    status_code=400,
                    detail=_error_detail("INVALID_BASE64", f"Document '{name}': {e}"),
                )
            check_size(name, data)
            documents.append((name, data))

        output_data, output_format, metadata = await run_operation(
            request.operation, documents, request.options
        )
        processing_time_ms = int((time.time() - start_time) * 1000)

        if output_format == "json":
            return {
                "success": True,
                "result": json.loads(output_data.decode("utf-8")),
                "format": "application/json",
                "metadata": {str(k): str(v) for k, v in metadata.items()},
                "processing_time_ms": processing_time_ms,
            }
        return {
            "success": True,
            "result": base64.b64encode(output_data).decode("ascii"),
            "format": "application/pdf",
            "metadata": {str(k): str(v) for k, v in metadata.items()},
            "processing_time_ms": processing_time_ms,
        }

    return app


# Create app instance for uvicorn
app = create_app()


def run_server():
    """Run the HTTP server."""
    import uvicorn
    config = get_config()
    logger.info(f"Starting HTTP server on {config.server.host}:{config.server.port}")
    uvicorn.run(
        "pdfjoin.http_server:app",
        host=config.server.host,
        port=config.server.port,
        log_level="info",
    )


if __name__ == "__main__":
    run_server()
