"""FastAPI interface for beatmap submissions."""

from uuid import uuid4

from fastapi import FastAPI, File, Header, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .utils.config import resolve_ingest_policy
from .interfaces.api_handlers import UploadError, process_uploaded_bytes, submission_sink

app = FastAPI(title="Beatmap Ingest API", version="0.1.0")


@app.get("/health")
def health() -> dict[str, str]:
    """Health check endpoint."""

    return {"status": "ok"}


@app.post("/upload")
async def upload(
    beatmap: UploadFile = File(..., description="Zipped beatmap archive"),
    x_correlation_id: str | None = Header(default=None, alias="X-Correlation-Id"),
) -> JSONResponse:
    """Validate an uploaded beatmap and hand it to the persistence collaborator."""

    correlation_id = x_correlation_id or str(uuid4())
    raw_bytes = await beatmap.read()

    try:
        result = await run_in_threadpool(process_uploaded_bytes, raw_bytes, correlation_id)
    except UploadError as error:
        raise HTTPException(
            status_code=error.http_status,
            detail=error.as_dict(),
            headers={"X-Correlation-Id": correlation_id},
        ) from error

    handoff = submission_sink.accept(result)

    payload = result.parsed.as_dict()
    payload["handoff"] = {
        "status": handoff.status,
        "archiveKey": handoff.archive_key,
        "coverKey": handoff.cover_key,
    }
    response = JSONResponse(content=payload)
    response.headers["X-Correlation-Id"] = correlation_id
    response.headers["X-Ingest-Policy-Id"] = resolve_ingest_policy().policy_id
    return response
