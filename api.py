"""
Heading Case Linter — FastAPI Server
====================================

RESTful API for sentence-case checks on headings and Markdown documents.

Endpoints:
    POST /validate          Validate a single heading or front-matter block
    POST /lint              Lint a Markdown document sent as JSON
    POST /lint/file         Upload a Markdown file for linting
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, UploadFile
from pydantic import BaseModel, Field

from heading_case import __version__
from heading_case.models import HeadingNode, LintReport, Violation
from heading_case.pipeline import HeadingCaseLinter

load_dotenv()


# ─── Application Lifespan (build the allow-list once) ───────────────

_linter: HeadingCaseLinter | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the linter (and its read-only allow-list) on startup."""
    global _linter  # noqa: PLW0603
    _linter = HeadingCaseLinter()
    yield
    _linter = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Heading Case Linter API",
    description=(
        "Sentence-case checks for Markdown headings and front-matter titles, "
        "with an allow-list for proper nouns and technical terms and special "
        "handling for numbered headings."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class ValidateRequest(BaseModel):
    """Request body for the /validate endpoint."""

    text: str = Field(
        ...,
        description="Plain text of one heading, or the body of a front-matter block.",
        json_schema_extra={"example": "Getting Started With the API"},
    )


class ViolationOut(BaseModel):
    """API-facing violation. The location is reported as a heading node, if any."""

    message: str
    code: str
    severity: str
    location: Optional[HeadingNode] = None
    details: dict = Field(default_factory=dict)


class ValidateResponse(BaseModel):
    """Violations for a single heading."""

    text: str
    is_clean: bool
    violations: list[ViolationOut]

    model_config = {"json_schema_extra": {"example": {
        "text": "Getting Started With the API",
        "is_clean": False,
        "violations": [
            {
                "message": (
                    "Only the first word of a sentence-case heading may be capitalized "
                    "(unless it's a proper noun or technical term): "
                    "\"Started\" in \"Getting Started With the API\""
                ),
                "code": "INTERIOR_WORD_CAPITALIZED",
                "severity": "WARNING",
                "location": None,
                "details": {"word": "Started"},
            }
        ],
    }}}


class LintRequest(BaseModel):
    """Request body for the /lint endpoint."""

    markdown: str = Field(..., description="Full Markdown or MDX document text.")
    source: str = Field("<request>", description="Label echoed back in the report.")


class LintResponse(BaseModel):
    """Structured lint report returned by the API."""

    source: str
    is_clean: bool
    headings_checked: int
    violation_count: int
    content_hash: str = Field(description="SHA-256 hash of the submitted document")
    violations: list[ViolationOut]


class HealthResponse(BaseModel):
    status: str
    version: str
    allowed_words: int


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_linter() -> HeadingCaseLinter:
    if _linter is None:
        raise HTTPException(status_code=503, detail="Linter not initialised")
    return _linter


def _violation_out(violation: Violation) -> ViolationOut:
    location = violation.location if isinstance(violation.location, HeadingNode) else None
    return ViolationOut(
        message=violation.message,
        code=violation.code,
        severity=violation.severity.value,
        location=location,
        details=violation.details,
    )


def _build_response(report: LintReport) -> LintResponse:
    """Convert the internal LintReport to the API response schema."""
    return LintResponse(
        source=report.source,
        is_clean=report.is_clean,
        headings_checked=report.headings_checked,
        violation_count=len(report.violations),
        content_hash=report.content_hash,
        violations=[_violation_out(v) for v in report.violations],
    )


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/validate",
    summary="Validate a single heading",
    tags=["Validation"],
    responses={503: {"description": "Linter not yet initialised"}},
)
def validate_heading(request: ValidateRequest) -> ValidateResponse:
    """Check one heading string (or front-matter block) for sentence case.

    Empty and all-caps headings always pass.
    """
    linter = _get_linter()
    violations = linter.validator.validate(request.text)
    return ValidateResponse(
        text=request.text,
        is_clean=not violations,
        violations=[_violation_out(v) for v in violations],
    )


@app.post(
    "/lint",
    summary="Lint a Markdown document",
    tags=["Validation"],
    responses={503: {"description": "Linter not yet initialised"}},
)
def lint_document(request: LintRequest) -> LintResponse:
    """Extract every heading from the document and validate each one.

    Returns a structured report with:
    - **is_clean**: `true` if no heading violates sentence case
    - **violations**: each with the heading node (line, depth, kind, text)
    - **content_hash**: SHA-256 of the input for audit trail
    """
    linter = _get_linter()
    report = linter.lint(request.markdown, source=request.source)
    return _build_response(report)


@app.post(
    "/lint/file",
    summary="Lint an uploaded Markdown file",
    tags=["Validation"],
    responses={
        413: {"description": "File too large (max 1 MB)"},
        400: {"description": "File is not valid UTF-8 text"},
        503: {"description": "Linter not yet initialised"},
    },
)
async def lint_document_file(file: UploadFile) -> LintResponse:
    """Upload a `.md` / `.mdx` file for linting.

    Accepts any text file up to 1 MB.
    """
    if file.size and file.size > 1_048_576:
        raise HTTPException(status_code=413, detail="File too large (max 1 MB)")

    content = await file.read()
    try:
        markdown = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="File must be UTF-8 encoded text")

    linter = _get_linter()
    report = await asyncio.to_thread(linter.lint, markdown, file.filename or "<upload>")
    return _build_response(report)


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Linter not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and configuration info."""
    linter = _get_linter()
    return HealthResponse(
        status="healthy",
        version=__version__,
        allowed_words=len(linter.allow_list),
    )

