from __future__ import annotations

from fastapi import FastAPI, HTTPException

from .config import APP_NAME, APP_VERSION
from .latex_writer import LatexWriteError
from .logging_utils import get_logger
from .render import html_to_latex
from .schemas import ConvertRequest, ConvertResponse, HealthResponse
from .web_tools import WebToolError, fetch_html

log = get_logger(__name__)

app = FastAPI(
    title=APP_NAME,
    description="Convert styled HTML fragments into escaped LaTeX",
    version=APP_VERSION,
)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(name=APP_NAME, version=APP_VERSION)


@app.post("/convert", response_model=ConvertResponse, response_model_exclude_none=True)
async def convert(req: ConvertRequest) -> ConvertResponse:
    html = req.html
    if req.url is not None:
        try:
            fetched = await fetch_html(req.url)
        except WebToolError as e:
            log.warning("Fetch for conversion failed: %s", e)
            raise HTTPException(status_code=502, detail=str(e)) from e
        html = fetched.html

    try:
        latex = html_to_latex(html or "")
    except LatexWriteError as e:
        log.error("Conversion failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ConvertResponse(latex=latex, bytes=len(latex.encode("utf-8")), source_url=req.url)
