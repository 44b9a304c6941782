from typing import Literal, Optional

from pydantic import BaseModel, HttpUrl

RenderMode = Literal["auto", "http", "browser"]


class CrawlRequest(BaseModel):
    url: HttpUrl
    render_mode: Optional[RenderMode] = None
    """Rendering strategy for the target URL.

    ``"auto"``
        Plain HTTP fetch first; re-render with a headless browser when the
        response is a JavaScript SPA shell (framework markers + thin content).

    ``"http"``
        Always use the lightweight HTTP fetcher.

    ``"browser"``
        Always render with headless Chromium.

    When omitted, the ``RENDER_MODE`` setting applies.
    """


class AnalyzeRequest(CrawlRequest):
    pass
