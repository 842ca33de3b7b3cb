"""
governance_core.api.__main__

`python -m governance_core.api` serves the HTTP surface with uvicorn on
`GOVCORE_API_HOST`:`GOVCORE_API_PORT` (or `PORT`).
"""

from __future__ import annotations

import uvicorn

from governance_core.api.app import create_app
from governance_core.observability.logging import get_logger
from governance_core.settings import get_settings

log = get_logger(__name__)


def main() -> None:
    settings = get_settings()
    app = create_app(settings=settings)
    log.info("serving", host=settings.api_host, port=settings.api_port)

    # RequestContextMiddleware already writes one `http_request` line per call.
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None, access_log=False)


if __name__ == "__main__":
    main()
