"""Package entry point for ``python -m caption_sync``.

WHY: Users run the tool as ``python -m caption_sync episode.srt`` for CLI
mode, or ``python -m caption_sync --serve`` for the HTTP lookup service.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().

RULES:
- ``--serve`` starts the HTTP service (host/port from configuration)
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from caption_sync.server.app import run_api
        run_api()
    else:
        from caption_sync.cli import main
        main()
