"""Package entry point for ``python -m term2regex``.

WHY: Users run the converter as ``python -m term2regex < terms.txt``
for CLI mode, or ``python -m term2regex --serve`` to start the HTTP
service.

RULES:
- ``--serve`` starts the FastAPI app under uvicorn
- Without ``--serve``, falls through to the CLI
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from term2regex.server.app import run_api
        run_api()
    else:
        from term2regex.cli import main
        main()
