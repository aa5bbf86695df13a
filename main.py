# main.py
"""
Entry Point — dealscout

Purpose
-------
Run one request through the query-to-deal pipeline from the command line, or
serve the HTTP endpoint:
  1) Load settings from DEALSCOUT_* environment variables.
  2) Either answer a single query (JSON envelope on stdout) or start uvicorn.

Usage
-----
    python main.py "condos in Austin under 300k"
    python main.py "what is a 1031 exchange" --provider mock
    python main.py --serve --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import json

from dealscout.config import load_settings
from dealscout.core.errors import ConfigurationError
from dealscout.core.logs import configure_logging
from dealscout.orchestrator import DealPipeline


def main() -> int:
    p = argparse.ArgumentParser(description="Find investment-worthy listings from a natural-language request.")
    p.add_argument("query", nargs="?", default=None, help="Request text, e.g. 'houses in Miami'")
    p.add_argument("--provider", choices=("openai", "mock"), default=None, help="Override DEALSCOUT_LLM_PROVIDER")
    p.add_argument("--serve", action="store_true", help="Run the HTTP endpoint instead of a single query")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--debug", action="store_true", help="DEBUG logging + rotating file log")
    args = p.parse_args()

    configure_logging(debug=True if args.debug else None)

    try:
        settings = load_settings(llm_provider=args.provider)
    except ConfigurationError as e:
        print(json.dumps({"error": str(e)}))
        return 2

    pipeline = DealPipeline(settings)

    if args.serve:
        import uvicorn

        from dealscout.api import create_app

        uvicorn.run(create_app(pipeline), host=args.host, port=args.port)
        return 0

    if not args.query or not args.query.strip():
        p.error("a query is required unless --serve is given")

    status, payload = pipeline.handle(args.query.strip())
    print(json.dumps(payload, indent=2))
    return 0 if status < 400 else 1


if __name__ == "__main__":
    raise SystemExit(main())
