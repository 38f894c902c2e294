"""Quest Chat — dev launcher. Starts the API server with uvicorn."""

import argparse
import logging
import os

import uvicorn

from backend.config import get_config


def main():
    config = get_config()
    parser = argparse.ArgumentParser(description="Quest Chat dev launcher")
    parser.add_argument("--host", default=config["host"],
                        help=f"Bind address (default: {config['host']})")
    parser.add_argument("--port", type=int, default=config["port"],
                        help=f"Port (default: {config['port']})")
    parser.add_argument("--reload", action="store_true",
                        help="Restart on code changes")
    parser.add_argument("--echo", action="store_true",
                        help="Echo messages back instead of calling the LLM")
    args = parser.parse_args()

    logging.basicConfig(
        level=config["log_level"].upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.echo:
        # create_app() reads the environment when uvicorn imports the app
        os.environ["LLM_PROVIDER_FORMAT"] = "echo"

    print(f"Starting backend on http://localhost:{args.port} ...")
    uvicorn.run("backend.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
