# run_server.py
"""
Run the trading journal API

Usage:
    python run_server.py [--host HOST] [--port PORT] [--reload]
"""
import argparse

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the Trading Journal API")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    args = parser.parse_args()

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
