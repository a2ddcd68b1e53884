"""
EmploiRapide - API server entry point.

Usage:
    python main.py [--host 0.0.0.0] [--port 8000] [--reload]
"""

import argparse

from dotenv import load_dotenv

load_dotenv()


def main():
    """Run the API server."""
    parser = argparse.ArgumentParser(description="EmploiRapide API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    import uvicorn

    print("EmploiRapide API")
    print("=" * 40)
    print(f"Listening on http://{args.host}:{args.port}")

    uvicorn.run("emploirapide.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
