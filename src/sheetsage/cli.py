"""Command-line interface for SheetSage."""

import argparse
import sys

import uvicorn

from .config import settings


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="SheetSage - Gemini assistant for Google Sheets"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    server_parser = subparsers.add_parser("serve", help="Start the web server")
    server_parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    server_parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    server_parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )

    subparsers.add_parser("auth", help="Authenticate with Google Sheets API")

    args = parser.parse_args()

    if args.command == "serve":
        run_server(args.host, args.port, args.reload)
    elif args.command == "auth":
        run_auth()
    else:
        parser.print_help()
        sys.exit(1)


def run_server(host: str, port: int, reload: bool):
    """Run the web server."""
    uvicorn.run(
        "sheetsage.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level=settings.log_level,
    )


def run_auth():
    """Run the Google authentication flow and cache the token."""
    from .sheets import GoogleSheetsWorkbook

    print("Authenticating with Google Sheets API...")
    try:
        workbook = GoogleSheetsWorkbook(settings.spreadsheet_id or "")
        # Accessing the service property triggers auth
        _ = workbook.service
        print("Authentication successful!")
        print(f"Token saved to {workbook.token_path}.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
