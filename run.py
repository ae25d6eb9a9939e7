#!/usr/bin/env python3
"""Simple runner script for Media Resolver."""

import sys


def main():
    # Parse simple args
    args = sys.argv[1:]
    if "--help" in args or "-h" in args:
        print("""
Media Resolver - social media post metadata API

Usage:
    python run.py [options]

Options:
    --host HOST     Host to bind to (default: from config)
    --port PORT     Server port (default: from config)
    --debug         Log at debug level
    -h, --help      Show this help

Examples:
    python run.py
    python run.py --port 3000
    APP_ENV=development python run.py --debug
""")
        return
    
    host = None
    port = None
    for i, arg in enumerate(args):
        if arg == "--host" and i + 1 < len(args):
            host = args[i + 1]
        elif arg == "--port" and i + 1 < len(args):
            port = int(args[i + 1])
    debug = "--debug" in args
    
    # Import and run
    try:
        from media_resolver.api import run_server
        from media_resolver.config import load_settings
        from media_resolver.utils.log import setup_logging
    except ImportError as e:
        print(f"Failed to import media_resolver: {e}")
        print("\nInstall with:")
        print("  pip install -e .")
        sys.exit(1)
    
    settings = load_settings()
    setup_logging("DEBUG" if debug else settings.logging.level)
    
    server_url = f"http://{host or settings.server.host}:{port or settings.server.port}"
    print(f"""
╔══════════════════════════════════════════════════╗
║       Media Resolver v{settings.app.version:<26}║
╠══════════════════════════════════════════════════╣
║  Environment: {settings.app.environment:<35}║
║  Server: {server_url:<40}║
╚══════════════════════════════════════════════════╝
""")
    
    run_server(settings, host=host, port=port, debug=debug)


if __name__ == "__main__":
    main()
