#!/usr/bin/env python3
"""
ShopperzStop Runner
===================

Run the storefront API.

Usage:
    python run_app.py                    # Development mode with auto-reload (default)
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys

def print_banner():
    """Print application banner"""
    banner = """
╔═══════════════════════════════════════════════════════╗
║                 🛍  ShopperzStop API                   ║
╚═══════════════════════════════════════════════════════╝
    """
    print(banner)

def check_environment():
    """Report configuration sources"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using defaults")

    if os.getenv("OPENAI_API_KEY"):
        print("✅ OPENAI_API_KEY set, AI descriptions and chat enabled")
    else:
        print("⚠️  OPENAI_API_KEY not set, AI features will return fallback messages")

def run_app(host="0.0.0.0", port=8000, reload=True):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting ShopperzStop on {host}:{port}")
    print(f"🔗 Access at: http://localhost:{port}")
    print(f"📖 API Docs: http://localhost:{port}/api/docs")
    print("\n" + "="*50)

    import uvicorn
    uvicorn.run(
        "shopperz.main:app",
        host=host,
        port=port,
        reload=reload,
        # The store is a single in-process writer; never run more than one worker
        workers=1,
        log_level="info"
    )

def main():
    parser = argparse.ArgumentParser(
        description="ShopperzStop Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_app.py                      # Development server on port 8000
  python run_app.py --port 8001          # Custom port
  python run_app.py --mode prod          # Production mode
        """
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    print_banner()
    check_environment()

    if args.mode == "prod":
        os.environ.setdefault("ENVIRONMENT", "production")

    reload = not args.no_reload and args.mode != "prod"
    run_app(args.host, args.port, reload)

    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
