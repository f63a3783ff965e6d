#!/usr/bin/env python3
"""
Local development server for ATS Match Backend.

Reads host, port and debug from the same ATSMATCH_* settings the app uses.
"""
import os
import sys


def main():
    sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

    import uvicorn

    from app.config import get_settings

    settings = get_settings()
    reload = settings.debug or "--reload" in sys.argv[1:]

    print(f"\n🚀 Starting {settings.app_name} v{settings.app_version}")
    print(f"   http://{settings.host}:{settings.port}  (reload={reload})")
    print(f"\n📚 API Documentation: http://localhost:{settings.port}/docs")
    print(f"❤️  Health Check: http://localhost:{settings.port}/api/health\n")

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
