#!/usr/bin/env python3
"""
Backend startup wrapper for the streak tracker.
"""
import sys
import traceback

import uvicorn

from streak_tracker.core.config import settings


def main() -> int:
    print(f"[Backend] Starting Streak Tracker on http://{settings.HOST}:{settings.PORT}")
    print(f"[Backend] Android emulator: http://10.0.2.2:{settings.PORT}")
    print(f"[Backend] iOS simulator:    http://localhost:{settings.PORT}")
    print("[Backend] Press CTRL+C to stop")
    try:
        uvicorn.run(
            "streak_tracker.main:app",
            host=settings.HOST,
            port=settings.PORT,
            reload=False,
            log_level=settings.LOG_LEVEL.lower(),
            access_log=True,
        )
    except KeyboardInterrupt:
        print("\n[Backend] Shutting down...")
        return 0
    except Exception as e:
        print(f"[ERROR] {type(e).__name__}: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
