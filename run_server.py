# run_server.py
"""
Launcher for the packaged (PyInstaller) build and for `python run_server.py`.

Boot failures go through the regular log files; hard crashes inside native
drivers are dumped by faulthandler into backend_crash.log next to the exe.
"""
import faulthandler
import logging
import sys
from pathlib import Path

BASE_DIR = Path(sys.executable).resolve().parent if getattr(sys, "frozen", False) else Path(__file__).resolve().parent
CRASH_FILE = BASE_DIR / "backend_crash.log"

logger = logging.getLogger("jewelbook.server")


def main() -> int:
    from jewelbook.core.logging_config import setup_logging

    setup_logging("server")

    with open(CRASH_FILE, "a", encoding="utf-8") as crash_file:
        faulthandler.enable(crash_file)
        try:
            import uvicorn

            # app import after logging is ready, so import errors are captured too
            from jewelbook.core.config import SERVER_HOST, SERVER_PORT
            from main import app

            logger.info("Starting server on %s:%s (frozen=%s)", SERVER_HOST, SERVER_PORT, getattr(sys, "frozen", False))
            uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT, reload=False, log_level="info")
        except Exception:
            logger.exception("Server failed to start")
            if getattr(sys, "frozen", False):
                input("\nPress Enter to exit...")  # keep the console window open
            return 1
        finally:
            faulthandler.disable()

    return 0


if __name__ == "__main__":
    sys.exit(main())
