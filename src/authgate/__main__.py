"""authgate entrypoint.

Run with:
  python -m authgate
"""

import os
import uvicorn

def main() -> None:
    host = os.getenv("AUTHGATE_HOST", "0.0.0.0")
    port = int(os.getenv("AUTHGATE_PORT", "8000"))
    reload = os.getenv("AUTHGATE_RELOAD", "false").lower() in {"1", "true", "yes", "y"}
    uvicorn.run("authgate.app:create_app", factory=True, host=host, port=port, reload=reload)

if __name__ == "__main__":
    main()
