from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:  # pragma: no cover - manual entry
    host = os.getenv("RENTNOVA_HOST", "127.0.0.1")
    port = int(os.getenv("RENTNOVA_PORT", "8000"))
    level = os.getenv("RENTNOVA_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("rentnova.app:app", host=host, port=port, log_level=level.lower())


if __name__ == "__main__":  # pragma: no cover
    main()
