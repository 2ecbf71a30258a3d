# File: codesize/core/config/settings.py

import os
import shutil


class Settings:
    # --- Streaming ---
    # Size of each read when counting lines
    CHUNK_SIZE: int = int(os.getenv("CODESIZE_CHUNK_SIZE", "102400"))

    # --- Concurrency ---
    # Upper bound on in-flight directory/file tasks in async scans
    MAX_CONCURRENCY: int = int(os.getenv("CODESIZE_MAX_CONCURRENCY", "64"))

    # --- External Tools ---
    # Auto-detect git or use env var
    GIT_BINARY: str = os.getenv("GIT_BINARY_PATH", shutil.which("git") or "git")

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("CODESIZE_LOG_LEVEL", "WARNING").upper()


settings = Settings()
